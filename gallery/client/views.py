"""rich renderings of the three views."""

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gallery.client.images import describe_image
from gallery.client.state import GalleryState, Notice
from gallery.schemas.author import AuthorRead


def _years(author: AuthorRead) -> str:
    return f"{author.birth_date or ''} - {author.death_date or ''}"


def render_loading() -> RenderableType:
    return Text("Loading...", style="dim italic")


def render_notice(notice: Notice) -> RenderableType:
    style = "green" if notice.kind == "success" else "red"
    return Panel(Text(notice.message), border_style=style, expand=False)


def render_gallery(authors: tuple[AuthorRead, ...]) -> RenderableType:
    table = Table("Name", "Years", "Image", title="Authors", show_lines=True)
    for author in authors:
        table.add_row(
            Text(author.name, style="bold"), _years(author), describe_image(author.image_url)
        )
    return table


def render_detail(author: AuthorRead) -> RenderableType:
    body = Group(
        Text(_years(author), style="bold cyan"),
        Text(""),
        Text(author.biography, style="italic"),
        Text(""),
        Text(describe_image(author.image_url), style="dim"),
    )
    return Panel(body, title=Text(author.name, style="bold"), border_style="cyan")


def render_admin(authors: tuple[AuthorRead, ...]) -> RenderableType:
    table = Table("ID", "Name", "Image", title="Manage authors")
    for author in authors:
        table.add_row(str(author.id), Text(author.name), describe_image(author.image_url))
    return table


def render(state: GalleryState) -> RenderableType:
    """Everything currently on screen: notice first, then the active view."""
    parts: list[RenderableType] = []
    if state.notice is not None:
        parts.append(render_notice(state.notice))

    if state.loading:
        parts.append(render_loading())
    elif state.view == "admin" and state.session is not None:
        parts.append(render_admin(state.authors))
    elif state.view == "detail" and state.selected is not None:
        parts.append(render_detail(state.selected))
    else:
        parts.append(render_gallery(state.authors))
    return Group(*parts)
