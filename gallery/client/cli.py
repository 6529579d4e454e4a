"""
Terminal client for the authors gallery.

Renders the gallery, detail and admin views with rich and drives create,
edit and delete through the same controller a graphical client would use.

Example:
    gallery list
    gallery login <token>
    GALLERY_TOKEN=<token> gallery admin
    gallery add --name "Abai" --biography "..." --image abai.jpg
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import httpx
import typer
from rich.console import Console
from rich.markup import escape

from gallery.client.api import AuthorsClient
from gallery.client.config import get_client_settings
from gallery.client.controller import GalleryController
from gallery.client.identity import IdentityWidget
from gallery.client.state import (
    EditField,
    OpenCreateForm,
    OpenEditForm,
    SelectAuthor,
    ToggleAdmin,
)
from gallery.client.views import render
from gallery.schemas.author import AuthorRead

typer_app = typer.Typer(
    name="gallery",
    help="Authors gallery - browse authors and manage them when signed in",
    add_completion=False,
)
console = Console()


@dataclass
class CliContext:
    api_url: str
    session_file: Path
    token: str | None = None


def make_http_client(api_url: str) -> httpx.Client:
    # no client-side timeout: a hung request waits
    return httpx.Client(base_url=api_url, timeout=None)


def _default_session_file() -> Path:
    return Path(typer.get_app_dir("gallery")) / "session.json"


@typer_app.callback()
def main(
    ctx: typer.Context,
    api_url: Annotated[
        str | None, typer.Option(envvar="GALLERY_API_URL", help="Base URL of the API")
    ] = None,
    session_file: Annotated[
        Path | None, typer.Option(help="Where the signed-in session is kept")
    ] = None,
    token: Annotated[
        str | None,
        typer.Option(envvar="GALLERY_TOKEN", help="Session token for this run only"),
    ] = None,
):
    ctx.obj = CliContext(
        api_url=api_url or get_client_settings().API_URL,
        session_file=session_file or _default_session_file(),
        token=token,
    )


def _start(ctx: typer.Context) -> GalleryController:
    settings = get_client_settings()
    obj: CliContext = ctx.obj
    # a --token session is not written to the session file
    identity = IdentityWidget(None if obj.token else obj.session_file)
    controller = GalleryController(
        AuthorsClient(make_http_client(obj.api_url), settings.API_PATH),
        identity,
        notice_seconds=settings.NOTICE_SECONDS,
    )
    controller.start()
    if obj.token:
        identity.open()
        try:
            identity.login(obj.token)
        except ValueError as e:
            console.print(f"[red]✗ {e}[/red]")
            raise typer.Exit(code=1)
    return controller


def _find(controller: GalleryController, author_id: str) -> AuthorRead:
    """Match a full id or a unique prefix of one."""
    matches = [a for a in controller.state.authors if str(a.id).startswith(author_id)]
    if len(matches) != 1:
        console.print(f"[red]✗ No single author matches[/red] {author_id!r}")
        raise typer.Exit(code=1)
    return matches[0]


def _require_session(controller: GalleryController) -> None:
    if controller.state.session is None:
        console.print("[red]✗ Sign in first:[/red] gallery login <token>")
        raise typer.Exit(code=1)


def _fill_form(
    controller: GalleryController,
    fields: dict[str, str | None],
    image: Path | None,
) -> None:
    for field, value in fields.items():
        if value is not None:
            controller.dispatch(EditField(field=field, value=value))
    if image is not None:
        try:
            controller.attach_image(image)
        except (OSError, ValueError) as e:
            console.print(f"[red]✗ {e}[/red]")
            raise typer.Exit(code=1)


def _submit(controller: GalleryController) -> None:
    ok = controller.submit()
    console.print(render(controller.state))
    if not ok:
        raise typer.Exit(code=1)


NameOpt = Annotated[str | None, typer.Option("--name", help="Full name")]
BirthOpt = Annotated[str | None, typer.Option("--birth-date", help="Free-form, e.g. 1845")]
DeathOpt = Annotated[str | None, typer.Option("--death-date", help="Free-form, e.g. 1904")]
BioOpt = Annotated[str | None, typer.Option("--biography", help="Biography text")]
ImageOpt = Annotated[
    Path | None, typer.Option("--image", help="Local image file, stored inline as a data URI")
]
ImageUrlOpt = Annotated[str | None, typer.Option("--image-url", help="Image URL")]


@typer_app.command(name="list")
def list_authors(ctx: typer.Context):
    """Show the gallery."""
    controller = _start(ctx)
    console.print(render(controller.state))


@typer_app.command()
def show(ctx: typer.Context, author_id: str):
    """Show one author (full id or a unique prefix)."""
    controller = _start(ctx)
    controller.dispatch(SelectAuthor(author=_find(controller, author_id)))
    console.print(render(controller.state))


@typer_app.command()
def admin(ctx: typer.Context):
    """Show the admin list with ids (requires a session)."""
    controller = _start(ctx)
    _require_session(controller)
    controller.dispatch(ToggleAdmin())
    console.print(render(controller.state))


@typer_app.command()
def login(ctx: typer.Context, token: str):
    """Store a session token issued by the identity provider."""
    obj: CliContext = ctx.obj
    try:
        user = IdentityWidget(obj.session_file).login(token)
    except ValueError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]✓[/green] Signed in as {user.email or user.sub or 'unknown user'}")


@typer_app.command()
def logout(ctx: typer.Context):
    """Forget the stored session."""
    obj: CliContext = ctx.obj
    identity = IdentityWidget(obj.session_file)
    identity.init()
    identity.logout()
    console.print("[green]✓[/green] Signed out")


@typer_app.command()
def add(
    ctx: typer.Context,
    name: NameOpt = None,
    biography: BioOpt = None,
    birth_date: BirthOpt = None,
    death_date: DeathOpt = None,
    image: ImageOpt = None,
    image_url: ImageUrlOpt = None,
):
    """Add a new author."""
    controller = _start(ctx)
    _require_session(controller)
    controller.dispatch(OpenCreateForm())
    _fill_form(
        controller,
        {
            "name": name,
            "biography": biography,
            "birth_date": birth_date,
            "death_date": death_date,
            "image_url": image_url,
        },
        image,
    )
    _submit(controller)


@typer_app.command()
def edit(
    ctx: typer.Context,
    author_id: str,
    name: NameOpt = None,
    biography: BioOpt = None,
    birth_date: BirthOpt = None,
    death_date: DeathOpt = None,
    image: ImageOpt = None,
    image_url: ImageUrlOpt = None,
):
    """Edit an author; options not given keep their current value."""
    controller = _start(ctx)
    _require_session(controller)
    controller.dispatch(OpenEditForm(author=_find(controller, author_id)))
    _fill_form(
        controller,
        {
            "name": name,
            "biography": biography,
            "birth_date": birth_date,
            "death_date": death_date,
            "image_url": image_url,
        },
        image,
    )
    _submit(controller)


@typer_app.command()
def delete(
    ctx: typer.Context,
    author_id: str,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip the confirmation")] = False,
):
    """Delete an author after confirmation."""
    controller = _start(ctx)
    _require_session(controller)
    author = _find(controller, author_id)
    deleted = controller.delete(
        author.id, confirm=lambda: yes or typer.confirm(f"Delete {author.name}?")
    )
    if not deleted:
        notice = controller.state.notice
        if notice is not None and notice.kind == "error":
            console.print(f"[red]✗ Delete failed:[/red] {escape(notice.message)}")
            raise typer.Exit(code=1)
        console.print("Cancelled")
        return
    console.print(render(controller.state))


if __name__ == "__main__":
    typer_app()
