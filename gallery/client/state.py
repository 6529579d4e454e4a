"""
View state of the gallery client as an immutable value plus a pure
transition function.

    state = reduce(state, SelectAuthor(author=a))

Nothing here talks to the network; `GalleryController` performs the
requests and feeds their outcome back in as actions.
"""

from collections.abc import Callable
from typing import ClassVar, Literal, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from gallery.client.identity import User
from gallery.schemas.author import AuthorRead

View = Literal["gallery", "admin", "detail"]
NoticeKind = Literal["success", "error"]


class AuthorForm(BaseModel):
    """
    Form contents as typed; `id` is empty in create mode. Optional fields
    stay None until edited, so a save does not turn NULL into "".
    """
    id: str = ""
    name: str = ""
    birth_date: str | None = None
    death_date: str | None = None
    biography: str = ""
    image_url: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    @classmethod
    def from_author(cls, author: AuthorRead) -> "AuthorForm":
        return cls(
            id=str(author.id),
            name=author.name,
            birth_date=author.birth_date,
            death_date=author.death_date,
            biography=author.biography,
            image_url=author.image_url,
        )

    def payload(self, include_id: bool) -> dict[str, str | None]:
        """Request body in wire (camelCase) names."""
        body = self.model_dump(by_alias=True)
        if not include_id:
            body.pop("id")
        return body


class FormState(BaseModel):
    open: bool = False
    is_editing: bool = False
    data: AuthorForm = AuthorForm()

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


class Notice(BaseModel):
    seq: int
    kind: NoticeKind
    message: str

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


class GalleryState(BaseModel):
    view: View = "gallery"
    authors: tuple[AuthorRead, ...] = ()
    loading: bool = True
    session: User | None = None
    selected: AuthorRead | None = None
    form: FormState = FormState()
    is_submitting: bool = False
    notice: Notice | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


# ---- Actions ----

class Action(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)


class AuthorsLoaded(Action):
    authors: tuple[AuthorRead, ...]


class LoadFinished(Action):
    pass


class SessionStarted(Action):
    user: User


class SessionEnded(Action):
    pass


class ToggleAdmin(Action):
    pass


class SelectAuthor(Action):
    author: AuthorRead


class BackToGallery(Action):
    pass


class OpenCreateForm(Action):
    pass


class OpenEditForm(Action):
    author: AuthorRead


class EditField(Action):
    field: str
    value: str


class CloseForm(Action):
    pass


class SubmitStarted(Action):
    pass


class SubmitSucceeded(Action):
    pass


class SubmitFailed(Action):
    pass


class NoticeShown(Action):
    notice: Notice


class NoticeDismissed(Action):
    seq: int


# ---- Transitions ----

A = TypeVar("A", bound=Action)
_Transition = Callable[[GalleryState, A], GalleryState]
_TRANSITIONS: dict[type[Action], _Transition[Action]] = {}


def _on(action_type: type[A]) -> Callable[[_Transition[A]], _Transition[A]]:
    def register(fn: _Transition[A]) -> _Transition[A]:
        _TRANSITIONS[action_type] = fn  # type: ignore[assignment]
        return fn
    return register


def reduce(state: GalleryState, action: Action) -> GalleryState:
    """Apply one action. Unknown actions leave the state untouched."""
    transition = _TRANSITIONS.get(type(action))
    if transition is None:
        return state
    return transition(state, action)


@_on(AuthorsLoaded)
def _authors_loaded(state: GalleryState, action: AuthorsLoaded) -> GalleryState:
    selected = state.selected
    if selected is not None:
        selected = next((a for a in action.authors if a.id == selected.id), None)
    view = state.view
    if view == "detail" and selected is None:
        view = "gallery"
    return state.model_copy(
        update={"authors": action.authors, "loading": False, "selected": selected, "view": view}
    )


@_on(LoadFinished)
def _load_finished(state: GalleryState, action: LoadFinished) -> GalleryState:
    return state.model_copy(update={"loading": False})


@_on(SessionStarted)
def _session_started(state: GalleryState, action: SessionStarted) -> GalleryState:
    return state.model_copy(update={"session": action.user})


@_on(SessionEnded)
def _session_ended(state: GalleryState, action: SessionEnded) -> GalleryState:
    # admin is unreachable without a session
    return state.model_copy(update={"session": None, "view": "gallery", "form": FormState()})


@_on(ToggleAdmin)
def _toggle_admin(state: GalleryState, action: ToggleAdmin) -> GalleryState:
    if state.session is None:
        return state
    return state.model_copy(update={"view": "gallery" if state.view == "admin" else "admin"})


@_on(SelectAuthor)
def _select_author(state: GalleryState, action: SelectAuthor) -> GalleryState:
    if state.view != "gallery":
        return state
    return state.model_copy(update={"view": "detail", "selected": action.author})


@_on(BackToGallery)
def _back_to_gallery(state: GalleryState, action: BackToGallery) -> GalleryState:
    return state.model_copy(update={"view": "gallery"})


@_on(OpenCreateForm)
def _open_create(state: GalleryState, action: OpenCreateForm) -> GalleryState:
    if state.session is None:
        return state
    return state.model_copy(update={"form": FormState(open=True, is_editing=False)})


@_on(OpenEditForm)
def _open_edit(state: GalleryState, action: OpenEditForm) -> GalleryState:
    if state.session is None:
        return state
    form = FormState(open=True, is_editing=True, data=AuthorForm.from_author(action.author))
    return state.model_copy(update={"form": form})


@_on(EditField)
def _edit_field(state: GalleryState, action: EditField) -> GalleryState:
    if not state.form.open:
        return state
    if action.field == "id" or action.field not in AuthorForm.model_fields:
        raise ValueError(f"Unknown form field: {action.field!r}")
    data = state.form.data.model_copy(update={action.field: action.value})
    return state.model_copy(update={"form": state.form.model_copy(update={"data": data})})


@_on(CloseForm)
def _close_form(state: GalleryState, action: CloseForm) -> GalleryState:
    return state.model_copy(update={"form": FormState()})


@_on(SubmitStarted)
def _submit_started(state: GalleryState, action: SubmitStarted) -> GalleryState:
    return state.model_copy(update={"is_submitting": True})


@_on(SubmitSucceeded)
def _submit_succeeded(state: GalleryState, action: SubmitSucceeded) -> GalleryState:
    return state.model_copy(update={"is_submitting": False, "form": FormState()})


@_on(SubmitFailed)
def _submit_failed(state: GalleryState, action: SubmitFailed) -> GalleryState:
    # form stays open with the input as typed
    return state.model_copy(update={"is_submitting": False})


@_on(NoticeShown)
def _notice_shown(state: GalleryState, action: NoticeShown) -> GalleryState:
    return state.model_copy(update={"notice": action.notice})


@_on(NoticeDismissed)
def _notice_dismissed(state: GalleryState, action: NoticeDismissed) -> GalleryState:
    # a newer notice outlives the timer of an older one
    if state.notice is None or state.notice.seq != action.seq:
        return state
    return state.model_copy(update={"notice": None})
