"""
Side effects of the gallery client.

The controller owns the current `GalleryState`, runs the HTTP calls and
turns their outcome into actions for `reduce`. After every successful
mutation the whole collection is fetched again.
"""

import threading
import uuid
from collections.abc import Callable
from pathlib import Path

import httpx

from gallery.client.api import ApiError, AuthorsClient
from gallery.client.identity import IdentityWidget, User
from gallery.client.images import encode_data_uri
from gallery.client.state import (
    Action,
    AuthorsLoaded,
    EditField,
    GalleryState,
    LoadFinished,
    Notice,
    NoticeDismissed,
    NoticeKind,
    NoticeShown,
    SessionEnded,
    SessionStarted,
    SubmitFailed,
    SubmitStarted,
    SubmitSucceeded,
    reduce,
)
from gallery.core.logging import get_logger

logger = get_logger(__name__)

Scheduler = Callable[[float, Callable[[], None]], None]
Listener = Callable[[GalleryState], None]


def timer_scheduler(delay: float, fn: Callable[[], None]) -> None:
    timer = threading.Timer(delay, fn)
    timer.daemon = True
    timer.start()


class GalleryController:
    def __init__(
        self,
        api: AuthorsClient,
        identity: IdentityWidget,
        scheduler: Scheduler = timer_scheduler,
        notice_seconds: float = 3.0,
    ):
        self.api: AuthorsClient = api
        self.identity: IdentityWidget = identity
        self.scheduler: Scheduler = scheduler
        self.notice_seconds: float = notice_seconds
        self.state: GalleryState = GalleryState()
        self._listeners: list[Listener] = []
        self._notice_seq: int = 0
        self._lock: threading.Lock = threading.Lock()

    # ---- state plumbing ----

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def dispatch(self, action: Action) -> GalleryState:
        with self._lock:
            self.state = reduce(self.state, action)
            state = self.state
        for listener in self._listeners:
            listener(state)
        return state

    def notify(self, kind: NoticeKind, message: str) -> None:
        """Show a notice and schedule its dismissal."""
        self._notice_seq += 1
        seq = self._notice_seq
        self.dispatch(NoticeShown(notice=Notice(seq=seq, kind=kind, message=message)))
        self.scheduler(self.notice_seconds, lambda: self.dispatch(NoticeDismissed(seq=seq)))

    @property
    def _token(self) -> str | None:
        return self.state.session.token if self.state.session else None

    # ---- lifecycle ----

    def start(self) -> None:
        self.identity.init()
        user = self.identity.current_user()
        if user is not None:
            self.dispatch(SessionStarted(user=user))
        self.identity.on("login", self._on_login)
        self.identity.on("logout", self._on_logout)
        self.refresh()

    def _on_login(self, user: User) -> None:
        self.dispatch(SessionStarted(user=user))
        self.identity.close()

    def _on_logout(self) -> None:
        self.dispatch(SessionEnded())

    def refresh(self) -> None:
        """Fetch the full collection; a failed load keeps the current one."""
        try:
            authors = self.api.list()
        except (ApiError, httpx.HTTPError) as e:
            logger.error("Loading authors failed: %s", e)
        else:
            self.dispatch(AuthorsLoaded(authors=tuple(authors)))
        finally:
            self.dispatch(LoadFinished())

    # ---- form ----

    def attach_image(self, path: str | Path) -> None:
        self.dispatch(EditField(field="image_url", value=encode_data_uri(path)))

    def submit(self) -> bool:
        """Create or save the open form. Returns True on success."""
        form = self.state.form
        if not form.open or self.state.is_submitting:
            return False

        if not form.data.name.strip() or not form.data.biography.strip():
            self.notify("error", "Name and biography are required")
            return False

        self.dispatch(SubmitStarted())
        try:
            if form.is_editing:
                self.api.update(form.data.payload(include_id=True), token=self._token)
            else:
                self.api.create(form.data.payload(include_id=False), token=self._token)
        except (ApiError, httpx.HTTPError) as e:
            message = e.message if isinstance(e, ApiError) else str(e)
            logger.error("Saving author failed: %s", message)
            self.dispatch(SubmitFailed())
            self.notify("error", message)
            return False

        self.dispatch(SubmitSucceeded())
        self.notify("success", "Updated" if form.is_editing else "Added")
        self.refresh()
        return True

    # ---- delete ----

    def delete(self, author_id: uuid.UUID | str, confirm: Callable[[], bool]) -> bool:
        """
        Delete after confirmation. The response status is not checked, but
        a request that never reaches the server is reported as an error.
        """
        if not confirm():
            return False
        try:
            self.api.delete(author_id, token=self._token, check=False)
        except httpx.HTTPError as e:
            logger.error("Deleting author failed: %s", e)
            self.notify("error", str(e))
            return False
        self.notify("success", "Deleted")
        self.refresh()
        return True
