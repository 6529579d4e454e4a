"""Client-local session holder, standing in for the hosted identity widget."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import ClassVar, Literal

from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict

from gallery.core.logging import get_logger

logger = get_logger(__name__)

Event = Literal["login", "logout"]


class User(BaseModel):
    token: str
    email: str | None = None
    sub: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @classmethod
    def from_token(cls, token: str) -> "User":
        """
        Read the claims without verifying the signature; the API checks
        it when a write is sent.
        """
        try:
            claims = jwt.get_unverified_claims(token)
        except JWTError as e:
            raise ValueError(f"Not a session token: {e}") from e
        return cls(token=token, email=claims.get("email"), sub=claims.get("sub"))


class IdentityWidget:
    """
    Holds the current session and fires login/logout events.
    With a storage path the session survives between runs.
    """

    def __init__(self, storage_path: Path | None = None):
        self.storage_path: Path | None = storage_path
        self.is_open: bool = False
        self._user: User | None = None
        self._listeners: dict[Event, list[Callable[..., None]]] = {"login": [], "logout": []}

    def init(self) -> None:
        if self.storage_path is None or not self.storage_path.exists():
            return
        try:
            token = json.loads(self.storage_path.read_text())["token"]
            self._user = User.from_token(token)
        except (OSError, KeyError, ValueError) as e:
            logger.warning("Ignoring stored session: %s", e)
            self._user = None

    def current_user(self) -> User | None:
        return self._user

    def on(self, event: Event, callback: Callable[..., None]) -> None:
        self._listeners[event].append(callback)

    def open(self) -> None:
        self.is_open = True

    def close(self) -> None:
        self.is_open = False

    def login(self, token: str) -> User:
        user = User.from_token(token)
        self._user = user
        if self.storage_path is not None:
            self.storage_path.parent.mkdir(parents=True, exist_ok=True)
            self.storage_path.write_text(json.dumps({"token": token}))
        for callback in self._listeners["login"]:
            callback(user)
        return user

    def logout(self) -> None:
        self._user = None
        if self.storage_path is not None:
            self.storage_path.unlink(missing_ok=True)
        for callback in self._listeners["logout"]:
            callback()
