"""HTTP client for the authors endpoint."""

import uuid

import httpx

from gallery.schemas.author import AuthorRead


class ApiError(Exception):
    """Any non-success response. `message` is the server's `error` field when present."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code: int = status_code
        self.message: str = message


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or "Server error"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return "Server error"


class AuthorsClient:
    def __init__(self, http: httpx.Client, path: str = "/api/authors"):
        self.http: httpx.Client = http
        self.path: str = path

    def _send(
        self,
        method: str,
        body: dict[str, object] | None = None,
        token: str | None = None,
        check: bool = True,
    ) -> httpx.Response:
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        response = self.http.request(method, self.path, json=body, headers=headers)
        if check and response.is_error:
            raise ApiError(response.status_code, _error_message(response))
        return response

    def list(self) -> list[AuthorRead]:
        data = self._send("GET").json()
        if not isinstance(data, list):
            raise ApiError(200, "Unexpected response: not a list")
        return [AuthorRead.model_validate(item) for item in data]

    def create(self, payload: dict[str, object], token: str | None = None) -> AuthorRead:
        return AuthorRead.model_validate(self._send("POST", payload, token).json())

    def update(self, payload: dict[str, object], token: str | None = None) -> AuthorRead | None:
        """None when no record had the given id."""
        response = self._send("PUT", payload, token)
        if not response.content:
            return None
        return AuthorRead.model_validate(response.json())

    def delete(
        self, author_id: uuid.UUID | str, token: str | None = None, check: bool = True
    ) -> None:
        self._send("DELETE", {"id": str(author_id)}, token, check=check)
