"""Server-side session check on the write methods."""

import uuid

from fastapi import status

from tests.conftest import API_PATH, auth_headers, make_token

VALID_AUTHOR = {"name": "Abai", "biography": "Poet."}


class TestSessionDisabled:
    def test_writes_open_without_secret(self, test_client):
        response = test_client.post(API_PATH, json=VALID_AUTHOR)
        assert response.status_code == status.HTTP_201_CREATED

    def test_token_ignored_without_secret(self, test_client):
        response = test_client.post(
            API_PATH, json=VALID_AUTHOR, headers={"Authorization": "Bearer not-a-real-jwt"}
        )
        assert response.status_code == status.HTTP_201_CREATED


class TestSessionRequired:
    def test_missing_token_returns_401(self, test_client, session_required):
        response = test_client.post(API_PATH, json=VALID_AUTHOR)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["error"] == "Not authenticated"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_token_returns_401(self, test_client, session_required):
        response = test_client.post(
            API_PATH, json=VALID_AUTHOR, headers={"Authorization": "Bearer not-a-real-jwt"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["error"] == "Invalid token"

    def test_wrong_secret_returns_401(self, test_client, session_required):
        token = make_token(secret="some-other-secret-of-enough-length")
        response = test_client.post(
            API_PATH, json=VALID_AUTHOR, headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_expired_token_returns_401(self, test_client, session_required):
        token = make_token(expired=True)
        response = test_client.post(
            API_PATH, json=VALID_AUTHOR, headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["error"] == "Token expired"

    def test_valid_token_allows_all_writes(self, test_client, session_required):
        headers = auth_headers()

        created = test_client.post(API_PATH, json=VALID_AUTHOR, headers=headers)
        assert created.status_code == status.HTTP_201_CREATED
        author_id = created.json()["id"]

        updated = test_client.put(
            API_PATH, json={"id": author_id, "name": "Abai Qunanbaiuly"}, headers=headers
        )
        assert updated.status_code == status.HTTP_200_OK

        deleted = test_client.request("DELETE", API_PATH, json={"id": author_id}, headers=headers)
        assert deleted.status_code == status.HTTP_200_OK

    def test_any_user_is_admin(self, test_client, session_required):
        response = test_client.post(
            API_PATH, json=VALID_AUTHOR, headers=auth_headers("reader@example.com")
        )
        assert response.status_code == status.HTTP_201_CREATED

    def test_reads_stay_open(self, test_client, session_required):
        response = test_client.get(API_PATH)
        assert response.status_code == status.HTTP_200_OK

    def test_unauthorized_write_changes_nothing(self, test_client, session_required):
        test_client.request("DELETE", API_PATH, json={"id": str(uuid.uuid4())})
        test_client.post(API_PATH, json=VALID_AUTHOR)

        assert test_client.get(API_PATH).json() == []
