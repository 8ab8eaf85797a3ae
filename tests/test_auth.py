import pytest

from wealthwise.core.dependencies import get_user_store
from wealthwise.core.errors import DuplicateKeyError, StorageError

ALICE = {"name": "A", "email": "a@x.com", "password": "secret1"}


def signup(client, payload=ALICE):
    return client.post("/api/signup", json=payload)


def test_signup_then_login(client):
    response = signup(client)
    assert response.status_code == 201
    assert response.json() == {"message": "Registered Successfully"}

    response = client.post("/api/login", json={"email": "a@x.com", "password": "secret1"})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["user"] == {"name": "A", "email": "a@x.com"}


def test_login_never_returns_password(client):
    signup(client)
    response = client.post("/api/login", json={"email": "a@x.com", "password": "secret1"})

    text = response.text
    assert "password" not in text
    assert "secret1" not in text
    assert "$2b$" not in text


def test_password_is_stored_hashed(client, user_store):
    signup(client)

    user = user_store.find_by_email("a@x.com")
    assert user.password_hash != "secret1"
    assert user.password_hash.startswith("$2b$10$")


def test_duplicate_signup_is_rejected(client, user_store):
    assert signup(client).status_code == 201

    response = signup(client, {**ALICE, "name": "Other"})
    assert response.status_code == 400
    assert response.json() == {"message": "User already exists"}
    assert user_store.count() == 1


@pytest.mark.parametrize("missing", ["name", "email", "password"])
def test_signup_missing_field(client, user_store, missing):
    payload = {k: v for k, v in ALICE.items() if k != missing}

    response = signup(client, payload)
    assert response.status_code == 400
    assert response.json() == {"message": "All fields are required"}
    assert user_store.count() == 0


def test_signup_empty_field_counts_as_missing(client):
    response = signup(client, {**ALICE, "password": ""})
    assert response.status_code == 400
    assert response.json() == {"message": "All fields are required"}


@pytest.mark.parametrize("payload", [
    {"password": "secret1"},
    {"email": "a@x.com"},
    {"email": "", "password": ""},
    {},
])
def test_login_missing_fields(client, payload):
    response = client.post("/api/login", json=payload)
    assert response.status_code == 400
    assert response.json() == {"message": "Email and password are required"}


def test_login_unknown_email_and_wrong_password_share_status(client):
    signup(client)

    unknown = client.post("/api/login", json={"email": "b@x.com", "password": "secret1"})
    wrong = client.post("/api/login", json={"email": "a@x.com", "password": "wrong"})

    assert unknown.status_code == wrong.status_code == 400
    assert unknown.json() == {"message": "User not found"}
    assert wrong.json() == {"message": "Invalid credentials"}


def test_malformed_body_is_rejected(client):
    response = client.post(
        "/api/signup",
        content="not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid request body"}


class RacingStore:
    """Passes the existence check, then loses to a concurrent insert."""

    def find_by_email(self, email):
        return None

    def create(self, name, email, password_hash):
        raise DuplicateKeyError(email)


class BrokenStore:
    def __init__(self, exc):
        self.exc = exc

    def find_by_email(self, email):
        raise self.exc

    def create(self, name, email, password_hash):
        raise self.exc


def test_signup_race_answers_user_already_exists(app, client):
    app.dependency_overrides[get_user_store] = RacingStore

    response = signup(client)
    assert response.status_code == 400
    assert response.json() == {"message": "User already exists"}


def test_storage_failure_answers_server_error(app, client):
    app.dependency_overrides[get_user_store] = lambda: BrokenStore(StorageError("connection lost"))

    response = signup(client)
    assert response.status_code == 500
    assert response.json() == {"message": "Server error", "error": "connection lost"}

    response = client.post("/api/login", json={"email": "a@x.com", "password": "secret1"})
    assert response.status_code == 500
    assert response.json()["message"] == "Server error"


def test_signup_without_body(client):
    response = client.post("/api/signup")
    assert response.status_code == 400
    assert response.json() == {"message": "All fields are required"}


def test_login_without_body(client):
    response = client.post("/api/login")
    assert response.status_code == 400
    assert response.json() == {"message": "Email and password are required"}
