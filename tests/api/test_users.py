"""Tests for current-user profile endpoints."""
from httpx import AsyncClient

from models.user import User


async def test_get_me_requires_auth(client: AsyncClient) -> None:
    """No bearer token returns 401 with a Bearer challenge."""
    response = await client.get("/users/me")
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


async def test_get_me_returns_current_user(
    client_as_user_a: AsyncClient,
    user_a: User,
) -> None:
    """The token resolves to the user it was issued for."""
    response = await client_as_user_a.get("/users/me")
    assert response.status_code == 200

    data = response.json()
    assert data["id"] == user_a.id
    assert data["email"] == "user-a@test.com"
    assert set(data) == {"id", "email", "firstName", "lastName", "createdAt", "updatedAt"}


async def test_update_profile_names(client_as_user_a: AsyncClient) -> None:
    """firstName and lastName are editable."""
    response = await client_as_user_a.patch(
        "/users",
        json={"firstName": "Ada", "lastName": "Lovelace"},
    )
    assert response.status_code == 200

    data = response.json()
    assert data["firstName"] == "Ada"
    assert data["lastName"] == "Lovelace"
    assert data["email"] == "user-a@test.com"

    me = await client_as_user_a.get("/users/me")
    assert me.json()["firstName"] == "Ada"


async def test_update_profile_partial_keeps_other_fields(
    client_as_user_a: AsyncClient,
) -> None:
    """Fields absent from the payload are left alone."""
    await client_as_user_a.patch("/users", json={"firstName": "Ada", "lastName": "Lovelace"})

    response = await client_as_user_a.patch("/users", json={"lastName": "Byron"})
    assert response.status_code == 200
    assert response.json()["firstName"] == "Ada"
    assert response.json()["lastName"] == "Byron"


async def test_update_profile_email_is_normalized(client_as_user_a: AsyncClient) -> None:
    """A new email is stored trimmed and lowercased."""
    response = await client_as_user_a.patch(
        "/users",
        json={"email": " Renamed@Example.com "},
    )
    assert response.status_code == 200
    assert response.json()["email"] == "renamed@example.com"


async def test_update_profile_email_taken_conflicts(
    client_as_user_a: AsyncClient,
    user_b: User,
) -> None:
    """Taking another account's email returns 409."""
    response = await client_as_user_a.patch("/users", json={"email": user_b.email})
    assert response.status_code == 409


async def test_update_profile_own_email_is_allowed(client_as_user_a: AsyncClient) -> None:
    """Resubmitting your own email is not a conflict."""
    response = await client_as_user_a.patch("/users", json={"email": "user-a@test.com"})
    assert response.status_code == 200


async def test_update_profile_null_email_is_bad_request(
    client_as_user_a: AsyncClient,
) -> None:
    """An account cannot drop its email."""
    response = await client_as_user_a.patch("/users", json={"email": None})
    assert response.status_code == 400


async def test_update_profile_requires_auth(client: AsyncClient) -> None:
    """Profile edits need a bearer token."""
    response = await client.patch("/users", json={"firstName": "Nobody"})
    assert response.status_code == 401


async def test_update_profile_ignores_password_fields(
    client_as_user_a: AsyncClient,
    user_a: User,
) -> None:
    """Unknown keys such as passwordHash are not applied."""
    original_hash = user_a.password_hash
    response = await client_as_user_a.patch(
        "/users",
        json={"passwordHash": "overwritten", "firstName": "Ada"},
    )
    assert response.status_code == 200
    assert user_a.password_hash == original_hash
