"""Login, the current principal and access control on the security API."""

import pytest

from warden.exceptions import PROBLEM_TYPE_BASE_URI

LOGIN = "/api/v1/security/login"


async def login(test_client, username, password):
    return await test_client.post(LOGIN, json={"username": username, "password": password})


async def test_login_success(seed_administrator, test_client):
    resp = await login(test_client, "administrator", "administrator")
    assert resp.status_code == 200
    data = resp.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert data["principal"]["username"] == "administrator"
    assert data["principal"]["authorities"] == ["ROLE_Administrator"]
    assert data["principal"]["user_directory_id"] == str(seed_administrator.user_directory_id)


@pytest.mark.parametrize(
    "username,password",
    [
        ("administrator", "wrongpassword"),
        ("nobody", "administrator"),
    ],
    ids=["wrong-password", "unknown-user"],
)
async def test_login_failure(seed_administrator, test_client, username, password):
    resp = await login(test_client, username, password)
    assert resp.status_code == 401
    assert resp.headers["content-type"].startswith("application/problem+json")
    assert resp.json()["type"] == PROBLEM_TYPE_BASE_URI + "authentication-failed"


async def test_login_locked_user(seed_administrator, test_client):
    for _ in range(5):
        await login(test_client, "administrator", "wrongpassword")

    resp = await login(test_client, "administrator", "administrator")
    assert resp.status_code == 403
    assert resp.json()["type"] == PROBLEM_TYPE_BASE_URI + "user-locked"


async def test_me(seed_administrator, test_client, auth_headers):
    resp = await test_client.get("/api/v1/security/me", headers=auth_headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["username"] == "administrator"
    assert data["tenant_ids"] == [str(seed_administrator.tenant.tenant_id)]
    assert data["user_directory_ids"] == [str(seed_administrator.user_directory_id)]


@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Bearer not-a-jwt"}],
    ids=["missing", "invalid"],
)
async def test_me_requires_token(seed_administrator, test_client, headers):
    resp = await test_client.get("/api/v1/security/me", headers=headers)
    assert resp.status_code == 401
    assert resp.json()["type"] == PROBLEM_TYPE_BASE_URI + "unauthorized"


async def test_disabled_user_token_is_rejected(
    seed_administrator, test_client, auth_headers, security_service
):
    from warden.models.pydantic_models import UserRequest
    from warden.models.security import UserStatus

    await security_service.update_user(
        UserRequest(
            user_directory_id=seed_administrator.user_directory_id,
            username="administrator",
            status=UserStatus.INACTIVE,
        )
    )
    resp = await test_client.get("/api/v1/security/me", headers=auth_headers)
    assert resp.status_code == 401


@pytest.fixture
async def helpdesk_headers(seed_administrator, security_service, test_client):
    """A non-administrator holding only the password reset function."""
    from warden.bootstrap import PASSWORD_RESETTER_ROLE_CODE
    from warden.models.pydantic_models import GroupModel, UserRequest

    user_directory_id = seed_administrator.user_directory_id
    await security_service.create_user(
        UserRequest(user_directory_id=user_directory_id, username="helpdesk", password="Help1")
    )
    await security_service.create_group(
        GroupModel(user_directory_id=user_directory_id, name="Helpdesk")
    )
    await security_service.add_role_to_group(
        user_directory_id, "Helpdesk", PASSWORD_RESETTER_ROLE_CODE
    )
    await security_service.add_user_to_group(user_directory_id, "Helpdesk", "helpdesk")

    resp = await login(test_client, "helpdesk", "Help1")
    assert resp.status_code == 200, resp.text
    assert resp.json()["principal"]["authorities"] == [
        "FUNCTION_Security.ResetUserPassword",
        "ROLE_PasswordResetter",
    ]
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.mark.parametrize(
    "path",
    [
        "/api/v1/security/tenants",
        "/api/v1/security/user-directories",
        "/api/v1/security/roles",
        "/api/v1/security/functions",
        "/api/v1/security/tokens",
        "/api/v1/security/policies",
    ],
)
async def test_non_administrator_is_denied(test_client, helpdesk_headers, path):
    resp = await test_client.get(path, headers=helpdesk_headers)
    assert resp.status_code == 403
    assert resp.json()["type"] == PROBLEM_TYPE_BASE_URI + "access-denied"


async def test_password_resetter_can_change_password(
    seed_administrator, test_client, helpdesk_headers, security_service
):
    from warden.models.pydantic_models import UserRequest

    user_directory_id = seed_administrator.user_directory_id
    await security_service.create_user(
        UserRequest(user_directory_id=user_directory_id, username="alice", password="Secret1")
    )

    resp = await test_client.put(
        "/api/v1/security/users/alice/password",
        headers=helpdesk_headers,
        json={
            "new_password": "Secret2",
            "user_directory_id": str(user_directory_id),
            "reason": "administrative",
        },
    )
    assert resp.status_code == 204

    resp = await login(test_client, "alice", "Secret2")
    assert resp.status_code == 200


async def test_change_own_password(seed_administrator, test_client, helpdesk_headers):
    resp = await test_client.put(
        "/api/v1/security/users/helpdesk/password",
        headers=helpdesk_headers,
        json={"password": "Help1", "new_password": "Help2"},
    )
    assert resp.status_code == 204

    assert (await login(test_client, "helpdesk", "Help1")).status_code == 401
    assert (await login(test_client, "helpdesk", "Help2")).status_code == 200


async def test_cannot_change_someone_elses_password(
    seed_administrator, test_client, helpdesk_headers
):
    resp = await test_client.put(
        "/api/v1/security/users/administrator/password",
        headers=helpdesk_headers,
        json={"password": "administrator", "new_password": "Stolen1"},
    )
    assert resp.status_code == 403


async def test_expired_user_changes_password_without_token(
    seed_administrator, test_client, security_service
):
    from warden.models.pydantic_models import UserRequest

    await security_service.create_user(
        UserRequest(
            user_directory_id=seed_administrator.user_directory_id,
            username="newhire",
            password="Welcome1",
        ),
        expired_password=True,
    )

    resp = await login(test_client, "newhire", "Welcome1")
    assert resp.status_code == 403
    assert resp.json()["type"] == PROBLEM_TYPE_BASE_URI + "expired-password"

    resp = await test_client.put(
        "/api/v1/security/users/newhire/password",
        json={"password": "Welcome1", "new_password": "Chosen1"},
    )
    assert resp.status_code == 204

    assert (await login(test_client, "newhire", "Chosen1")).status_code == 200


async def test_change_password_without_token_needs_current_password(
    seed_administrator, test_client
):
    resp = await test_client.put(
        "/api/v1/security/users/administrator/password",
        json={"password": "guess", "new_password": "Stolen1"},
    )
    assert resp.status_code == 401
    assert resp.json()["type"] == PROBLEM_TYPE_BASE_URI + "authentication-failed"

    assert (await login(test_client, "administrator", "administrator")).status_code == 200


async def test_administrative_password_change_requires_token(seed_administrator, test_client):
    resp = await test_client.put(
        "/api/v1/security/users/administrator/password",
        json={
            "new_password": "Stolen1",
            "user_directory_id": str(seed_administrator.user_directory_id),
            "reason": "administrative",
        },
    )
    assert resp.status_code == 401
    assert resp.json()["type"] == PROBLEM_TYPE_BASE_URI + "unauthorized"
