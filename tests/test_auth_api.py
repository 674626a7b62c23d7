import pytest
from fastapi import status


def test_login_success(client, admin_user):
    """Test successful login with valid credentials."""
    response = client.post("/api/auth/login", json={"email": admin_user.email, "password": "AdminPassword123!"})
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["success"] is True
    assert data["token"]
    assert data["user"] == {"id": admin_user.id, "name": "System Admin", "role": "admin"}


def test_login_unknown_email(client):
    response = client.post("/api/auth/login", json={"email": "nobody@example.com", "password": "wrong"})
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["errors"][0]["msg"] == "User not found"


def test_login_wrong_password(client, admin_user):
    response = client.post("/api/auth/login", json={"email": admin_user.email, "password": "wrong"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json()["errors"][0]["msg"] == "Wrong password"


def test_verify_returns_identity(client, employee_user, auth_headers):
    user, _ = employee_user
    response = client.get("/api/auth/verify", headers=auth_headers(user))
    assert response.status_code == 200
    assert response.json()["user"]["email"] == user.email
    assert response.json()["user"]["role"] == "employee"


def test_verify_requires_token(client):
    response = client.get("/api/auth/verify")
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_verify_rejects_bad_token(client):
    response = client.get("/api/auth/verify", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_change_password(client, admin_user, auth_headers):
    headers = auth_headers(admin_user)
    wrong = client.post(
        "/api/auth/change-password", headers=headers,
        json={"current_password": "nope", "new_password": "NewPassword1!"},
    )
    assert wrong.status_code == 400

    ok = client.post(
        "/api/auth/change-password", headers=headers,
        json={"current_password": "AdminPassword123!", "new_password": "NewPassword1!"},
    )
    assert ok.status_code == 200

    login = client.post("/api/auth/login", json={"email": admin_user.email, "password": "NewPassword1!"})
    assert login.status_code == 200
