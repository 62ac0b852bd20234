import pytest

from app.core.security import create_access_token


def signup_payload(**overrides):
    payload = {
        "name": "Kiran Kumar",
        "email": "kiran.kumar@mahindrauniversity.edu.in",
        "password": "password123",
        "role": "student",
        "rollNumber": "SE22UCSE101",
        "program": "B.Tech",
        "skills": ["python", "sql"],
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_student_signup_returns_token(client):
    res = await client.post("/api/auth/signup", json=signup_payload())

    assert res.status_code == 201
    data = res.json()
    assert data["message"] == "User created successfully"
    assert data["token"]
    assert data["token_type"] == "bearer"
    assert data["user"]["role"] == "student"
    assert data["user"]["email"] == "kiran.kumar@mahindrauniversity.edu.in"


@pytest.mark.asyncio
async def test_signup_stores_student_profile(client):
    res = await client.post("/api/auth/signup", json=signup_payload())
    user_id = res.json()["user"]["id"]
    headers = {"Authorization": f"Bearer {res.json()['token']}"}

    profile = await client.get(f"/api/students/{user_id}", headers=headers)
    assert profile.status_code == 200
    assert profile.json()["roll_number"] == "SE22UCSE101"
    assert profile.json()["skills"] == ["python", "sql"]


@pytest.mark.asyncio
async def test_signup_rejects_outside_domain(client):
    res = await client.post("/api/auth/signup", json=signup_payload(email="kiran@gmail.com"))
    assert res.status_code == 400
    assert "mahindrauniversity.edu.in" in res.json()["detail"]


@pytest.mark.asyncio
async def test_signup_rejects_short_password(client):
    res = await client.post("/api/auth/signup", json=signup_payload(password="short"))
    assert res.status_code == 400


@pytest.mark.asyncio
async def test_signup_rejects_duplicate_email(client):
    await client.post("/api/auth/signup", json=signup_payload())
    res = await client.post("/api/auth/signup", json=signup_payload(name="Another Kiran"))

    assert res.status_code == 400
    assert res.json()["detail"] == "User with this email already exists"


@pytest.mark.asyncio
async def test_admin_cannot_self_register(client):
    res = await client.post("/api/auth/signup", json=signup_payload(role="admin"))
    assert res.status_code == 400


@pytest.mark.asyncio
async def test_login_with_valid_and_invalid_credentials(client, faculty):
    res = await client.post(
        "/api/auth/login",
        json={"email": faculty.email.upper(), "password": "password123"},
    )
    assert res.status_code == 200
    assert res.json()["user"]["id"] == str(faculty.id)

    res = await client.post(
        "/api/auth/login",
        json={"email": faculty.email, "password": "wrong-password"},
    )
    assert res.status_code == 401
    assert res.json()["detail"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_me_returns_current_user(client, auth_headers, student):
    res = await client.get("/api/auth/me", headers=auth_headers(student))
    assert res.status_code == 200
    assert res.json()["name"] == "Asha Rao"


@pytest.mark.asyncio
async def test_me_rejects_missing_and_bad_tokens(client):
    res = await client.get("/api/auth/me")
    assert res.status_code == 401
    assert res.json()["detail"] == "Not authorized, no token"

    res = await client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.jwt"})
    assert res.status_code == 401


@pytest.mark.asyncio
async def test_token_for_deleted_user_is_rejected(client):
    token = create_access_token(subject="00000000-0000-0000-0000-000000000000")
    res = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401
    assert res.json()["detail"] == "User not found"
