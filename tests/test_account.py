import pytest


@pytest.mark.asyncio
async def test_change_password(client, auth_headers, student):
    headers = auth_headers(student)

    change_payload = {
        "old_password": "password123",
        "new_password": "newpassword456"
    }
    res = await client.post("/api/account/change-password", json=change_payload, headers=headers)
    assert res.status_code == 200
    assert res.json()["detail"] == "Password changed successfully"

    # Old password no longer works
    res_fail = await client.post("/api/auth/login", json={"email": student.email, "password": "password123"})
    assert res_fail.status_code == 401

    # New one does
    res_success = await client.post("/api/auth/login", json={"email": student.email, "password": "newpassword456"})
    assert res_success.status_code == 200


@pytest.mark.asyncio
async def test_change_password_wrong_old_password(client, auth_headers, student):
    res = await client.post(
        "/api/account/change-password",
        json={"old_password": "not-my-password", "new_password": "newpassword456"},
        headers=auth_headers(student),
    )
    assert res.status_code == 400
    assert res.json()["detail"] == "Old password incorrect"


@pytest.mark.asyncio
async def test_change_password_same_as_old(client, auth_headers, faculty):
    res = await client.post(
        "/api/account/change-password",
        json={"old_password": "password123", "new_password": "password123"},
        headers=auth_headers(faculty),
    )
    assert res.status_code == 400
    assert res.json()["detail"] == "New password must be different"
