import pytest
from unittest.mock import patch

from app.core.exceptions import ValidationError


@pytest.mark.asyncio
async def test_upload_resume(client, auth_headers, student):
    files = {"file": ("cv.pdf", b"%PDF-1.4 resume", "application/pdf")}

    # Mock the storage call where the endpoint module imported it
    with patch("app.api.endpoints.uploads.upload_file") as mock_upload:
        mock_upload.return_value = f"resumes/{student.id}/mock.pdf"

        res = await client.post("/api/uploads/resume", files=files, headers=auth_headers(student))

        assert res.status_code == 200
        assert res.json()["path"] == f"resumes/{student.id}/mock.pdf"
        mock_upload.assert_called_once()

    profile = await client.get(f"/api/students/{student.id}", headers=auth_headers(student))
    assert profile.json()["resume_url"] == f"resumes/{student.id}/mock.pdf"


@pytest.mark.asyncio
async def test_resume_upload_is_student_only(client, auth_headers, faculty):
    files = {"file": ("cv.pdf", b"%PDF-1.4", "application/pdf")}
    res = await client.post("/api/uploads/resume", files=files, headers=auth_headers(faculty))
    assert res.status_code == 403


@pytest.mark.asyncio
async def test_upload_rejects_bad_type(client, auth_headers, student):
    files = {"file": ("cv.exe", b"MZ", "application/octet-stream")}

    with patch("app.api.endpoints.uploads.upload_file") as mock_upload:
        mock_upload.side_effect = ValidationError("Unsupported file type 'application/octet-stream'")

        res = await client.post("/api/uploads/resume", files=files, headers=auth_headers(student))

    assert res.status_code == 400


@pytest.mark.asyncio
async def test_unsupported_type_never_reaches_storage(client, auth_headers, student):
    # No storage credentials in tests: the type check must fail first
    files = {"file": ("photo.gif", b"GIF89a", "image/gif")}
    res = await client.post("/api/uploads/profile-picture", files=files, headers=auth_headers(student))

    assert res.status_code == 400
    assert "Unsupported file type" in res.json()["detail"]


@pytest.mark.asyncio
async def test_missing_storage_credentials_is_503(client, auth_headers, student):
    files = {"file": ("me.png", b"\x89PNG", "image/png")}
    res = await client.post("/api/uploads/profile-picture", files=files, headers=auth_headers(student))

    assert res.status_code == 503


@pytest.mark.asyncio
async def test_project_attachment_owner_only(client, auth_headers, faculty, other_faculty, project):
    url = f"/api/uploads/projects/{faculty.id}/{project.id}/attachments"
    files = {"file": ("brief.pdf", b"%PDF-1.4", "application/pdf")}

    with patch("app.api.endpoints.uploads.upload_file") as mock_upload:
        mock_upload.return_value = f"projects/{project.id}/brief.pdf"

        res = await client.post(url, files=files, headers=auth_headers(other_faculty))
        assert res.status_code == 403
        mock_upload.assert_not_called()

        res = await client.post(url, files=files, headers=auth_headers(faculty))
        assert res.status_code == 200
        assert res.json()["attachment_urls"] == [f"projects/{project.id}/brief.pdf"]


@pytest.mark.asyncio
async def test_profile_picture_link(client, auth_headers, db_session, student, faculty):
    url = f"/api/uploads/profile-picture/{faculty.id}"

    res = await client.get(url)
    assert res.status_code == 401

    res = await client.get(url, headers=auth_headers(student))
    assert res.status_code == 404

    faculty.profile_picture_url = f"profile-pictures/{faculty.id}/me.png"
    db_session.add(faculty)
    await db_session.commit()

    with patch("app.core.storage.get_signed_url") as mock_sign:
        mock_sign.return_value = "https://storage.example/me.png?sig=1"

        res = await client.get(url, headers=auth_headers(student))

    assert res.status_code == 200
    assert res.json() == {
        "path": f"profile-pictures/{faculty.id}/me.png",
        "url": "https://storage.example/me.png?sig=1",
    }
