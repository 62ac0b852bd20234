import pytest
import pytest_asyncio
from unittest.mock import patch

from app.models.user import UserRole
from app.services.application_service import submit_application


@pytest.mark.asyncio
async def test_get_my_profile_requires_auth(client, student):
    res = await client.get(f"/api/students/{student.id}")
    assert res.status_code == 401


@pytest.mark.asyncio
async def test_student_reads_and_updates_own_profile(client, auth_headers, student):
    res = await client.put(
        f"/api/students/{student.id}",
        json={"github": "https://github.com/asharao", "interests": "vision, robotics"},
        headers=auth_headers(student),
    )
    assert res.status_code == 200
    assert res.json()["interests"] == ["vision", "robotics"]

    res = await client.get(f"/api/students/{student.id}", headers=auth_headers(student))
    assert res.json()["github"] == "https://github.com/asharao"
    assert res.json()["program"] == "B.Tech"


@pytest.mark.asyncio
async def test_profile_hidden_from_other_students_and_faculty(client, auth_headers, student, faculty, make_user):
    classmate = await make_user("Rahul Das", UserRole.Student)

    for user in (classmate, faculty):
        res = await client.get(f"/api/students/{student.id}", headers=auth_headers(user))
        assert res.status_code == 403


@pytest.mark.asyncio
async def test_admin_can_view_student(client, auth_headers, student, admin):
    res = await client.get(f"/api/students/{student.id}", headers=auth_headers(admin))
    assert res.status_code == 200


@pytest.mark.asyncio
async def test_blank_name_is_rejected(client, auth_headers, student):
    res = await client.put(
        f"/api/students/{student.id}", json={"name": "  "}, headers=auth_headers(student)
    )
    assert res.status_code == 400


@pytest.mark.asyncio
async def test_faculty_id_is_not_a_student(client, auth_headers, faculty, admin):
    res = await client.get(f"/api/students/{faculty.id}", headers=auth_headers(admin))
    assert res.status_code == 404
    assert res.json()["detail"] == "Student not found"


# ------------------------------------------------------------
# RESUME LINK
# ------------------------------------------------------------
@pytest_asyncio.fixture
async def student_with_resume(db_session, student):
    student.resume_url = f"resumes/{student.id}/cv.pdf"
    db_session.add(student)
    await db_session.commit()
    await db_session.refresh(student)
    return student


@pytest.mark.asyncio
async def test_student_gets_signed_resume_link(client, auth_headers, student_with_resume):
    url = f"/api/students/{student_with_resume.id}/resume"

    with patch("app.core.storage.get_signed_url") as mock_sign:
        mock_sign.return_value = "https://storage.example/signed/cv.pdf?token=abc"

        res = await client.get(url, headers=auth_headers(student_with_resume))

        assert res.status_code == 200
        assert res.json() == {
            "path": student_with_resume.resume_url,
            "url": "https://storage.example/signed/cv.pdf?token=abc",
        }
        mock_sign.assert_called_once_with(student_with_resume.resume_url, 3600)


@pytest.mark.asyncio
async def test_faculty_sees_resume_only_after_student_applied(
    client, auth_headers, db_session, student_with_resume, project, faculty, other_faculty
):
    url = f"/api/students/{student_with_resume.id}/resume"

    with patch("app.core.storage.get_signed_url") as mock_sign:
        mock_sign.return_value = "https://storage.example/signed/cv.pdf"

        res = await client.get(url, headers=auth_headers(faculty))
        assert res.status_code == 403

        await submit_application(
            db_session,
            student_id=student_with_resume.id,
            faculty_id=faculty.id,
            project_id=project.id,
            cover_letter="Keen to help with the traffic models.",
            actor=student_with_resume,
        )

        res = await client.get(url, headers=auth_headers(faculty))
        assert res.status_code == 200

        res = await client.get(url, headers=auth_headers(other_faculty))
        assert res.status_code == 403


@pytest.mark.asyncio
async def test_missing_resume_is_404(client, auth_headers, student):
    res = await client.get(f"/api/students/{student.id}/resume", headers=auth_headers(student))
    assert res.status_code == 404
    assert res.json()["detail"] == "Resume not found"


@pytest.mark.asyncio
async def test_resume_link_without_storage_is_503(client, auth_headers, student_with_resume, admin):
    res = await client.get(
        f"/api/students/{student_with_resume.id}/resume", headers=auth_headers(admin)
    )
    assert res.status_code == 503
