import uuid
from types import SimpleNamespace

from app.core import permissions
from app.models.user import UserRole


def principal(role, id=None):
    return SimpleNamespace(id=id or uuid.uuid4(), role=role)


FACULTY_ID = uuid.uuid4()
STUDENT_ID = uuid.uuid4()
PROJECT = SimpleNamespace(faculty_id=FACULTY_ID)
APPLICATION = SimpleNamespace(student_id=STUDENT_ID)


def test_owner_and_admin_can_mutate_project():
    assert permissions.can_mutate_project(principal(UserRole.Faculty, FACULTY_ID), PROJECT)
    assert permissions.can_mutate_project(principal(UserRole.Admin), PROJECT)


def test_other_faculty_and_students_cannot_mutate_project():
    assert not permissions.can_mutate_project(principal(UserRole.Faculty), PROJECT)
    assert not permissions.can_mutate_project(principal(UserRole.Student, STUDENT_ID), PROJECT)


def test_transition_and_view_follow_project_ownership():
    owner = principal(UserRole.Faculty, FACULTY_ID)
    stranger = principal(UserRole.Faculty)

    assert permissions.can_transition_application(owner, PROJECT)
    assert permissions.can_view_applications(owner, PROJECT)
    assert not permissions.can_transition_application(stranger, PROJECT)
    assert not permissions.can_view_applications(stranger, PROJECT)


def test_only_the_applicant_can_withdraw():
    assert permissions.can_withdraw(principal(UserRole.Student, STUDENT_ID), APPLICATION)
    assert not permissions.can_withdraw(principal(UserRole.Student), APPLICATION)
    # admins are not granted withdrawal
    assert not permissions.can_withdraw(principal(UserRole.Admin), APPLICATION)
    assert not permissions.can_withdraw(principal(UserRole.Faculty, FACULTY_ID), APPLICATION)


def test_ids_compare_across_str_and_uuid():
    owner = principal(UserRole.Faculty, str(FACULTY_ID))
    assert permissions.can_mutate_project(owner, PROJECT)
    assert permissions.can_manage_faculty(principal(UserRole.Faculty, FACULTY_ID), str(FACULTY_ID))


def test_raw_string_roles_are_understood():
    assert permissions.is_admin(SimpleNamespace(id=uuid.uuid4(), role="Admin"))
    assert not permissions.is_admin(SimpleNamespace(id=uuid.uuid4(), role="faculty"))


def test_predicates_are_total():
    # Missing principals / targets / attributes answer False instead of raising
    assert not permissions.can_mutate_project(None, PROJECT)
    assert not permissions.can_mutate_project(principal(UserRole.Faculty), None)
    assert not permissions.can_withdraw(None, APPLICATION)
    assert not permissions.can_withdraw(SimpleNamespace(role="student"), APPLICATION)
    assert not permissions.can_view_student(None, STUDENT_ID)
    assert not permissions.can_mutate_project(SimpleNamespace(), SimpleNamespace())


def test_student_profile_visibility():
    assert permissions.can_view_student(principal(UserRole.Student, STUDENT_ID), STUDENT_ID)
    assert permissions.can_view_student(principal(UserRole.Admin), STUDENT_ID)
    assert not permissions.can_view_student(principal(UserRole.Faculty), STUDENT_ID)


def test_application_visibility_includes_applicant_owner_and_admin():
    assert permissions.can_view_application(principal(UserRole.Student, STUDENT_ID), APPLICATION, PROJECT)
    assert permissions.can_view_application(principal(UserRole.Faculty, FACULTY_ID), APPLICATION, PROJECT)
    assert permissions.can_view_application(principal(UserRole.Admin), APPLICATION, PROJECT)
    assert not permissions.can_view_application(principal(UserRole.Student), APPLICATION, PROJECT)


def test_resume_visible_to_student_admin_and_applied_faculty():
    faculty = principal(UserRole.Faculty)

    assert permissions.can_view_resume(principal(UserRole.Student, STUDENT_ID), STUDENT_ID)
    assert permissions.can_view_resume(principal(UserRole.Admin), STUDENT_ID)
    assert permissions.can_view_resume(faculty, STUDENT_ID, applied_to_principal=True)
    assert not permissions.can_view_resume(faculty, STUDENT_ID)
    # Applying somewhere does not open a student's resume to other students
    assert not permissions.can_view_resume(principal(UserRole.Student), STUDENT_ID, applied_to_principal=True)
    assert not permissions.can_view_resume(None, STUDENT_ID, applied_to_principal=True)
