# app/core/permissions.py

"""
Ownership / role predicates.

Every function here is synchronous, side-effect free and total: it answers
True or False and never raises. Callers turn False into ForbiddenError.
A principal is anything with ``id`` and ``role`` attributes (normally the
authenticated User row).
"""

from app.models.user import UserRole


def _role(principal) -> str:
    role = getattr(principal, "role", None)
    if isinstance(role, UserRole):
        return role.value
    return str(role or "").strip().lower()


def _same_id(a, b) -> bool:
    if a is None or b is None:
        return False
    return str(a) == str(b)


def is_admin(principal) -> bool:
    return principal is not None and _role(principal) == UserRole.Admin.value


def can_mutate_project(principal, project) -> bool:
    if principal is None or project is None:
        return False
    return is_admin(principal) or _same_id(getattr(principal, "id", None), getattr(project, "faculty_id", None))


def can_transition_application(principal, project) -> bool:
    # Faculty owner or admin. Students never move an application's status.
    return can_mutate_project(principal, project)


def can_withdraw(principal, application) -> bool:
    # Only the applicant. Admins are deliberately not included.
    if principal is None or application is None:
        return False
    return _same_id(getattr(principal, "id", None), getattr(application, "student_id", None))


def can_view_applications(principal, project) -> bool:
    return can_mutate_project(principal, project)


def can_manage_faculty(principal, faculty_id) -> bool:
    if principal is None:
        return False
    return is_admin(principal) or _same_id(getattr(principal, "id", None), faculty_id)


def can_view_student(principal, student_id) -> bool:
    if principal is None:
        return False
    return is_admin(principal) or _same_id(getattr(principal, "id", None), student_id)


def can_view_application(principal, application, project) -> bool:
    # Applicant, owning faculty or admin
    return can_withdraw(principal, application) or can_view_applications(principal, project)


def can_view_resume(principal, student_id, applied_to_principal: bool = False) -> bool:
    # The student, an admin, or a faculty member the student applied to
    if can_view_student(principal, student_id):
        return True
    return bool(applied_to_principal) and _role(principal) == UserRole.Faculty.value
