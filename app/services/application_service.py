# app/services/application_service.py

"""
Application lifecycle: submit, status transition, withdrawal.

This module is the only writer of Application.status and the place where
the cross-entity side effect (selected applicant joins the project's member
list) is applied.
"""

from typing import Optional

from loguru import logger
from sqlmodel import select
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError

from app.core.constants import WITHDRAWABLE_STATUSES, is_transition_allowed
from app.core.exceptions import (
    ConflictError,
    DuplicateApplicationError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from app.core.permissions import can_transition_application, can_withdraw
from app.core.utils import split_list, to_uuid, utc_now
from app.models.application import Application
from app.models.enums import ApplicationStatus
from app.models.project import Project
from app.models.user import User, UserRole
from app.services.audit_service import record_activity
from app.services.project_service import get_faculty_project

# Optional fields a faculty member may set alongside a status change
REVIEW_FIELDS = ("feedback", "interview_date", "interview_location", "interview_notes")


def parse_application_status(value) -> ApplicationStatus:
    try:
        return ApplicationStatus(value)
    except ValueError:
        raise ValidationError("Invalid status value")


async def get_application(session: AsyncSession, application_id) -> Application:
    application = await session.get(Application, to_uuid(application_id, "Application"))
    if not application:
        raise NotFoundError("Application not found")
    return application


async def find_existing_application(session: AsyncSession, student_id, project_id) -> Application | None:
    result = await session.execute(
        select(Application).where(
            (Application.student_id == student_id) &
            (Application.project_id == project_id)
        )
    )
    return result.scalars().first()


async def has_applied_to_faculty(session: AsyncSession, student_id, faculty_id) -> bool:
    result = await session.execute(
        select(Application.id).where(
            (Application.student_id == student_id) &
            (Application.faculty_id == faculty_id)
        ).limit(1)
    )
    return result.first() is not None


# ------------------------------------------------------------
# SUBMIT
# ------------------------------------------------------------
async def submit_application(
    session: AsyncSession,
    student_id,
    faculty_id,
    project_id,
    cover_letter: str,
    actor: User,
    student_skills=None,
    student_program: Optional[str] = None,
) -> Application:

    # 1. Students apply only for themselves
    if str(getattr(actor, "id", "")) != str(student_id):
        raise ForbiddenError("Not authorized to submit application for another student")

    if not project_id or not faculty_id:
        raise ValidationError("Project ID and Faculty ID are required")

    # 2. Resolve student, then faculty + project
    student = await session.get(User, to_uuid(student_id, "Student"))
    if not student:
        raise NotFoundError("Student not found")
    if student.role != UserRole.Student:
        raise ValidationError("Only students can apply to projects")

    faculty, project = await get_faculty_project(session, faculty_id, project_id)

    # 3. One application per (student, project)
    if await find_existing_application(session, student.id, project.id):
        raise DuplicateApplicationError()

    # 4. Snapshot the student's name/email as they are right now
    application = Application(
        project_id=project.id,
        faculty_id=faculty.id,
        student_id=student.id,
        student_name=student.name,
        student_email=student.email,
        cover_letter=cover_letter or "",
        student_skills=split_list(student_skills),
        student_program=student_program,
        status=ApplicationStatus.Applied,
    )
    session.add(application)

    record_activity(
        session,
        action="APPLICATION_SUBMITTED",
        actor=actor,
        application_id=application.id,
        project_id=project.id,
        details={"project_title": project.title},
    )

    # 5. Commit; the unique constraint catches a concurrent duplicate
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise DuplicateApplicationError()

    await session.refresh(application)
    logger.info(f"Student {student.id} applied to project {project.id} ({application.id})")
    return application


# ------------------------------------------------------------
# TRANSITION
# ------------------------------------------------------------
async def transition_application(
    session: AsyncSession,
    faculty_id,
    project_id,
    application_id,
    requested_status,
    actor: User,
    review: Optional[dict] = None,
    expected_version: Optional[int] = None,
    transitions=None,
) -> Application:
    """
    Move an application to requested_status.

    - requested_status outside the enum -> ValidationError
    - faculty / project / application not resolvable -> NotFoundError
    - actor neither owning faculty nor admin -> ForbiddenError
    - move not in the transition table -> InvalidStateError
    - expected_version given and stale -> ConflictError (nothing written)

    Without expected_version concurrent writers are last-writer-wins.
    """
    new_status = parse_application_status(requested_status)

    _, project = await get_faculty_project(session, faculty_id, project_id)

    application = await session.get(Application, to_uuid(application_id, "Application"))
    if not application or application.project_id != project.id:
        raise NotFoundError("Application not found")

    if not can_transition_application(actor, project):
        logger.warning(f"User {actor.id} refused status change on application {application.id}")
        raise ForbiddenError("Not authorized to update this application")

    return await _apply_transition(
        session, project, application, new_status, actor,
        review=review,
        expected_version=expected_version,
        transitions=transitions,
    )


async def transition_application_by_id(
    session: AsyncSession,
    application_id,
    requested_status,
    actor: User,
    review: Optional[dict] = None,
    expected_version: Optional[int] = None,
) -> Application:
    """Same as transition_application, with faculty/project taken from the row."""
    parse_application_status(requested_status)
    application = await get_application(session, application_id)

    return await transition_application(
        session,
        application.faculty_id,
        application.project_id,
        application.id,
        requested_status,
        actor,
        review=review,
        expected_version=expected_version,
    )


async def _apply_transition(
    session: AsyncSession,
    project: Project,
    application: Application,
    new_status: ApplicationStatus,
    actor: User,
    review: Optional[dict],
    expected_version: Optional[int],
    transitions,
) -> Application:
    old_status = ApplicationStatus(application.status)

    # None means the module table; an empty table forbids every move
    if not is_transition_allowed(old_status, new_status, transitions):
        raise InvalidStateError(
            f"Cannot move application from '{old_status.value}' to '{new_status.value}'"
        )

    values = {
        "status": new_status,
        "version": Application.version + 1,
        "updated_at": utc_now(),
    }
    for field in REVIEW_FIELDS:
        if review and review.get(field) is not None:
            values[field] = review[field]

    stmt = update(Application).where(Application.id == application.id)
    if expected_version is not None:
        # Compare-and-set: only write if nobody moved the row since it was read
        stmt = stmt.where(Application.version == expected_version)

    result = await session.execute(stmt.values(**values).execution_options(synchronize_session=False))
    if result.rowcount == 0:
        await session.rollback()
        if expected_version is None:
            # Row vanished (withdrawn) between the read and the write
            raise NotFoundError("Application not found")
        raise ConflictError(
            "Application was modified by someone else. Reload and try again.",
            details={"expected_version": expected_version},
        )

    # Selected applicants join the team, once, keyed on the snapshot name
    if new_status == ApplicationStatus.Selected and application.student_name not in project.members:
        project.members = [*project.members, application.student_name]
        project.updated_at = utc_now()
        session.add(project)

    record_activity(
        session,
        action="APPLICATION_STATUS_CHANGED",
        actor=actor,
        application_id=application.id,
        project_id=project.id,
        details={"from": old_status.value, "to": new_status.value},
    )

    await session.commit()
    await session.refresh(application)

    logger.info(
        f"Application {application.id}: {old_status.value} -> {new_status.value} by {actor.id}"
    )
    return application


# ------------------------------------------------------------
# WITHDRAW
# ------------------------------------------------------------
async def withdraw_application(
    session: AsyncSession,
    application_id,
    actor: User,
    student_id=None,
) -> None:
    """
    Hard-deletes the application. Only its student may do this, and only
    while it is still Applied. Admins have no withdrawal rights.
    """
    if student_id is not None and str(getattr(actor, "id", "")) != str(student_id):
        raise ForbiddenError("Not authorized to withdraw this application")

    application = await get_application(session, application_id)

    if not can_withdraw(actor, application):
        raise ForbiddenError("Not authorized to withdraw this application")

    status = ApplicationStatus(application.status)
    if status not in WITHDRAWABLE_STATUSES:
        raise InvalidStateError(f"Cannot withdraw application with status '{status.value}'")

    record_activity(
        session,
        action="APPLICATION_WITHDRAWN",
        actor=actor,
        application_id=application.id,
        project_id=application.project_id,
    )

    await session.delete(application)
    await session.commit()

    logger.info(f"Student {actor.id} withdrew application {application.id}")
