# app/services/project_service.py


from loguru import logger
from sqlmodel import select
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from app.core.permissions import can_manage_faculty, can_mutate_project, is_admin
from app.core.utils import split_list, to_uuid, utc_now
from app.models.application import Application
from app.models.enums import ProjectStatus
from app.models.project import Project
from app.models.user import User, UserRole
from app.services.auth_service import get_user_with_role


def parse_project_status(value) -> ProjectStatus:
    try:
        return ProjectStatus(value)
    except ValueError:
        allowed = [s.value for s in ProjectStatus]
        raise ValidationError(f"Invalid project status '{value}'. Allowed: {allowed}")


def _students_required(value) -> int:
    if value is None:
        return 1
    if int(value) < 1:
        raise ValidationError("studentsRequired must be at least 1")
    return int(value)


# ------------------------------------------------------------
# LOOKUPS
# ------------------------------------------------------------
async def get_faculty_project(session: AsyncSession, faculty_id, project_id) -> tuple[User, Project]:
    """Resolve (faculty, project) where the project belongs to that faculty."""
    faculty = await get_user_with_role(session, faculty_id, UserRole.Faculty)

    project = await session.get(Project, to_uuid(project_id, "Project"))
    if not project or project.faculty_id != faculty.id:
        raise NotFoundError("Project not found")

    return faculty, project


async def list_projects_for_faculty(session: AsyncSession, faculty_id) -> list[Project]:
    result = await session.execute(
        select(Project)
        .where(Project.faculty_id == faculty_id)
        .order_by(Project.created_at.asc())
    )
    return result.scalars().all()


# ------------------------------------------------------------
# CREATE
# ------------------------------------------------------------
async def create_project(session: AsyncSession, faculty_id, payload: dict, actor: User) -> Project:
    if not can_manage_faculty(actor, faculty_id):
        raise ForbiddenError("Not authorized to add projects for this faculty")

    faculty = await get_user_with_role(session, faculty_id, UserRole.Faculty)

    title = (payload.get("title") or "").strip()
    description = (payload.get("description") or "").strip()
    if not title or not description:
        raise ValidationError("Title and description are required")

    status = payload.get("status")
    project = Project(
        faculty_id=faculty.id,
        title=title,
        description=description,
        domain=payload.get("domain") or "",
        required_skills=split_list(payload.get("required_skills")),
        members=split_list(payload.get("members")),
        students_required=_students_required(payload.get("students_required")),
        application_deadline=payload.get("application_deadline"),
        status=parse_project_status(status) if status else ProjectStatus.Planning,
        attachment_urls=list(payload.get("attachment_urls") or []),
    )

    session.add(project)
    await session.commit()
    await session.refresh(project)

    logger.info(f"Faculty {faculty.id} created project {project.id} '{project.title}'")
    return project


# ------------------------------------------------------------
# UPDATE
# ------------------------------------------------------------
async def update_project(session: AsyncSession, faculty_id, project_id, payload: dict, actor: User) -> Project:
    _, project = await get_faculty_project(session, faculty_id, project_id)

    if not can_mutate_project(actor, project):
        raise ForbiddenError("Not authorized to update this project")

    # Only provided fields change
    for field in ("title", "description", "domain"):
        if payload.get(field):
            setattr(project, field, payload[field].strip())

    if payload.get("status"):
        project.status = parse_project_status(payload["status"])

    if payload.get("members") is not None:
        project.members = split_list(payload["members"])

    if payload.get("required_skills") is not None:
        project.required_skills = split_list(payload["required_skills"])

    if payload.get("students_required") is not None:
        project.students_required = _students_required(payload["students_required"])

    if payload.get("application_deadline") is not None:
        project.application_deadline = payload["application_deadline"]

    project.updated_at = utc_now()
    session.add(project)
    await session.commit()
    await session.refresh(project)
    return project


async def add_project_attachment(session: AsyncSession, project: Project, path: str) -> Project:
    project.attachment_urls = [*project.attachment_urls, path]
    project.updated_at = utc_now()
    session.add(project)
    await session.commit()
    await session.refresh(project)
    return project


# ------------------------------------------------------------
# DELETE (cascades to the project's applications)
# ------------------------------------------------------------
async def delete_project(
    session: AsyncSession,
    faculty_id,
    project_id,
    actor: User,
    admin_only: bool = False,
) -> None:
    if admin_only and not is_admin(actor):
        raise ForbiddenError("Not authorized to delete projects")

    _, project = await get_faculty_project(session, faculty_id, project_id)

    if not can_mutate_project(actor, project):
        raise ForbiddenError("Not authorized to delete this project")

    await session.execute(delete(Application).where(Application.project_id == project.id))
    await session.delete(project)
    await session.commit()

    logger.info(f"Project {project.id} deleted by {actor.id}")
