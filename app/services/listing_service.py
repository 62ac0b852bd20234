# app/services/listing_service.py

"""
Read-only projections that flatten faculty -> project -> application into
list rows. Every call queries fresh; nothing is cached.
"""

from sqlmodel import select
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.application import Application
from app.models.project import Project
from app.models.user import User, UserRole


# ------------------------------------------------------------
# PROJECTS
# ------------------------------------------------------------
async def list_projects(session: AsyncSession) -> list[dict]:
    result = await session.execute(
        select(Project, User.name, User.email)
        .join(User, User.id == Project.faculty_id)
        .where(User.role == UserRole.Faculty)
        .order_by(Project.created_at.desc())
    )

    return [
        {
            "id": project.id,
            "title": project.title,
            "description": project.description,
            "status": project.status,
            "members": project.members,
            "domain": project.domain,
            "required_skills": project.required_skills,
            "students_required": project.students_required,
            "application_deadline": project.application_deadline,
            "attachment_urls": project.attachment_urls,
            "created_at": project.created_at,
            "faculty_id": project.faculty_id,
            "faculty_name": faculty_name,
            "faculty_email": faculty_email,
        }
        for project, faculty_name, faculty_email in result.all()
    ]


async def list_admin_projects(session: AsyncSession) -> list[dict]:
    applicants = (
        select(Application.project_id, func.count(Application.id).label("applicants"))
        .group_by(Application.project_id)
        .subquery()
    )

    result = await session.execute(
        select(Project, User.name, func.coalesce(applicants.c.applicants, 0))
        .join(User, User.id == Project.faculty_id)
        .outerjoin(applicants, applicants.c.project_id == Project.id)
        .order_by(Project.created_at.desc())
    )

    return [
        {
            "id": project.id,
            "title": project.title,
            "description": project.description,
            "status": project.status,
            "domain": project.domain,
            "faculty_id": project.faculty_id,
            "faculty_name": faculty_name,
            "applicants": count,
            "created_at": project.created_at,
        }
        for project, faculty_name, count in result.all()
    ]


# ------------------------------------------------------------
# APPLICATIONS
# ------------------------------------------------------------
async def list_project_applications(session: AsyncSession, project_id) -> list[Application]:
    result = await session.execute(
        select(Application)
        .where(Application.project_id == project_id)
        .order_by(Application.applied_at.asc())
    )
    return result.scalars().all()


async def list_faculty_applications(session: AsyncSession, faculty_id) -> list[dict]:
    result = await session.execute(
        select(Application, Project.title)
        .join(Project, Project.id == Application.project_id)
        .where(Project.faculty_id == faculty_id)
        .order_by(Application.applied_at.desc())
    )

    return [
        {
            "id": app.id,
            "project_id": app.project_id,
            "project_title": title,
            "student_id": app.student_id,
            "student_name": app.student_name,
            "student_email": app.student_email,
            "status": app.status,
            "applied_at": app.applied_at,
            "cover_letter": app.cover_letter,
            "version": app.version,
        }
        for app, title in result.all()
    ]


async def list_student_applications(session: AsyncSession, student_id) -> list[dict]:
    """The student's own view of where they have applied."""
    result = await session.execute(
        select(Application, Project.title, User.name)
        .join(Project, Project.id == Application.project_id)
        .join(User, User.id == Project.faculty_id)
        .where(Application.student_id == student_id)
        .order_by(Application.applied_at.desc())
    )

    return [
        {
            "id": app.id,
            "project_id": app.project_id,
            "project_title": title,
            "faculty_id": app.faculty_id,
            "faculty_name": faculty_name,
            "status": app.status,
            "applied_at": app.applied_at,
            "cover_letter": app.cover_letter,
        }
        for app, title, faculty_name in result.all()
    ]


async def list_all_applications(session: AsyncSession) -> list[dict]:
    result = await session.execute(
        select(Application, Project.title, User.name)
        .join(Project, Project.id == Application.project_id)
        .join(User, User.id == Project.faculty_id)
        .order_by(Application.applied_at.desc())
    )

    return [
        {
            "id": app.id,
            "project_id": app.project_id,
            "project_title": title,
            "faculty_id": app.faculty_id,
            "faculty_name": faculty_name,
            "student_id": app.student_id,
            "student_name": app.student_name,
            "student_email": app.student_email,
            "applied_at": app.applied_at,
            "status": app.status,
        }
        for app, title, faculty_name in result.all()
    ]
