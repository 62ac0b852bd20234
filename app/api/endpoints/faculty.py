# app/api/endpoints/faculty.py

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session, get_current_user
from app.core.exceptions import ForbiddenError
from app.core.permissions import can_manage_faculty, can_view_applications
from app.core.storage import require_signed_url
from app.models.user import User, UserRole
from app.schemas.application import (
    ApplicationEnvelope,
    ApplicationRead,
    FacultyApplicationItem,
    StatusUpdateRequest,
)
from app.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate
from app.schemas.user import FacultyDetail, FacultyProfileUpdate, FacultyRead
from app.services import listing_service
from app.services.application_service import REVIEW_FIELDS, transition_application
from app.services.auth_service import get_user_with_role, list_faculty, update_profile
from app.services.project_service import (
    create_project,
    delete_project,
    get_faculty_project,
    list_projects_for_faculty,
    update_project,
)

router = APIRouter(prefix="/api/faculty", tags=["Faculty"])


# ------------------------------------------------------------
# PUBLIC DIRECTORY
# ------------------------------------------------------------
@router.get("/", response_model=List[FacultyRead])
async def get_all_faculty(session: AsyncSession = Depends(get_db_session)):
    return await list_faculty(session)


@router.get("/{faculty_id}", response_model=FacultyDetail)
async def get_faculty(faculty_id: str, session: AsyncSession = Depends(get_db_session)):
    faculty = await get_user_with_role(session, faculty_id, UserRole.Faculty)
    projects = await list_projects_for_faculty(session, faculty.id)

    detail = FacultyDetail.model_validate(faculty)
    detail.projects = [ProjectRead.model_validate(p) for p in projects]
    return detail


# ------------------------------------------------------------
# PROFILE (owner or admin)
# ------------------------------------------------------------
@router.put("/{faculty_id}", response_model=FacultyRead)
async def update_faculty_profile(
    faculty_id: str,
    payload: FacultyProfileUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    if not can_manage_faculty(current_user, faculty_id):
        raise ForbiddenError("Not authorized to update this profile")

    faculty = await get_user_with_role(session, faculty_id, UserRole.Faculty)
    return await update_profile(session, faculty, payload.model_dump(exclude_none=True))


# ------------------------------------------------------------
# PROJECTS
# ------------------------------------------------------------
@router.post("/{faculty_id}/projects", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
async def add_project(
    faculty_id: str,
    payload: ProjectCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await create_project(session, faculty_id, payload.model_dump(), current_user)


@router.put("/{faculty_id}/projects/{project_id}", response_model=ProjectRead)
async def edit_project(
    faculty_id: str,
    project_id: str,
    payload: ProjectUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    return await update_project(session, faculty_id, project_id, payload.model_dump(), current_user)


@router.delete("/{faculty_id}/projects/{project_id}")
async def remove_project(
    faculty_id: str,
    project_id: str,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    await delete_project(session, faculty_id, project_id, current_user)
    return {"message": "Project deleted successfully"}


@router.get("/{faculty_id}/projects/{project_id}/attachments")
async def get_project_attachments(
    faculty_id: str,
    project_id: str,
    session: AsyncSession = Depends(get_db_session),
):
    # Public like the catalogue; links expire after an hour
    _, project = await get_faculty_project(session, faculty_id, project_id)
    return [
        {"path": path, "url": require_signed_url(path)}
        for path in project.attachment_urls
    ]


# ------------------------------------------------------------
# APPLICATIONS (faculty triage)
# ------------------------------------------------------------
@router.get("/{faculty_id}/applications", response_model=List[FacultyApplicationItem])
async def get_faculty_applications(
    faculty_id: str,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    if not can_manage_faculty(current_user, faculty_id):
        raise ForbiddenError("Not authorized to view these applications")

    faculty = await get_user_with_role(session, faculty_id, UserRole.Faculty)
    return await listing_service.list_faculty_applications(session, faculty.id)


@router.get("/{faculty_id}/projects/{project_id}/applications", response_model=List[ApplicationRead])
async def get_project_applications(
    faculty_id: str,
    project_id: str,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    _, project = await get_faculty_project(session, faculty_id, project_id)

    if not can_view_applications(current_user, project):
        raise ForbiddenError("Not authorized to view these applications")

    return await listing_service.list_project_applications(session, project.id)


@router.put(
    "/{faculty_id}/projects/{project_id}/applications/{application_id}",
    response_model=ApplicationEnvelope,
)
async def update_application_status(
    faculty_id: str,
    project_id: str,
    application_id: str,
    payload: StatusUpdateRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    application = await transition_application(
        session,
        faculty_id,
        project_id,
        application_id,
        payload.status,
        current_user,
        review=payload.model_dump(include=set(REVIEW_FIELDS), exclude_none=True),
        expected_version=payload.version,
    )

    return ApplicationEnvelope(
        message="Application status updated successfully",
        application=ApplicationRead.model_validate(application),
    )
