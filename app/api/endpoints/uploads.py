# app/api/endpoints/uploads.py

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session, get_current_user
from app.core.constants import ATTACHMENT_CONTENT_TYPES, IMAGE_CONTENT_TYPES, RESUME_CONTENT_TYPES
from app.core.exceptions import ForbiddenError, NotFoundError
from app.core.permissions import can_mutate_project
from app.core.rbac import require_student
from app.core.storage import get_signed_url, require_signed_url, upload_file
from app.models.user import User
from app.services.auth_service import get_user_by_id, update_profile
from app.services.project_service import add_project_attachment, get_faculty_project

router = APIRouter(prefix="/api/uploads", tags=["Uploads"])


# ------------------------------------------------------------
# RESUME (student, PDF only)
# ------------------------------------------------------------
@router.post("/resume")
async def upload_resume(
    file: UploadFile = File(...),
    current_user: User = Depends(require_student),
    session: AsyncSession = Depends(get_db_session),
):
    path = await upload_file(file, f"resumes/{current_user.id}", RESUME_CONTENT_TYPES)
    await update_profile(session, current_user, {"resume_url": path})
    return {"path": path, "url": get_signed_url(path)}


# ------------------------------------------------------------
# PROFILE PICTURE (any user)
# ------------------------------------------------------------
@router.post("/profile-picture")
async def upload_profile_picture(
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    path = await upload_file(file, f"profiles/{current_user.id}", IMAGE_CONTENT_TYPES)
    await update_profile(session, current_user, {"profile_picture_url": path})
    return {"path": path, "url": get_signed_url(path)}


@router.get("/profile-picture/{user_id}")
async def get_profile_picture(
    user_id: str,
    _: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    user = await get_user_by_id(session, user_id)
    if not user or not user.profile_picture_url:
        raise NotFoundError("Profile picture not found")

    return {"path": user.profile_picture_url, "url": require_signed_url(user.profile_picture_url)}


# ------------------------------------------------------------
# PROJECT ATTACHMENT (owning faculty or admin)
# ------------------------------------------------------------
@router.post("/projects/{faculty_id}/{project_id}/attachments")
async def upload_project_attachment(
    faculty_id: str,
    project_id: str,
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    _, project = await get_faculty_project(session, faculty_id, project_id)

    if not can_mutate_project(current_user, project):
        raise ForbiddenError("Not authorized to add attachments to this project")

    path = await upload_file(file, f"projects/{project.id}", ATTACHMENT_CONTENT_TYPES)
    project = await add_project_attachment(session, project, path)
    return {"path": path, "attachment_urls": project.attachment_urls}
