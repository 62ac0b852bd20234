# app/api/endpoints/students.py

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session, get_current_user
from app.core.exceptions import ForbiddenError, NotFoundError
from app.core.permissions import can_view_resume, can_view_student
from app.core.storage import require_signed_url
from app.core.utils import split_list
from app.models.user import User, UserRole
from app.schemas.application import (
    ApplicationEnvelope,
    ApplicationRead,
    ApplicationSubmit,
    MessageResponse,
    StudentApplicationItem,
)
from app.schemas.user import StudentProfileUpdate, StudentRead
from app.services.application_service import (
    has_applied_to_faculty,
    submit_application,
    withdraw_application,
)
from app.services.auth_service import get_user_with_role, update_profile
from app.services.listing_service import list_student_applications

router = APIRouter(
    prefix="/api/students",
    tags=["Students"]
)


# ------------------------------------------------------------
# PROFILE (student or admin)
# ------------------------------------------------------------
@router.get("/{student_id}", response_model=StudentRead)
async def get_student_profile(
    student_id: str,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    if not can_view_student(current_user, student_id):
        raise ForbiddenError("Not authorized to view this profile")

    return await get_user_with_role(session, student_id, UserRole.Student)


@router.put("/{student_id}", response_model=StudentRead)
async def update_student_profile(
    student_id: str,
    payload: StudentProfileUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    if not can_view_student(current_user, student_id):
        raise ForbiddenError("Not authorized to update this profile")

    student = await get_user_with_role(session, student_id, UserRole.Student)

    changes = payload.model_dump(exclude_none=True)
    for field in ("skills", "interests"):
        if field in changes:
            changes[field] = split_list(changes[field])

    return await update_profile(session, student, changes)


# ------------------------------------------------------------
# RESUME (student, admin, or a faculty member they applied to)
# ------------------------------------------------------------
@router.get("/{student_id}/resume")
async def get_student_resume(
    student_id: str,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    student = await get_user_with_role(session, student_id, UserRole.Student)

    applied = await has_applied_to_faculty(session, student.id, current_user.id)
    if not can_view_resume(current_user, student.id, applied_to_principal=applied):
        raise ForbiddenError("Not authorized to view this resume")

    if not student.resume_url:
        raise NotFoundError("Resume not found")

    return {"path": student.resume_url, "url": require_signed_url(student.resume_url)}


# ------------------------------------------------------------
# APPLICATIONS
# ------------------------------------------------------------
@router.get("/{student_id}/applications", response_model=List[StudentApplicationItem])
async def get_my_applications(
    student_id: str,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    if not can_view_student(current_user, student_id):
        raise ForbiddenError("Not authorized to view these applications")

    student = await get_user_with_role(session, student_id, UserRole.Student)
    return await list_student_applications(session, student.id)


@router.post(
    "/{student_id}/applications",
    response_model=ApplicationEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def apply_to_project(
    student_id: str,
    payload: ApplicationSubmit,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    application = await submit_application(
        session,
        student_id=student_id,
        faculty_id=payload.faculty_id,
        project_id=payload.project_id,
        cover_letter=payload.cover_letter,
        actor=current_user,
        student_skills=payload.student_skills,
        student_program=payload.student_program,
    )

    return ApplicationEnvelope(
        message="Application submitted successfully",
        application=ApplicationRead.model_validate(application),
    )


@router.delete("/{student_id}/applications/{application_id}", response_model=MessageResponse)
async def withdraw_my_application(
    student_id: str,
    application_id: str,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    await withdraw_application(session, application_id, current_user, student_id=student_id)
    return {"message": "Application withdrawn successfully"}
