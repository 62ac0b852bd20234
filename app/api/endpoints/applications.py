from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session, get_current_user
from app.core.exceptions import ForbiddenError
from app.core.permissions import can_view_application, can_view_student
from app.core.rbac import require_student
from app.models.project import Project
from app.models.user import User, UserRole
from app.schemas.application import (
    ApplicationEnvelope,
    ApplicationRead,
    ApplicationSubmit,
    MessageResponse,
    StatusUpdateRequest,
    StudentApplicationItem,
)
from app.services.application_service import (
    REVIEW_FIELDS,
    get_application,
    submit_application,
    transition_application_by_id,
    withdraw_application,
)
from app.services.audit_service import list_application_history
from app.services.auth_service import get_user_with_role
from app.services.listing_service import list_student_applications

router = APIRouter(
    prefix="/api/applications",
    tags=["Applications"]
)


# ------------------------------------------------------------
# SUBMIT (student applies for themselves)
# ------------------------------------------------------------
@router.post("/", response_model=ApplicationEnvelope, status_code=status.HTTP_201_CREATED)
async def create_application(
    payload: ApplicationSubmit,
    current_user: User = Depends(require_student),
    session: AsyncSession = Depends(get_db_session),
):
    application = await submit_application(
        session,
        student_id=current_user.id,
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


# ------------------------------------------------------------
# A STUDENT'S APPLICATIONS (student owner or admin)
# ------------------------------------------------------------
@router.get("/student/{student_id}", response_model=List[StudentApplicationItem])
async def get_student_applications(
    student_id: str,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    if not can_view_student(current_user, student_id):
        raise ForbiddenError("Not authorized to view these applications")

    student = await get_user_with_role(session, student_id, UserRole.Student)
    return await list_student_applications(session, student.id)


# ------------------------------------------------------------
# STATUS CHANGE (faculty owner or admin)
# ------------------------------------------------------------
@router.put("/{application_id}/status", response_model=ApplicationEnvelope)
async def update_status(
    application_id: str,
    payload: StatusUpdateRequest,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    application = await transition_application_by_id(
        session,
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


# ------------------------------------------------------------
# HISTORY (applicant, owning faculty or admin)
# ------------------------------------------------------------
@router.get("/{application_id}/history")
async def get_history(
    application_id: str,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    application = await get_application(session, application_id)
    project = await session.get(Project, application.project_id)

    if not can_view_application(current_user, application, project):
        raise ForbiddenError("Not authorized to view this application")

    entries = await list_application_history(session, application.id)
    return [
        {
            "action": e.action,
            "actor_name": e.actor_name,
            "actor_role": e.actor_role,
            "details": e.details,
            "timestamp": e.timestamp,
        }
        for e in entries
    ]


# ------------------------------------------------------------
# WITHDRAW (applicant only, while Applied)
# ------------------------------------------------------------
@router.delete("/{application_id}", response_model=MessageResponse)
async def withdraw(
    application_id: str,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
):
    await withdraw_application(session, application_id, current_user)
    return {"message": "Application withdrawn successfully"}
