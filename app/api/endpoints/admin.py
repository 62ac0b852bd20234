# app/api/endpoints/admin.py

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session
from app.core.rbac import require_admin
from app.models.user import User
from app.schemas.application import AdminApplicationItem
from app.schemas.auth import SignupRequest
from app.schemas.project import AdminProjectItem
from app.schemas.user import AdminProfile, AdminProfileUpdate, AdminUserRow, UserRead
from app.services import listing_service
from app.services.auth_service import create_user, delete_user_by_id, list_users, update_profile

router = APIRouter(prefix="/api/admin", tags=["Admin"])


# -------------------------------------------------------------------
# OWN PROFILE
# -------------------------------------------------------------------
@router.get("/profile", response_model=AdminProfile)
async def get_admin_profile(current_user: User = Depends(require_admin)):
    return current_user


@router.put("/profile", response_model=AdminProfile)
async def update_admin_profile(
    payload: AdminProfileUpdate,
    current_user: User = Depends(require_admin),
    session: AsyncSession = Depends(get_db_session),
):
    return await update_profile(session, current_user, payload.model_dump(exclude_none=True))


# -------------------------------------------------------------------
# USERS
# -------------------------------------------------------------------
@router.get("/users", response_model=List[AdminUserRow])
async def get_users(
    session: AsyncSession = Depends(get_db_session),
    _: User = Depends(require_admin),
):
    return [
        AdminUserRow(
            id=u.id,
            name=u.name,
            email=u.email,
            role=u.role,
            created_at=u.created_at,
        )
        for u in await list_users(session)
    ]


@router.post("/users", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_any_user(
    payload: SignupRequest,
    session: AsyncSession = Depends(get_db_session),
    _: User = Depends(require_admin),
):
    return await create_user(
        session,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
        **payload.model_dump(
            exclude={"name", "email", "password", "role"},
            exclude_none=True,
        ),
    )


@router.delete("/users/{user_id}")
async def remove_user(
    user_id: str,
    session: AsyncSession = Depends(get_db_session),
    _: User = Depends(require_admin),
):
    await delete_user_by_id(session, user_id)
    return {"message": "User deleted successfully"}


# -------------------------------------------------------------------
# GLOBAL LISTINGS
# -------------------------------------------------------------------
@router.get("/projects", response_model=List[AdminProjectItem])
async def get_projects(
    session: AsyncSession = Depends(get_db_session),
    _: User = Depends(require_admin),
):
    return await listing_service.list_admin_projects(session)


@router.get("/applications", response_model=List[AdminApplicationItem])
async def get_applications(
    session: AsyncSession = Depends(get_db_session),
    _: User = Depends(require_admin),
):
    return await listing_service.list_all_applications(session)
