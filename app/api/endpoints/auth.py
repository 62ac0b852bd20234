# app/api/endpoints/auth.py

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session, get_current_user
from app.core.config import settings
from app.core.exceptions import ValidationError
from app.core.rate_limiter import limiter
from app.models.user import User, UserRole
from app.schemas.auth import LoginRequest, SignupRequest, TokenWithUser
from app.schemas.user import UserRead
from app.services.auth_service import (
    authenticate_user,
    create_login_response,
    create_user,
)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


# -------------------------------------------------------------------
# SIGNUP (students and faculty register themselves)
# -------------------------------------------------------------------
@router.post("/signup", response_model=TokenWithUser, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def signup(
    request: Request,
    payload: SignupRequest,
    session: AsyncSession = Depends(get_db_session),
):
    if payload.role == UserRole.Admin:
        raise ValidationError("Admin accounts cannot be self-registered")

    user = await create_user(
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

    return create_login_response(user, message="User created successfully")


# -------------------------------------------------------------------
# LOGIN (any role)
# -------------------------------------------------------------------
@router.post("/login", response_model=TokenWithUser)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login(
    request: Request,
    payload: LoginRequest,
    session: AsyncSession = Depends(get_db_session),
):
    user = await authenticate_user(session, payload.email, payload.password)

    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return create_login_response(user, message="Login successful")


# -------------------------------------------------------------------
# CURRENT USER
# -------------------------------------------------------------------
@router.get("/me", response_model=UserRead)
async def me(current_user: User = Depends(get_current_user)):
    return current_user
