# app/services/auth_service.py

from sqlmodel import select
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError
from loguru import logger
import uuid

from app.core.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.core.security import (
    hash_password,
    verify_password,
    create_access_token,
)
from app.core.utils import to_uuid, utc_now
from app.models.application import Application
from app.models.project import Project
from app.models.user import User, UserRole
from app.schemas.auth import TokenWithUser
from app.schemas.user import UserRead

# Profile columns that signup may fill per role
FACULTY_SIGNUP_FIELDS = ("designation", "school")
STUDENT_SIGNUP_FIELDS = ("roll_number", "program", "specialization", "skills")


# ============================================================================
# FETCH USER BY EMAIL
# ============================================================================
async def get_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(select(User).where(User.email == email.strip().lower()))
    return result.scalar_one_or_none()


# ============================================================================
# FETCH USER BY ID
# ============================================================================
async def get_user_by_id(session: AsyncSession, user_id) -> User | None:
    try:
        user_uuid = to_uuid(user_id, "User")
    except NotFoundError:
        return None
    return await session.get(User, user_uuid)


async def get_user_with_role(session: AsyncSession, user_id, role: UserRole) -> User:
    """Resolve an id to a user of the given role or raise NotFoundError."""
    label = role.value.capitalize()
    user = await session.get(User, to_uuid(user_id, label))
    if not user or user.role != role:
        raise NotFoundError(f"{label} not found")
    return user


# ============================================================================
# ACCOUNT RULES
# ============================================================================
def validate_account_email(email: str, role: UserRole) -> str:
    email = email.strip().lower()
    domain = settings.INSTITUTION_EMAIL_DOMAIN.lower()

    # Admin accounts may use any domain
    if role != UserRole.Admin and not email.endswith(f"@{domain}"):
        raise ValidationError(f"Email must be a valid {domain} address")

    return email


def validate_password(password: str) -> None:
    if len(password) < settings.MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters long"
        )


# ============================================================================
# CREATE USER
# ============================================================================
async def create_user(
    session: AsyncSession,
    name: str,
    email: str,
    password: str,
    role: UserRole,
    **profile,
) -> User:

    if not name or not name.strip():
        raise ValidationError("Name is required")

    email = validate_account_email(email, role)
    validate_password(password)

    if await get_user_by_email(session, email):
        raise ValidationError("User with this email already exists")

    allowed = {
        UserRole.Faculty: FACULTY_SIGNUP_FIELDS,
        UserRole.Student: STUDENT_SIGNUP_FIELDS,
    }.get(role, ())

    user = User(
        id=uuid.uuid4(),
        name=name.strip(),
        email=email,
        password_hash=hash_password(password),
        role=role,
        **{field: value for field, value in profile.items() if field in allowed and value is not None},
    )

    session.add(user)

    try:
        await session.commit()
        await session.refresh(user)
    except IntegrityError:
        await session.rollback()
        raise ValidationError("User with this email already exists")

    logger.info(f"Created {role.value} account {user.email} ({user.id})")
    return user


# ============================================================================
# AUTHENTICATE
# ============================================================================
async def authenticate_user(session: AsyncSession, email: str, password: str) -> User | None:
    user = await get_user_by_email(session, email)
    if not user:
        return None

    if not verify_password(password, user.password_hash):
        return None

    return user


# ============================================================================
# CREATE LOGIN RESPONSE
# ============================================================================
def create_login_response(user: User, message: str | None = None) -> TokenWithUser:
    role = user.role.value if isinstance(user.role, UserRole) else str(user.role)

    token = create_access_token(subject=str(user.id), data={"role": role})

    return TokenWithUser(
        message=message,
        token=token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user=UserRead.model_validate(user),
    )


# ============================================================================
# PASSWORD CHANGE
# ============================================================================
async def change_password(session: AsyncSession, user: User, old_password: str, new_password: str):
    if not verify_password(old_password, user.password_hash):
        raise ValidationError("Old password incorrect")

    if old_password == new_password:
        raise ValidationError("New password must be different")

    validate_password(new_password)

    user.password_hash = hash_password(new_password)
    user.updated_at = utc_now()
    session.add(user)
    await session.commit()


# ============================================================================
# LIST USERS
# ============================================================================
async def list_users(session: AsyncSession) -> list[User]:
    result = await session.execute(select(User).order_by(User.created_at.desc()))
    return result.scalars().all()


async def list_faculty(session: AsyncSession) -> list[User]:
    result = await session.execute(
        select(User).where(User.role == UserRole.Faculty).order_by(User.name.asc())
    )
    return result.scalars().all()


# ============================================================================
# UPDATE PROFILE
# ============================================================================
async def update_profile(session: AsyncSession, user: User, changes: dict) -> User:
    """Copies the provided (non-None) fields onto the user row."""
    for field, value in changes.items():
        if value is None or not hasattr(user, field):
            continue
        if field == "name" and not str(value).strip():
            raise ValidationError("Name cannot be empty")
        setattr(user, field, value)

    user.updated_at = utc_now()
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


# ============================================================================
# DELETE USER
# ============================================================================
async def delete_user_by_id(session: AsyncSession, user_id) -> None:
    """
    Removes a user and everything hanging off it: a faculty member's projects
    and their applications, or a student's applications.
    """
    user = await get_user_by_id(session, user_id)
    if not user:
        raise NotFoundError("User not found")

    if user.role == UserRole.Faculty:
        await session.execute(delete(Application).where(Application.faculty_id == user.id))
        await session.execute(delete(Project).where(Project.faculty_id == user.id))
    elif user.role == UserRole.Student:
        await session.execute(delete(Application).where(Application.student_id == user.id))

    await session.delete(user)
    await session.commit()
    logger.info(f"Deleted {user.role.value} account {user.email} ({user.id})")
