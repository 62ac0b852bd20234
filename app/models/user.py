# app/models/user.py

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import DateTime, String, Text, JSON, Uuid
from sqlalchemy import Enum as SAEnum
from datetime import datetime
import uuid
from enum import Enum
from typing import Optional, List, Dict

from app.core.utils import utc_now
from app.models.enums import enum_values


class UserRole(str, Enum):
    Student = "student"
    Faculty = "faculty"
    Admin = "admin"


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        sa_column=Column(Uuid(as_uuid=True), primary_key=True)
    )

    name: str = Field(nullable=False)
    email: str = Field(nullable=False, index=True, unique=True)
    password_hash: str = Field(nullable=False)

    role: UserRole = Field(
        sa_column=Column(
            SAEnum(UserRole, name="user_role", values_callable=enum_values),
            nullable=False,
        )
    )

    # --- Faculty profile ---
    designation: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))
    school: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))
    cabin_location: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))
    overview: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    # [{"day": "Monday", "hours": "2-4 PM"}]
    free_timings: List[Dict[str, str]] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )

    # --- Student profile ---
    roll_number: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))
    program: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))
    specialization: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))
    resume_url: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))
    github: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))
    linkedin: Optional[str] = Field(default=None, sa_column=Column(String, nullable=True))
    skills: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    interests: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    profile_picture_url: Optional[str] = Field(
        default=None, sa_column=Column(String, nullable=True)
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
