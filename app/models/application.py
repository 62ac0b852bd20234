# app/models/application.py

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import Integer, String, Text, DateTime, ForeignKey, JSON, Uuid, UniqueConstraint
from sqlalchemy import Enum as SAEnum
from datetime import datetime
import uuid
from typing import Optional, List

from app.core.utils import utc_now
from app.models.enums import ApplicationStatus, enum_values


class Application(SQLModel, table=True):
    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint("student_id", "project_id", name="uq_application_student_project"),
    )

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        sa_column=Column(Uuid(as_uuid=True), primary_key=True)
    )

    project_id: uuid.UUID = Field(
        sa_column=Column(
            Uuid(as_uuid=True),
            ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )

    # Owner of the project, kept on the row so an application resolves its
    # faculty without going through the project.
    faculty_id: uuid.UUID = Field(
        sa_column=Column(
            Uuid(as_uuid=True),
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )

    student_id: uuid.UUID = Field(
        sa_column=Column(
            Uuid(as_uuid=True),
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )

    # Snapshot taken at submit time. Never refreshed from the users table.
    student_name: str = Field(sa_column=Column(String, nullable=False))
    student_email: str = Field(sa_column=Column(String, nullable=False))

    cover_letter: str = Field(default="", sa_column=Column(Text, nullable=False))

    student_skills: List[str] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    student_program: Optional[str] = Field(
        default=None, sa_column=Column(String, nullable=True)
    )

    status: ApplicationStatus = Field(
        default=ApplicationStatus.Applied,
        sa_column=Column(
            SAEnum(ApplicationStatus, name="application_status", values_callable=enum_values),
            nullable=False,
        )
    )

    feedback: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    interview_date: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=True), nullable=True)
    )
    interview_location: Optional[str] = Field(
        default=None, sa_column=Column(String, nullable=True)
    )
    interview_notes: Optional[str] = Field(
        default=None, sa_column=Column(Text, nullable=True)
    )

    # Bumped on every status transition; used for compare-and-set updates
    version: int = Field(default=1, sa_column=Column(Integer, nullable=False))

    applied_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
