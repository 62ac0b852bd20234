# app/models/project.py

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import Integer, String, Text, DateTime, ForeignKey, JSON, Uuid
from sqlalchemy import Enum as SAEnum
from datetime import datetime
import uuid
from typing import Optional, List

from app.core.utils import utc_now
from app.models.enums import ProjectStatus, enum_values


class Project(SQLModel, table=True):
    __tablename__ = "projects"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        sa_column=Column(Uuid(as_uuid=True), primary_key=True)
    )

    # Owning faculty member
    faculty_id: uuid.UUID = Field(
        sa_column=Column(
            Uuid(as_uuid=True),
            ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )

    title: str = Field(sa_column=Column(String, nullable=False))
    description: str = Field(sa_column=Column(Text, nullable=False))
    domain: str = Field(default="", sa_column=Column(String, nullable=False))

    required_skills: List[str] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )

    students_required: int = Field(
        default=1, sa_column=Column(Integer, nullable=False)
    )

    application_deadline: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=True), nullable=True)
    )

    status: ProjectStatus = Field(
        default=ProjectStatus.Planning,
        sa_column=Column(
            SAEnum(ProjectStatus, name="project_status", values_callable=enum_values),
            nullable=False,
        )
    )

    # Display names of team members; selected applicants are appended here
    members: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    attachment_urls: List[str] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False)
    )
