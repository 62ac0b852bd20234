# app/schemas/project.py

from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import List, Optional
from uuid import UUID
from datetime import datetime

from app.models.enums import ProjectStatus


# ============================================================
# FACULTY → create / update a project
# ============================================================
class ProjectCreate(BaseModel):
    title: str
    description: str
    domain: Optional[str] = None
    # Lists may come as JSON arrays or comma separated strings
    required_skills: Optional[List[str] | str] = None
    members: Optional[List[str] | str] = None
    students_required: Optional[int] = None
    application_deadline: Optional[datetime] = None
    status: Optional[str] = None
    attachment_urls: Optional[List[str]] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ProjectUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    domain: Optional[str] = None
    required_skills: Optional[List[str] | str] = None
    members: Optional[List[str] | str] = None
    students_required: Optional[int] = None
    application_deadline: Optional[datetime] = None
    status: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


# ============================================================
# READ
# ============================================================
class ProjectRead(BaseModel):
    id: UUID
    faculty_id: UUID
    title: str
    description: str
    domain: str
    required_skills: List[str]
    students_required: int
    application_deadline: Optional[datetime]
    status: ProjectStatus
    members: List[str]
    attachment_urls: List[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# Public catalogue row
class ProjectListItem(BaseModel):
    id: UUID
    title: str
    description: str
    status: ProjectStatus
    members: List[str]
    domain: str
    required_skills: List[str]
    students_required: int
    application_deadline: Optional[datetime]
    attachment_urls: List[str]
    created_at: datetime
    faculty_id: UUID
    faculty_name: str
    faculty_email: str


# Admin overview row
class AdminProjectItem(BaseModel):
    id: UUID
    title: str
    description: str
    status: ProjectStatus
    domain: str
    faculty_id: UUID
    faculty_name: str
    applicants: int
    created_at: datetime
