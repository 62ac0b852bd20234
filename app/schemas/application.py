# app/schemas/application.py

from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import List, Optional
from uuid import UUID
from datetime import datetime

from app.models.enums import ApplicationStatus


# ============================================================
# STUDENT → submit an application
# ============================================================
class ApplicationSubmit(BaseModel):
    project_id: Optional[str] = None
    faculty_id: Optional[str] = None
    cover_letter: str = ""
    student_skills: Optional[List[str] | str] = None
    student_program: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


# ============================================================
# FACULTY / ADMIN → move an application through the pipeline
# ============================================================
class StatusUpdateRequest(BaseModel):
    # Plain string: an out-of-range value must surface as a 400 from the
    # lifecycle service, not as a 422 from request parsing.
    status: Optional[str] = None
    feedback: Optional[str] = None
    interview_date: Optional[datetime] = None
    interview_location: Optional[str] = None
    interview_notes: Optional[str] = None
    # Compare-and-set guard; omit for last-writer-wins
    version: Optional[int] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


# ============================================================
# READ
# ============================================================
class ApplicationRead(BaseModel):
    id: UUID
    project_id: UUID
    faculty_id: UUID
    student_id: UUID
    student_name: str
    student_email: str
    cover_letter: str
    student_skills: List[str]
    student_program: Optional[str]
    status: ApplicationStatus
    feedback: Optional[str]
    interview_date: Optional[datetime]
    interview_location: Optional[str]
    interview_notes: Optional[str]
    version: int
    applied_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ApplicationEnvelope(BaseModel):
    message: str
    application: ApplicationRead


class MessageResponse(BaseModel):
    message: str


# ============================================================
# LISTINGS
# ============================================================
class StudentApplicationItem(BaseModel):
    id: UUID
    project_id: UUID
    project_title: str
    faculty_id: UUID
    faculty_name: str
    status: ApplicationStatus
    applied_at: datetime
    cover_letter: str


class FacultyApplicationItem(BaseModel):
    id: UUID
    project_id: UUID
    project_title: str
    student_id: UUID
    student_name: str
    student_email: str
    status: ApplicationStatus
    applied_at: datetime
    cover_letter: str
    version: int


class AdminApplicationItem(BaseModel):
    id: UUID
    project_id: UUID
    project_title: str
    faculty_id: UUID
    faculty_name: str
    student_id: UUID
    student_name: str
    student_email: str
    applied_at: datetime
    status: ApplicationStatus
