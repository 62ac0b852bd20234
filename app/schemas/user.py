from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from app.models.user import UserRole
from app.schemas.project import ProjectRead


# ---------------------------------------------------------
# READ USER (response)
# ---------------------------------------------------------
class UserRead(BaseModel):
    id: UUID
    name: str
    email: str
    role: UserRole
    profile_picture_url: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class FacultyRead(UserRead):
    designation: Optional[str] = None
    school: Optional[str] = None
    cabin_location: Optional[str] = None
    overview: Optional[str] = None
    free_timings: List[Dict[str, str]] = []


class FacultyDetail(FacultyRead):
    projects: List[ProjectRead] = []


class StudentRead(UserRead):
    roll_number: Optional[str] = None
    program: Optional[str] = None
    specialization: Optional[str] = None
    resume_url: Optional[str] = None
    github: Optional[str] = None
    linkedin: Optional[str] = None
    skills: List[str] = []
    interests: List[str] = []


# ---------------------------------------------------------
# PROFILE UPDATES (owner or admin)
# ---------------------------------------------------------
class FacultyProfileUpdate(BaseModel):
    name: Optional[str] = None
    designation: Optional[str] = None
    school: Optional[str] = None
    cabin_location: Optional[str] = None
    overview: Optional[str] = None
    free_timings: Optional[List[Dict[str, str]]] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class StudentProfileUpdate(BaseModel):
    name: Optional[str] = None
    roll_number: Optional[str] = None
    program: Optional[str] = None
    specialization: Optional[str] = None
    github: Optional[str] = None
    linkedin: Optional[str] = None
    skills: Optional[List[str] | str] = None
    interests: Optional[List[str] | str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


# ---------------------------------------------------------
# ADMIN LISTING
# ---------------------------------------------------------
class AdminUserRow(BaseModel):
    id: UUID
    name: str
    email: str
    role: UserRole
    active: bool = True
    created_at: datetime


# ---------------------------------------------------------
# ADMIN SELF-PROFILE
# ---------------------------------------------------------
class AdminProfile(UserRead):
    updated_at: datetime


class AdminProfileUpdate(BaseModel):
    name: Optional[str] = None
