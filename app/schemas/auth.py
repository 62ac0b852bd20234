from pydantic import BaseModel, EmailStr
from pydantic.alias_generators import to_camel
from typing import List, Optional

from app.models.user import UserRole
from app.schemas.user import UserRead


# -------------------------------------------------------------------
# LOGIN REQUEST
# -------------------------------------------------------------------
class LoginRequest(BaseModel):
    email: EmailStr
    password: str


# -------------------------------------------------------------------
# SIGNUP REQUEST
# (public: student / faculty; admin accounts are seeded or created by admins)
# -------------------------------------------------------------------
class SignupRequest(BaseModel):
    name: str
    email: EmailStr
    password: str
    role: UserRole

    # Faculty
    designation: Optional[str] = None
    school: Optional[str] = None

    # Student
    roll_number: Optional[str] = None
    program: Optional[str] = None
    specialization: Optional[str] = None
    skills: Optional[List[str]] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            "examples": [
                {
                    "name": "Asha Rao",
                    "email": "asha.rao@mahindrauniversity.edu.in",
                    "password": "password123",
                    "role": "student",
                    "rollNumber": "SE22UCSE001",
                    "program": "B.Tech"
                },
                {
                    "name": "Dr. Vikram Sen",
                    "email": "vikram.sen@mahindrauniversity.edu.in",
                    "password": "password123",
                    "role": "faculty",
                    "designation": "Associate Professor"
                }
            ]
        }


# -------------------------------------------------------------------
# TOKEN RESPONSE
# -------------------------------------------------------------------
class TokenWithUser(BaseModel):
    message: Optional[str] = None
    token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserRead


class ChangePasswordRequest(BaseModel):
    old_password: str
    new_password: str
