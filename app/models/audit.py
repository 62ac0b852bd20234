#app/models/audit.py

from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime, JSON
from typing import Optional, Dict, Any
from uuid import UUID, uuid4
from datetime import datetime

from app.core.utils import utc_now


class AuditLog(SQLModel, table=True):
    __tablename__ = "audit_logs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    # Plain columns, not foreign keys: entries outlive deleted rows
    application_id: Optional[UUID] = Field(default=None, index=True)
    project_id: Optional[UUID] = Field(default=None)

    actor_id: Optional[UUID] = Field(default=None)
    actor_role: Optional[str] = None
    actor_name: Optional[str] = None

    action: str
    remarks: Optional[str] = None

    # e.g. {"from": "Applied", "to": "Shortlisted"}
    details: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))

    timestamp: datetime = Field(
        default_factory=utc_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True)
    )
