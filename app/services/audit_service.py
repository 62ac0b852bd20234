# app/services/audit_service.py

from typing import Any, Dict, Optional
from uuid import UUID

from sqlmodel import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.audit import AuditLog
from app.models.user import User, UserRole


def record_activity(
    session: AsyncSession,
    action: str,
    actor: Optional[User],
    application_id: Optional[UUID] = None,
    project_id: Optional[UUID] = None,
    remarks: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> AuditLog:
    """
    Stages an audit entry on the caller's session so it commits (or rolls
    back) together with the change it describes.
    """
    role = None
    if actor is not None:
        role = actor.role.value if isinstance(actor.role, UserRole) else str(actor.role)

    entry = AuditLog(
        actor_id=actor.id if actor else None,
        actor_role=role,
        actor_name=actor.name if actor else None,
        application_id=application_id,
        project_id=project_id,
        action=action,
        remarks=remarks,
        details=details or {},
    )
    session.add(entry)
    return entry


async def list_application_history(session: AsyncSession, application_id: UUID) -> list[AuditLog]:
    result = await session.execute(
        select(AuditLog)
        .where(AuditLog.application_id == application_id)
        .order_by(AuditLog.timestamp.asc())
    )
    return result.scalars().all()
