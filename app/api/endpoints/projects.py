# app/api/endpoints/projects.py

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db_session
from app.core.rbac import require_admin
from app.models.user import User
from app.schemas.project import ProjectListItem
from app.services.listing_service import list_projects
from app.services.project_service import delete_project

router = APIRouter(prefix="/api/projects", tags=["Projects"])


# ------------------------------------------------------------
# PUBLIC CATALOGUE
# ------------------------------------------------------------
@router.get("/", response_model=List[ProjectListItem])
async def get_all_projects(session: AsyncSession = Depends(get_db_session)):
    return await list_projects(session)


# ------------------------------------------------------------
# DELETE ANY PROJECT (admin only)
# ------------------------------------------------------------
@router.delete("/{faculty_id}/{project_id}")
async def admin_delete_project(
    faculty_id: str,
    project_id: str,
    current_user: User = Depends(require_admin),
    session: AsyncSession = Depends(get_db_session),
):
    await delete_project(session, faculty_id, project_id, current_user, admin_only=True)
    return {"message": "Project deleted successfully"}
