from typing import Any, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.responses import error_responses
from app.db.session import get_db
from app.schemas.categories import CategoryResponse
from app.services.categories import CategoryService

router = APIRouter()


@router.get(
    "/categories",
    response_model=List[CategoryResponse],
    summary="List item categories.",
    responses=error_responses(status.HTTP_500_INTERNAL_SERVER_ERROR),
)
async def list_categories(db: AsyncSession = Depends(get_db)) -> Any:
    return await CategoryService(db).list_all()
