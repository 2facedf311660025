from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_current_user_id, get_optional_user_id, parse_path_id
from app.api.responses import error_responses
from app.core.config import settings
from app.core.exceptions import ItemNotFoundError
from app.db.session import get_db
from app.schemas.items import ItemCreate, ItemCreated, ItemDetail, SearchResult
from app.schemas.schemas import MAX_INT
from app.services.items import ItemService, SearchParams

router = APIRouter()


@router.post(
    "/item",
    response_model=ItemCreated,
    status_code=status.HTTP_201_CREATED,
    summary="List a new item for auction.",
    responses=error_responses(
        status.HTTP_400_BAD_REQUEST, status.HTTP_401_UNAUTHORIZED, status.HTTP_500_INTERNAL_SERVER_ERROR
    ),
)
async def create_item(
    item_in: ItemCreate,
    db: AsyncSession = Depends(get_db),
    current_user_id: int = Depends(get_current_user_id),
) -> Any:
    """
    Create an item owned by the caller.

    Categories are attached after the item is stored; if that fails the item
    still exists and the response carries ``category_warning``.
    """
    result = await ItemService(db).create_item(current_user_id, item_in)
    body = ItemCreated(item_id=result.item_id, category_warning=result.category_warning)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=jsonable_encoder(body, exclude_none=True),
    )


@router.get(
    "/item/{item_id}",
    response_model=ItemDetail,
    summary="Get item details.",
    responses=error_responses(status.HTTP_404_NOT_FOUND, status.HTTP_500_INTERNAL_SERVER_ERROR),
)
async def get_item(
    item_id: str,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """Item with its creator, current bid, current bid holder and categories."""
    return await ItemService(db).get_item_details(parse_path_id(item_id, ItemNotFoundError))


@router.get(
    "/search",
    response_model=List[SearchResult],
    summary="Search auctions.",
    responses=error_responses(status.HTTP_400_BAD_REQUEST, status.HTTP_500_INTERNAL_SERVER_ERROR),
)
async def search(
    status_filter: Optional[str] = Query(None, alias="status", description="OPEN, BID or ARCHIVE"),
    q: Optional[str] = Query(None, description="Text to match in name or description"),
    limit: int = Query(settings.SEARCH_DEFAULT_LIMIT, ge=1, le=settings.SEARCH_MAX_LIMIT),
    offset: int = Query(0, ge=0, le=MAX_INT),
    category: Optional[int] = Query(None, le=MAX_INT, description="Only items in this category"),
    db: AsyncSession = Depends(get_db),
    viewer_id: Optional[int] = Depends(get_optional_user_id),
) -> Any:
    """
    Search auctions.

    Without a status only active auctions are listed. OPEN and BID are relative
    to the logged in viewer; ARCHIVE lists every ended auction.
    """
    params = SearchParams(status=status_filter, q=q, category=category, limit=limit, offset=offset)
    return await ItemService(db).search(params, viewer_id)
