"""ft_transaction REST endpoints, all require JWT authentication.

GET    /transactions               — paginated list with search/category filter
GET    /transactions/categories    — static category labels
POST   /transactions               — create
PUT    /transactions/{id}          — update
DELETE /transactions/{id}          — delete

Writes invalidate every cached view of the caller before responding.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.ft_cache.api.dependencies import get_cache
from src.ft_cache.domain.port import CachePort
from src.ft_common.database import get_db_session
from src.ft_common.response import ApiResponse, success_response
from src.ft_gateway.auth.dependencies import get_current_user_id
from src.ft_transaction.application.schemas import TransactionWriteRequest
from src.ft_transaction.application.service import TransactionApplicationService

router = APIRouter(prefix="/transactions", tags=["transactions"])


def get_transaction_service(
    cache: Annotated[CachePort, Depends(get_cache)],
) -> TransactionApplicationService:
    return TransactionApplicationService(cache)


@router.get("")
async def list_transactions(
    request: Request,
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[TransactionApplicationService, Depends(get_transaction_service)],
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str | None = Query(None, max_length=255, description="Case-insensitive description match"),
    category: str | None = Query(None, max_length=50),
) -> ApiResponse:
    data = await service.list_transactions(db, user_id, page, limit, search, category)
    return success_response(data.model_dump(mode="json"), request)


@router.get("/categories")
async def list_category_labels(
    request: Request,
    user_id: Annotated[str, Depends(get_current_user_id)],
    service: Annotated[TransactionApplicationService, Depends(get_transaction_service)],
) -> ApiResponse:
    data = await service.list_category_labels()
    return success_response(data.model_dump(mode="json"), request)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_transaction(
    body: TransactionWriteRequest,
    request: Request,
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[TransactionApplicationService, Depends(get_transaction_service)],
) -> ApiResponse:
    data = await service.create_transaction(db, user_id, body)
    return success_response(data.model_dump(mode="json"), request)


@router.put("/{transaction_id}")
async def update_transaction(
    transaction_id: UUID,
    body: TransactionWriteRequest,
    request: Request,
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[TransactionApplicationService, Depends(get_transaction_service)],
) -> ApiResponse:
    data = await service.update_transaction(db, user_id, str(transaction_id), body)
    return success_response(data.model_dump(mode="json"), request)


@router.delete("/{transaction_id}")
async def delete_transaction(
    transaction_id: UUID,
    request: Request,
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[TransactionApplicationService, Depends(get_transaction_service)],
) -> ApiResponse:
    data = await service.delete_transaction(db, user_id, str(transaction_id))
    return success_response(data.model_dump(mode="json"), request)
