"""ft_analytics REST endpoints, all require JWT authentication.

GET /analytics/dashboard             — year-to-date summary (cached 15 min)
GET /analytics/trends/{year}         — 12 monthly points (cached 1 h)
GET /analytics/categories/{period}   — expense breakdown, month|quarter|year (cached 30 min)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.ft_analytics.application.service import AnalyticsApplicationService
from src.ft_cache.api.dependencies import get_cache
from src.ft_cache.domain.port import CachePort
from src.ft_common.database import get_db_session
from src.ft_common.response import ApiResponse, success_response
from src.ft_gateway.auth.dependencies import get_current_user_id

router = APIRouter(prefix="/analytics", tags=["analytics"])


def get_analytics_service(
    cache: Annotated[CachePort, Depends(get_cache)],
) -> AnalyticsApplicationService:
    return AnalyticsApplicationService(cache)


@router.get("/dashboard")
async def get_dashboard(
    request: Request,
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[AnalyticsApplicationService, Depends(get_analytics_service)],
) -> ApiResponse:
    data = await service.get_dashboard(db, user_id)
    return success_response(data.model_dump(mode="json"), request)


@router.get("/trends/{year}")
async def get_trend(
    request: Request,
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[AnalyticsApplicationService, Depends(get_analytics_service)],
    year: int = Path(..., ge=1, le=9999),
) -> ApiResponse:
    data = await service.get_trend(db, user_id, year)
    return success_response(data.model_dump(mode="json"), request)


@router.get("/categories/{period}")
async def get_category_breakdown(
    period: str,
    request: Request,
    user_id: Annotated[str, Depends(get_current_user_id)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
    service: Annotated[AnalyticsApplicationService, Depends(get_analytics_service)],
) -> ApiResponse:
    data = await service.get_category_breakdown(db, user_id, period)
    return success_response(data.model_dump(mode="json"), request)
