"""Restaurant routes — info panel endpoint."""

from fastapi import APIRouter, Request
from loguru import logger

from bodegoes_assistant.application.use_cases.restaurant_info import RestaurantInfoService
from bodegoes_assistant.presentation.schemas import RestaurantInfoResponse

router = APIRouter(tags=["restaurant"])


@router.get("/api/restaurant/info", response_model=RestaurantInfoResponse)
async def restaurant_info(raw_request: Request):
    """Return live restaurant details, or the fallback record when the lookup fails."""
    service: RestaurantInfoService = raw_request.app.state.restaurant
    info = await service.get_info()
    logger.info("GET /api/restaurant/info | status={}", info.current_status)
    return RestaurantInfoResponse.from_domain(info)
