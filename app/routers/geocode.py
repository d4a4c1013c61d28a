from fastapi import APIRouter, Depends, Query
from fastapi_limiter.depends import RateLimiter
from structlog import get_logger

from app.config import settings
from app.core.errors import error_response
from app.core.result import Err
from app.schemas.geocode import GeocodeResponse
from app.services import nominatim

logger = get_logger()
router = APIRouter(prefix="/api", tags=["geocode"])

# Nominatim's usage policy forbids heavy use; throttle per client
geocode_rate_limit = RateLimiter(
    times=settings.GEOCODE_RATE_LIMIT_TIMES,
    seconds=settings.GEOCODE_RATE_LIMIT_SECONDS,
)

@router.get("/geocode", response_model=GeocodeResponse, dependencies=[Depends(geocode_rate_limit)])
async def geocode_address(q: str = Query("", description="Free-text address")):
    result = await nominatim.geocode(q)
    if isinstance(result, Err):
        return error_response(result.error, address=q)
    logger.info("Geocode successful", address=q, display_name=result.value.get("display_name"))
    return GeocodeResponse(result=result.value)
