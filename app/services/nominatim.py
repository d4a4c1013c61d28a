import json
from typing import Any, Dict, List, Optional

import httpx
from redis.asyncio import Redis
from redis.exceptions import RedisError
from structlog import get_logger

from app.config import settings
from app.core.errors import GeocodingError, NotFoundError, ValidationError
from app.core.result import Err, Ok, Result

logger = get_logger()

ADDRESS_NOT_FOUND = (
    "Address not found. Please try: "
    "adding more details (street number, city, state, country); "
    "using a different format (e.g., \"123 Main St, New York, NY, USA\"); "
    "checking for typos in the address"
)


def _cache_key(address: str) -> str:
    return f"geocode:{' '.join(address.lower().split())}"


async def search(client: httpx.AsyncClient, address: str, accept_language: Optional[str] = None) -> List[Dict[str, Any]]:
    params = {"format": "json", "q": address, "addressdetails": 1, "limit": 5}
    if accept_language:
        params["accept-language"] = accept_language
    response = await client.get(settings.NOMINATIM_URL, params=params)
    response.raise_for_status()
    data = response.json()
    return data if isinstance(data, list) else []


async def lookup_address(client: httpx.AsyncClient, address: str) -> Result[Dict[str, Any]]:
    """
    Query Nominatim for ``address``; when nothing matches, query once more with
    the fallback language before giving up.
    """
    try:
        results = await search(client, address)
        if not results:
            logger.info("Geocode returned no results, retrying with fallback language", address=address)
            results = await search(client, address, accept_language=settings.NOMINATIM_FALLBACK_LANGUAGE)
    except httpx.HTTPStatusError as e:
        return Err(GeocodingError(detail=f"{e.response.status_code}: {e.response.text[:200]}"))
    except (httpx.RequestError, ValueError) as e:
        return Err(GeocodingError(detail=str(e)))

    if not results:
        return Err(NotFoundError(ADDRESS_NOT_FOUND))
    return Ok(results[0])


async def _cache_get(redis: Redis, cache_key: str) -> Optional[Dict[str, Any]]:
    try:
        cached = await redis.get(cache_key)
        return json.loads(cached) if cached else None
    except (RedisError, ValueError) as e:
        logger.warning("Geocode cache read failed", cache_key=cache_key, error=str(e))
        return None


async def _cache_set(redis: Redis, cache_key: str, result: Dict[str, Any]) -> None:
    try:
        await redis.setex(cache_key, settings.GEOCODE_CACHE_TTL, json.dumps(result))
    except RedisError as e:
        logger.warning("Geocode cache write failed", cache_key=cache_key, error=str(e))


async def geocode(address: str) -> Result[Dict[str, Any]]:
    address = (address or "").strip()
    if not address:
        return Err(ValidationError("Address is required"))

    redis = Redis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)
    try:
        cache_key = _cache_key(address)
        cached = await _cache_get(redis, cache_key)
        if cached is not None:
            logger.info("Geocode cache hit", cache_key=cache_key)
            return Ok(cached)

        logger.info("Geocode cache miss", cache_key=cache_key)
        async with httpx.AsyncClient(
            timeout=settings.NOMINATIM_TIMEOUT,
            headers={"User-Agent": settings.NOMINATIM_USER_AGENT},
        ) as client:
            result = await lookup_address(client, address)
        if isinstance(result, Ok):
            await _cache_set(redis, cache_key, result.value)
        return result
    finally:
        await redis.aclose()
