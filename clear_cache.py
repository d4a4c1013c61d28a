#!/usr/bin/env python3
"""
Script to clear cached Nominatim lookups from Redis.
Run this when stored geocoder matches should be refreshed.
"""
import asyncio
from redis.asyncio import Redis
from app.config import settings

async def clear_cache():
    redis = Redis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)

    keys = [key async for key in redis.scan_iter(match="geocode:*")]

    if keys:
        deleted = await redis.delete(*keys)
        print(f"✓ Cleared {deleted} geocode cache keys")
    else:
        print("✓ No geocode cache keys found")

    await redis.aclose()
    print("✓ Cache cleared successfully!")

if __name__ == "__main__":
    asyncio.run(clear_cache())
