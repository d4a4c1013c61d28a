from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi_limiter import FastAPILimiter
from redis.asyncio import Redis
from starlette.exceptions import HTTPException as StarletteHTTPException
from structlog import get_logger

from app.config import settings
from app.core.errors import MethodNotAllowedError, ValidationError, error_response
from app.core.logging import setup_logging
from app.database import close_db, init_db
from app.routers import geocode, health, notes, properties
from app.schemas.common import describe_validation_errors

logger = get_logger()

app = FastAPI(title="Property Research Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(properties.router)
app.include_router(notes.router)
app.include_router(geocode.router)
app.include_router(health.router)

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return error_response(ValidationError(describe_validation_errors(exc.errors())), path=request.url.path)

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return error_response(MethodNotAllowedError(), path=request.url.path, method=request.method)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error", path=request.url.path, error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error. Please try again later."},
    )

@app.on_event("startup")
async def startup_event():
    setup_logging()
    if settings.AUTO_CREATE_TABLES:
        await init_db()
    redis = await Redis.from_url(settings.REDIS_URL, encoding="utf-8", decode_responses=True)
    await FastAPILimiter.init(redis)

@app.on_event("shutdown")
async def shutdown_event():
    await FastAPILimiter.close()
    await close_db()
