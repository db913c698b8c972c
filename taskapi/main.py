import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from taskapi.config import settings
from taskapi.database import create_tables, engine
from taskapi.exceptions import AppError, ValidationError
from taskapi.logging_setup import setup_logging
from taskapi.routers.auth import router as auth_router
from taskapi.routers.profile import router as profile_router
from taskapi.routers.tasks import router as tasks_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(level=settings.LOG_LEVEL, error_log_file=settings.ERROR_LOG_FILE)
    if settings.AUTO_CREATE_TABLES:
        await create_tables()
        logger.info("Database tables ensured")

    yield

    await engine.dispose()


app = FastAPI(
    lifespan=lifespan,
    title="Task API",
    description="Personal task management with bearer-token authentication",
    version="1.0.0",
    contact={"email": "tess@example.com"},
)

app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=settings.CORS_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _field_errors(exc: RequestValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        # loc looks like ("body", "title"); a missing body is ("body",) and a
        # JSON decode error is ("body", <offset>), both reported as "body"
        loc = [
            part for part in error.get("loc", ())
            if isinstance(part, str) and part not in ("body", "query", "path")
        ]
        field = ".".join(loc) or "body"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return errors


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_content(),
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return await app_error_handler(request, ValidationError(_field_errors(exc)))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"message": "Internal Server Error"},
    )


app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(tasks_router)

@app.get("/")
def root():
    return {"message": "Task API running"}
