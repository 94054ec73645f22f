import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tasklist.app.config import get_settings
from tasklist.app.core.logging_config import configure_logging
from tasklist.app.db import Base, engine, ensure_task_columns
from tasklist.app import models  # noqa: F401  registers the tasks table
from tasklist.app.routers import tasks as tasks_router

settings = get_settings()
configure_logging(settings.app_log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Task List", version="1.0.0", docs_url="/docs", redoc_url=None)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=list(tasks_router.SUPPORTED_METHODS),
    allow_headers=["*"],
)


@app.on_event("startup")
def on_startup() -> None:
    # Initialize database schema on boot (safe no-op if tables already exist)
    ensure_task_columns(engine)
    Base.metadata.create_all(bind=engine)
    logger.info("task store ready policy=%s", settings.task_id_policy)


@app.exception_handler(StarletteHTTPException)
async def method_not_allowed_handler(request: Request, exc: StarletteHTTPException):
    """Advertise the full verb set on every 405, not just the matched route's."""

    if exc.status_code != 405:
        return await http_exception_handler(request, exc)
    return PlainTextResponse(
        f"Method {request.method} Not Allowed",
        status_code=405,
        headers={"Allow": ", ".join(tasks_router.SUPPORTED_METHODS)},
    )


@app.exception_handler(RequestValidationError)
async def invalid_request_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    detail = str(errors[0].get("msg")) if errors else "invalid request"
    return JSONResponse(status_code=400, content={"detail": detail})


app.include_router(tasks_router.api_router)


@app.get("/")
async def root() -> dict:
    return {"ok": True, "service": "tasklist"}


@app.get("/healthz")
async def healthz() -> dict:
    return {"status": "ok"}
