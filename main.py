import logging
from contextlib import asynccontextmanager
from typing import Union

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobly.core.config import settings
from jobly.core.database import init_db
from jobly.core.exceptions import AppError
from jobly.core.logging_config import setup_logging
from jobly.api.endpoints import auth, companies, jobs, users, health

setup_logging(settings.LOG_LEVEL, settings.JSON_LOGS)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    logger.info("Starting up Jobly API...")
    init_db()
    logger.info("Models registered")

    yield

    logger.info("Shutting down Jobly API...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    description="Companies, jobs and users with JWT authentication",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, message) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message, "status": status_code}}
    )


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Map application errors to their HTTP status."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Invalid request bodies and params are a 400, not FastAPI's default 422."""
    messages = []
    for error in exc.errors():
        loc = error["loc"]
        if len(loc) > 1 and not isinstance(loc[1], str):
            # JSON decode errors carry a character offset, not a field name
            messages.append(error["msg"])
            continue
        field = ".".join(str(part) for part in loc[1:]) or str(loc[0])
        messages.append(f"{field}: {error['msg']}")

    logger.info(f"Validation error on {request.method} {request.url.path}: {messages}")
    return error_response(400, messages)


@app.exception_handler(StarletteHTTPException)
@app.exception_handler(HTTPException)
async def http_error_handler(request: Request, exc: Union[HTTPException, StarletteHTTPException]):
    return error_response(exc.status_code, exc.detail if isinstance(exc.detail, str) else "Request failed")


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled server error", extra={"path": request.url.path})
    return error_response(500, "Internal Server Error")


app.include_router(auth.router)
app.include_router(companies.router)
app.include_router(jobs.router)
app.include_router(users.router)
app.include_router(health.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # Enable auto-reload during development
        log_level="info"
    )
