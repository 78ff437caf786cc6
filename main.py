import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Settings, get_settings
from domain.entities import FIELD_MESSAGES, field_error
from domain.errors import NotFoundError, TaskManagerError
from interfaces.api import router as task_router
from logging_setup import configure_logging

logger = logging.getLogger(__name__)


def _request_error_to_field_error(error: dict) -> dict:
    location, *path = error["loc"]
    name = path[0] if path else None
    if name in FIELD_MESSAGES:
        return field_error(name, error.get("input"), location, has_value=error["type"] != "missing")
    return {
        "type": "field",
        "path": ".".join(str(part) for part in path) or location,
        "location": location,
        "msg": error["msg"],
    }


async def task_manager_error_handler(request: Request, exc: TaskManagerError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    elif isinstance(exc, NotFoundError):
        logger.info(f"{request.method} {request.url.path}: no task with id {exc.task_id}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    # A task id that is not an integer can never match a stored task
    if any(error["loc"][0] == "path" for error in errors):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=NotFoundError().to_dict())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": [_request_error_to_field_error(error) for error in errors]},
    )


async def generic_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": str(exc)},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    app = FastAPI(
        title="Task Manager API",
        version="1.0.0",
        description="API for managing tasks",
        docs_url=settings.docs_url,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(TaskManagerError, task_manager_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
    app.include_router(task_router, prefix=settings.api_prefix)
    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    logger.info(f"Serving Task Manager API on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)
