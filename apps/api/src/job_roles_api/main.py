from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import traceback
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from job_roles_api.config import get_settings
from job_roles_api.db import get_engine
from job_roles_api.errors import ErrorKind, JobRoleError
from job_roles_api.logger import setup_logger
from job_roles_api.routes import router as job_roles_router

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.DATABASE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    setup_logger(settings.log_level, settings.log_file)
    engine = get_engine()
    logger.info(f"Job Roles API started (env={settings.app_env})")
    yield
    engine.dispose()
    logger.info("Job Roles API stopped")


app = FastAPI(title="Job Roles API", version="0.1.0", lifespan=lifespan)
app.include_router(job_roles_router)


@app.exception_handler(JobRoleError)
async def job_role_error_handler(request: Request, exc: JobRoleError) -> JSONResponse:
    status_code = STATUS_BY_KIND[exc.kind]
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{request.method} {request.url.path} -> {exc.kind.value}: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.kind.value}: {exc.message}")
    return JSONResponse(status_code=status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path} -> invalid request body: {exc.errors()!r}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body"},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error(f"{request.method} {request.url.path} -> unexpected error")

    content: dict[str, Any] = {"error": "Internal Server Error"}
    if get_settings().is_development:
        content["stack"] = "".join(traceback.format_exception(exc))
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("job_roles_api.main:app", host=settings.api_host, port=settings.api_port, reload=False)


if __name__ == "__main__":
    run()
