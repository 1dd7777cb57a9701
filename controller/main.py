"""Entry point for the Controller service."""

import time
import uuid

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from common.logging_config import setup_logging
from common.validation import FileValidationError
from controller.config import CONTROLLER_HOST, CONTROLLER_PORT, STORAGE_PATH
from controller.database import init_database
from controller.exceptions import (
    InstructScanError,
    AuthenticationError,
    NoFileProvidedError,
    UnsupportedFileTypeError,
    FileTooLargeError,
    StorageError,
    MetadataError,
)
from controller.repositories.file_repository import FileRepository
from controller.routes.file_routes import router as file_router
from controller.storage.local_storage import LocalBlobStorage

logger = setup_logging('controller')

app = FastAPI(
    title="InstructScan Controller",
    description="Upload service for Python source files",
    version="1.0.0"
)


def error_response(status_code: int, message: str, code: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, "code": code})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Log every request and turn unexpected exceptions into a generic 500.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(
        f"Request started: {request.method} {request.url.path} [request_id={request_id}]"
    )

    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(
            f"Unhandled error: {type(e).__name__}: {e} [request_id={request_id}] path={request.url.path}",
            exc_info=True
        )
        response = error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", "INTERNAL_ERROR"
        )

    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


@app.on_event("startup")
async def startup_event():
    """
    Initialize database and storage root on application startup.
    """
    logger.info("Controller service starting up...")

    init_database()
    logger.info("Database initialized")

    if not LocalBlobStorage(STORAGE_PATH).is_available():
        logger.warning(f"Storage root is not writable: {STORAGE_PATH}")


@app.exception_handler(FileValidationError)
async def file_validation_handler(request: Request, exc: FileValidationError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"File validation error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc), "VALIDATION_ERROR")


@app.exception_handler(NoFileProvidedError)
async def no_file_handler(request: Request, exc: NoFileProvidedError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"No file provided [request_id={request_id}] path={request.url.path}"
    )
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc), "NO_FILE")


@app.exception_handler(AuthenticationError)
async def authentication_handler(request: Request, exc: AuthenticationError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Authentication error: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return error_response(status.HTTP_401_UNAUTHORIZED, str(exc), "UNAUTHORIZED")


@app.exception_handler(FileTooLargeError)
async def file_too_large_handler(request: Request, exc: FileTooLargeError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"File too large: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return error_response(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, str(exc), "FILE_TOO_LARGE")


@app.exception_handler(UnsupportedFileTypeError)
async def unsupported_file_type_handler(request: Request, exc: UnsupportedFileTypeError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Unsupported file type: {exc} [request_id={request_id}] path={request.url.path}"
    )
    return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc), "UNSUPPORTED_FILE_TYPE")


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Storage error: {exc} [request_id={request_id}] [key={exc.key}] [operation={exc.operation}]"
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to store file", "STORAGE_ERROR"
    )


@app.exception_handler(MetadataError)
async def metadata_error_handler(request: Request, exc: MetadataError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Metadata error: {exc} [request_id={request_id}] [file_id={exc.file_id}]"
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to record file metadata", "METADATA_ERROR"
    )


@app.exception_handler(InstructScanError)
async def instructscan_error_handler(request: Request, exc: InstructScanError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.error(
        f"Controller error: {exc} [request_id={request_id}] path={request.url.path}",
        exc_info=True
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", "INTERNAL_ERROR"
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    request_id = getattr(request.state, 'request_id', 'unknown')
    logger.warning(
        f"Malformed request: {exc.errors()} [request_id={request_id}] path={request.url.path}"
    )
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request", "BAD_REQUEST")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), "HTTP_ERROR")


app.include_router(file_router)


@app.get("/")
async def root():
    """
    Root endpoint for health check.
    """
    return {"message": "InstructScan Controller API", "status": "running"}


@app.get("/health")
async def health_check():
    """
    Health check endpoint for Docker healthcheck.
    Returns 200 if service is alive.
    """
    return {"status": "healthy", "service": "controller"}


@app.get("/ready")
async def ready_check():
    """
    Readiness check endpoint.
    Verifies database and storage availability.
    """
    db_status = "ok" if FileRepository().is_available() else "error"
    storage_status = "ok" if LocalBlobStorage(STORAGE_PATH).is_available() else "error"

    ready = db_status == "ok" and storage_status == "ok"
    status_code = status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        status_code=status_code,
        content={
            "ready": ready,
            "database": db_status,
            "storage": storage_status
        }
    )


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "controller.main:app",
        host=CONTROLLER_HOST,
        port=CONTROLLER_PORT,
    )


if __name__ == "__main__":
    main()
