import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import auth, feedback, thesis, uploads
from app.core import upload_service
from app.core.config import settings
from app.core.exceptions import ThesisAppError
from app.core.logging_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

upload_service.ensure_dirs()

app = FastAPI(title="Thesis Management API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Every error leaves the API as {"message": ...}
@app.exception_handler(ThesisAppError)
async def app_error_handler(request: Request, exc: ThesisAppError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"message": "Invalid request data"})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(thesis.router, prefix="/thesis", tags=["thesis"])
app.include_router(feedback.router, prefix="/thesis", tags=["feedback"])
app.include_router(uploads.router, tags=["uploads"])

app.mount(
    uploads.THESIS_FILES_PREFIX,
    StaticFiles(directory=upload_service.thesis_dir()),
    name="thesis-files",
)
app.mount(
    uploads.SUBTASK_FILES_PREFIX,
    StaticFiles(directory=upload_service.subtask_dir()),
    name="subtask-files",
)


@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}
