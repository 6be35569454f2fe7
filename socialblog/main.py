from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from .api.api import api_router
from .core.config import get_settings
from .core.errors import BlogError, InternalError
from .core.logging_config import configure_logging, redact
from .db.database import create_tables
import logging
import json
import traceback

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger("socialblog")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    get_settings().validate_for_startup()
    # make sure tables are created
    create_tables()
    logger.info("socialblog API starting (env=%s)", get_settings().app_env)
    yield


app = FastAPI(title="socialblog API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(exc: BlogError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "error": exc.detail},
        headers=exc.headers,
    )


@app.exception_handler(BlogError)
async def blog_error_handler(request: Request, exc: BlogError):
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    message = first.get("msg", "Invalid request")
    detail = f"{field}: {message}" if field else message
    logger.warning("Validation error on %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(
        status_code=400,
        content={"detail": detail, "error": detail},
    )


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Store error on %s %s", request.method, request.url.path)
    return _error_response(InternalError())


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(InternalError())


def _request_info(request: Request, body: bytes) -> dict:
    try:
        decoded = redact(json.loads(body)) if body else None
    except ValueError:
        decoded = f"<{len(body)} bytes>"
    headers = dict(request.headers)
    if "authorization" in headers:
        headers["authorization"] = "***"
    return {
        "url": str(request.url),
        "method": request.method,
        "headers": headers,
        "body": decoded,
        "path_params": request.path_params,
        "query_params": dict(request.query_params)
    }


@app.middleware("http")
async def log_requests(request: Request, call_next):
    body = await request.body()

    try:
        # execute the request
        response = await call_next(request)

        if response.status_code >= 400:
            response_body = b""
            async for chunk in response.body_iterator:
                response_body += chunk

            log = logger.error if response.status_code >= 500 else logger.warning
            log(
                f"Request failed with status {response.status_code}\n"
                f"Request: {json.dumps(_request_info(request, body), indent=2, default=str)}\n"
                f"Response: {response_body.decode(errors='replace')}\n"
            )
            return Response(
                content=response_body,
                status_code=response.status_code,
                headers=dict(response.headers),
                media_type=response.media_type
            )

        return response

    except Exception as e:
        logger.error(
            f"Request failed with exception\n"
            f"Request: {json.dumps(_request_info(request, body), indent=2, default=str)}\n"
            f"Error: {str(e)}\n"
            f"Traceback: {traceback.format_exc()}"
        )
        raise

# register the API router
app.include_router(api_router, prefix="/api")


def run():
    """Console entry point: serve the API with uvicorn"""
    import uvicorn

    uvicorn.run("socialblog.main:app", host="0.0.0.0", port=get_settings().port)
