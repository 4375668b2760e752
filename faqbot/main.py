import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException

from faqbot.config import get_settings
from faqbot.api.routes import query, kb

settings = get_settings()

# Configure application logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Set log level for app modules
logger = logging.getLogger("faqbot")
logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)

app = FastAPI(
    title=settings.app_name,
    description="AI-assisted FAQ answers from a Notion knowledge base",
    version="0.1.0",
)


class EmptyPreflightCORSMiddleware(CORSMiddleware):
    """
    CORS middleware whose preflight answer is always an empty 200.

    The Access-Control-Allow-* headers are still computed by Starlette; the
    browser decides whether the request may proceed.
    """

    def preflight_response(self, request_headers: Headers) -> Response:
        preflight = super().preflight_response(request_headers)
        headers = {
            name: value
            for name, value in preflight.headers.items()
            if name not in ("content-length", "content-type")
        }
        return Response(status_code=200, headers=headers)


# CORS middleware
app.add_middleware(
    EmptyPreflightCORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"error": "Please provide a question."},
    )


# Include routers
app.include_router(query.router, prefix="/api", tags=["Query"])
app.include_router(kb.router, prefix="/api/kb", tags=["Knowledge Cache"])


@app.get("/")
async def root():
    return {
        "message": "Welcome to FAQ Bot - AI-assisted answers from your knowledge base",
        "version": "0.1.0",
        "endpoints": {
            "query": "/api/query",
            "kb": "/api/kb",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": settings.app_name}
