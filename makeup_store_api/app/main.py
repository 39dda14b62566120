"""
Main entrypoint for the Makeup Store API.

This module assembles the FastAPI application, sets up logging, loads
the JSON store and includes the versioned routers.  The ``create_app``
function builds and configures the app, which is then instantiated at
module import time as ``app``, e.g.::

    uvicorn makeup_store_api.app.main:app --port 3000

Errors are rendered in the same envelope as successful responses:
``{"success": false, "message": "..."}``.
"""

import html
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.logging_config import setup_logging
from .core.storage import JsonStore, get_data_file_path


logger = logging.getLogger(__name__)

ENDPOINTS = [
    ("GET", "/products", "Get all products"),
    ("GET", "/products/:id", "Get single product"),
    ("POST", "/products", "Add new product"),
    ("PUT", "/products/:id", "Update product"),
    ("DELETE", "/products/:id", "Delete product"),
    ("POST", "/products/update-stock", "Update product stock"),
    ("POST", "/bills", "Create a new bill"),
    ("GET", "/bills", "Get all bills"),
    ("GET", "/bills/:id", "Get single bill"),
    ("POST", "/reset", "Reset inventory"),
]


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if location:
        return f"Invalid {location}: {first.get('msg', 'invalid value')}"
    return first.get("msg", "Invalid request")


def create_app(data_file: Optional[str] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    data_file : Optional[str]
        Path of the JSON data file.  Defaults to ``settings.data_file``.
        Tests pass a temporary path here.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance with its store loaded.
    """
    # Initialise logging before anything else so that the store can log
    # while it loads.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    store = JsonStore(get_data_file_path(data_file))
    store.load()
    app.state.store = store
    logger.info("Serving %d product(s) from %s", len(store.products), store.path)

    @app.middleware("http")
    async def limit_body_size(request: Request, call_next):
        length = request.headers.get("content-length")
        if length and length.isdigit() and int(length) > settings.max_body_bytes:
            return JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={"success": False, "message": "Request body too large"},
            )
        return await call_next(request)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _validation_message(exc)
        logger.info("Rejected %s %s: %s", request.method, request.url.path, message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "message": message},
        )

    app.include_router(v1_router, prefix=settings.api_prefix)

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    async def index() -> str:
        items = "\n".join(
            f"<li>{method} {html.escape(settings.api_prefix + path)} - {description}</li>"
            for method, path, description in ENDPOINTS
        )
        return (
            f"<h1>{html.escape(settings.project_name)}</h1>"
            "<p>Welcome to the Makeup Store Backend API</p>"
            f"<h2>Available Endpoints:</h2><ul>\n{items}\n</ul>"
        )

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
