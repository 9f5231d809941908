"""
FastAPI main application for the Book API.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Union

import structlog
from fastapi import Body, Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.config import config as api_config
from api.models import (
    BookPayload, BookResponse, DeleteResponse,
    ErrorResponse, HealthResponse
)
from api.store import BookStore
from api.validation import (
    normalize_published_date, parse_book_id, verify_book_fields
)
from utilities.logger import setup_logging

# Setup logging
logger = structlog.get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error Occurred"
NOT_FOUND_MESSAGE = "Resource Not Found"
INVALID_BODY_MESSAGE = "Invalid request body"

# Process-wide store; handlers receive it through get_store()
book_store = BookStore()


def get_store() -> BookStore:
    """Dependency returning the book store for the current process."""
    return book_store


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging(
        log_level=api_config.log_level,
        log_format=api_config.log_format,
        log_file=api_config.log_file,
        debug=api_config.debug
    )
    logger.info("Starting Book API", docs_url=api_config.docs_url)

    yield

    logger.info("Shutting down Book API", books_count=len(book_store))


error_responses = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}

# Create FastAPI application
app = FastAPI(
    title=api_config.api_title,
    description=api_config.api_description,
    version=api_config.api_version,
    docs_url=api_config.docs_url,
    redoc_url=None,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=api_config.cors_origins,
    allow_credentials=api_config.cors_allow_credentials,
    allow_methods=api_config.cors_allow_methods,
    allow_headers=api_config.cors_allow_headers,
)


# Exception handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP exceptions as ``{"message": ...}``."""
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(
                message=f"Method {request.method} not allowed."
            ).model_dump()
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(message=str(exc.detail)).model_dump(),
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Reject malformed or wrongly shaped request bodies."""
    logger.debug("Request body rejected", path=request.url.path, errors=exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(message=INVALID_BODY_MESSAGE).model_dump()
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle general exceptions."""
    logger.error(
        "Unhandled exception",
        error=str(exc) if api_config.debug else type(exc).__name__,
        path=request.url.path,
        method=request.method
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(message=INTERNAL_ERROR_MESSAGE).model_dump()
    )


def _bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def _resolve_book_id(raw_id: str) -> int:
    try:
        return parse_book_id(raw_id)
    except ValueError as e:
        logger.debug("Book id rejected", raw_id=raw_id)
        raise _bad_request(str(e))


def _build_book(book_id: int, payload: BookPayload) -> BookResponse:
    """Validate a full payload and turn it into a stored record."""
    valid, message = verify_book_fields(payload)
    if not valid:
        logger.debug("Book payload rejected", reason=message)
        raise _bad_request(message)
    return BookResponse(
        id=book_id,
        title=payload.title,
        author=payload.author,
        publishedDate=normalize_published_date(payload.publishedDate),
        summary=payload.summary
    )


@app.get("/", include_in_schema=False)
async def root():
    """Send browsers to the interactive documentation."""
    return RedirectResponse(url=api_config.docs_url)


# Health check endpoint
@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check(store: BookStore = Depends(get_store)):
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=api_config.api_version,
        books_count=len(store)
    )


# Collection endpoints
@app.get(
    "/api/books",
    response_model=List[BookResponse],
    tags=["Books"],
    summary="Get all books",
    responses=error_responses
)
async def list_books(store: BookStore = Depends(get_store)):
    """Return every book in store order."""
    return store.list_books()


@app.post(
    "/api/books",
    response_model=List[BookResponse],
    status_code=status.HTTP_201_CREATED,
    tags=["Books"],
    summary="Add a new book",
    responses=error_responses
)
async def create_books(
    payload: Union[List[BookPayload], BookPayload] = Body(...),
    store: BookStore = Depends(get_store)
):
    """
    Add one book or a list of books.

    - Every record is validated before any is stored; the first invalid
      record aborts the whole request.
    - Ids are assigned sequentially from the current store size.
    """
    payloads = payload if isinstance(payload, list) else [payload]
    first_id = store.next_id()

    to_store = [
        _build_book(first_id + offset, item)
        for offset, item in enumerate(payloads)
    ]

    return store.add_books(to_store)


# Item endpoints
@app.get(
    "/api/books/{book_id}",
    response_model=BookResponse,
    tags=["Books"],
    summary="Get a book by ID",
    responses={**error_responses, 404: {"model": ErrorResponse}}
)
async def get_book(book_id: str, store: BookStore = Depends(get_store)):
    """Fetch the book whose id matches."""
    converted_id = _resolve_book_id(book_id)
    book = store.get_book(converted_id)
    if book is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)
    return book


@app.patch(
    "/api/books/{book_id}",
    response_model=BookResponse,
    tags=["Books"],
    summary="Update a book by ID (partial update)",
    responses={**error_responses, 404: {"model": ErrorResponse}}
)
async def update_book(
    book_id: str,
    payload: BookPayload = Body(...),
    store: BookStore = Depends(get_store)
):
    """
    Merge the supplied fields over the existing book.

    A new ``publishedDate`` is normalized; an empty one keeps the current
    date. The merged record is written at the list position equal to the id.
    """
    converted_id = _resolve_book_id(book_id)
    existing = store.get_book(converted_id)
    if existing is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)

    changes = payload.model_dump(exclude_unset=True, exclude_none=True)
    if changes.get("publishedDate"):
        changes["publishedDate"] = normalize_published_date(changes["publishedDate"])
    else:
        changes.pop("publishedDate", None)

    updated = existing.model_copy(update=changes)
    store.put_at(converted_id, updated)
    logger.info("Book updated", book_id=converted_id, fields=sorted(changes))
    return updated


@app.put(
    "/api/books/{book_id}",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Books"],
    summary="Replace a book by ID (full update)",
    responses=error_responses
)
async def replace_book(
    book_id: str,
    payload: BookPayload = Body(...),
    store: BookStore = Depends(get_store)
):
    """Create or replace the book at the list position equal to the id."""
    converted_id = _resolve_book_id(book_id)
    book = _build_book(converted_id, payload)
    store.put_at(converted_id, book)
    logger.info("Book replaced", book_id=converted_id)
    return book


@app.delete(
    "/api/books/{book_id}",
    response_model=DeleteResponse,
    tags=["Books"],
    summary="Delete a book by ID",
    responses={**error_responses, 404: {"model": ErrorResponse}}
)
async def delete_book(book_id: str, store: BookStore = Depends(get_store)):
    """Remove the record at the list position equal to the id."""
    converted_id = _resolve_book_id(book_id)
    if store.get_book(converted_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND_MESSAGE)

    store.remove_at(converted_id)
    return DeleteResponse(
        status="success",
        message=f"Book {converted_id} deleted successfully"
    )


if __name__ == "__main__":
    from run_api import main
    main()
