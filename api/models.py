"""
API models and schemas for the FastAPI application.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class BookPayload(BaseModel):
    """
    Incoming book data for create, update and replace requests.

    Every field is optional at the schema level so that missing fields
    can be reported one at a time, in a fixed order, by the validator.
    Unknown keys (including ``id``) are ignored.
    """
    title: Optional[str] = Field(None, description="Book title")
    author: Optional[str] = Field(None, description="Book author")
    publishedDate: Optional[str] = Field(
        None,
        description="Publication date (ISO-8601 date or date-time)",
        json_schema_extra={"format": "date"},
    )
    summary: Optional[str] = Field(None, description="Short summary of the book")


class BookResponse(BaseModel):
    """Book record as held in the store and returned by the API."""
    id: int = Field(..., description="Book identifier (position at creation time)")
    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Book author")
    publishedDate: str = Field(
        ...,
        description="Publication date, YYYY-MM-DD",
        json_schema_extra={"format": "date"},
    )
    summary: str = Field(..., description="Short summary of the book")


class DeleteResponse(BaseModel):
    """Delete confirmation body."""
    status: str = Field(..., description="Outcome of the delete")
    message: str = Field(..., description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """Error response model."""
    message: str = Field(..., description="Error message")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current timestamp")
    version: str = Field(..., description="API version")
    books_count: int = Field(..., description="Number of records in the store")
