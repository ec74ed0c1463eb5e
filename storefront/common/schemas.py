"""
This module defines common Pydantic models used across multiple API modules.
These models represent shared data structures to ensure consistency throughout the application.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional, TypeVar, Generic, List, Any

from fastapi import HTTPException
from pydantic import BaseModel, field_validator


class TimestampMixin(BaseModel):
    """
    A mixin that adds created and updated timestamp fields to models.
    Firestore returns native datetimes; documents written by the admin back-office
    may carry ISO strings instead.
    """
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    @field_validator('createdAt', 'updatedAt', mode='before')
    @classmethod
    def parse_datetime(cls, value):
        if value is None or value == "":
            return None

        if isinstance(value, datetime):
            return value

        if isinstance(value, str):
            try:
                return datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError:
                # Unparseable timestamps carry no meaning for browsing
                return None

        return value


class JSendStatus(str, Enum):
    """
    JSend status options according to specification.
    """
    SUCCESS = "success"
    FAIL = "fail"
    ERROR = "error"


T = TypeVar('T')


class PaginationResponse(BaseModel, Generic[T]):
    """
    A generic model for paginated responses.
    """
    items: List[T]
    total: int
    page: int
    size: int
    pages: int


class JSendResponse(BaseModel, Generic[T]):
    """
    Base JSend response format as per https://github.com/omniti-labs/jsend
    """
    status: JSendStatus
    data: Optional[T] = None
    message: Optional[str] = None
    code: Optional[int] = None  # For error responses

    @classmethod
    def success(cls, data: Any = None) -> 'JSendResponse':
        """Create a success response with data"""
        return cls(status=JSendStatus.SUCCESS, data=data)

    @classmethod
    def error(cls, message: str, code: Optional[int] = None, data: Any = None) -> 'JSendResponse':
        """Create an error response for system or unexpected errors"""
        return cls(status=JSendStatus.ERROR, message=message, code=code, data=data)

    @classmethod
    def from_http_exception(cls, exc: HTTPException) -> 'JSendResponse':
        """Wrap an HTTPException raised by a service into an error response"""
        return cls.error(message=str(exc.detail), code=exc.status_code)


def paginate(items: List[T], page: int, size: int) -> tuple[List[T], int]:
    """
    Slice a fully computed list for one page.

    Returns:
        Tuple of (page_items, pages)
    """
    offset = (page - 1) * size
    pages = (len(items) + size - 1) // size if size > 0 else 0
    return items[offset:offset + size], pages
