"""Pydantic schemas for request/response validation."""

from app.schemas.base import CamelModel

__all__ = ["CamelModel"]
