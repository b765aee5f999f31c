"""Pydantic schemas for records API responses."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class MessageSchema(BaseModel):
    """Body of rejection and error responses."""

    message: str
    error: Optional[str] = None
