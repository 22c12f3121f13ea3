"""Fetch collaborator data models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class FetchResult(BaseModel):
    success: bool
    status_code: Optional[int] = None
    headers: dict[str, str] = {}
    body: str = ""
    error: Optional[str] = None
    elapsed_ms: int = 0
