from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    detail: str
    code: str = Field(..., min_length=1)
    custom_code: Optional[int] = Field(default=None, description="Application code, omitted when unset")
    request_id: str = "-"
    cause: Optional[str] = None
