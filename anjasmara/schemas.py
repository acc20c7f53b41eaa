from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class AskRequest(BaseModel):
    # any JSON value; handlers coerce it with str()
    prompt: Optional[Any] = Field(default=None)

class AskResponse(BaseModel):
    reply: str

class CaptionRequest(BaseModel):
    text: Optional[Any] = Field(default=None)
    tone: Optional[Any] = Field(default=None)

class CaptionResponse(BaseModel):
    caption: str

class ClearResponse(BaseModel):
    ok: bool = True


class HistoryRecord(BaseModel):
    id: int
    type: Optional[str] = None
    prompt: Optional[str] = None
    text: Optional[str] = None
    tone: Optional[str] = None
    reply: str
    timestamp: str

    def to_dict(self) -> dict:
        return self.model_dump(exclude_none=True)
