"""
Shared data models for the API and the inference payload.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

class Message(BaseModel):
    role: str
    content: str

class InlineData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    data: str
    mime_type: str = Field(alias="mimeType")

class Part(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = None
    inline_data: Optional[InlineData] = Field(default=None, alias="inlineData")

class Content(BaseModel):
    role: str
    parts: List[Part]

class ChatResponse(BaseModel):
    result: str

class ErrorResponse(BaseModel):
    error: str
