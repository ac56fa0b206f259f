"""
Core schemas - shared Pydantic models for HTTP responses.
"""

from pydantic import BaseModel, Field


class TextReply(BaseModel):
    """Reply body returned to the chat platform."""

    text: str = Field(..., description="Markdown-flavoured reply shown to the user")

    model_config = {"json_schema_extra": {"example": {"text": "Type **/help** to see available commands."}}}
