"""
MCP tool result schemas.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class ToolError(BaseModel):
    code: str
    message: str
    detail: Any | None = None


class ToolResponse(BaseModel):
    success: bool
    data: Any | None = None
    error: ToolError | None = None


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    content: list[TextContent] = Field(default_factory=list)

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)])
