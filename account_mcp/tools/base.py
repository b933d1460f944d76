"""
描述: MCP 工具基类定义
主要功能:
    - 定义 BaseTool 抽象基类
    - 定义 ToolContext 上下文对象
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx

from account_mcp.api.client import AccountAPIClient
from account_mcp.api.token import TokenAcquirer
from account_mcp.config import Settings
from account_mcp.server.schema import ToolResponse


# region 工具上下文与基类
@dataclass
class ToolContext:
    """工具执行上下文 (依赖注入)"""
    settings: Settings
    token_acquirer: TokenAcquirer
    client: AccountAPIClient

    @classmethod
    def build(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "ToolContext":
        return cls(
            settings=settings,
            token_acquirer=TokenAcquirer(settings, transport=transport),
            client=AccountAPIClient(settings, transport=transport),
        )


class BaseTool(ABC):
    """MCP 工具抽象基类"""
    name: str = ""
    description: str = ""

    def __init__(self, context: ToolContext) -> None:
        self.context = context
        if not self.name:
            raise ValueError(f"{self.__class__.__name__} must define 'name' attribute")

    @abstractmethod
    async def run(self, params: dict[str, Any]) -> Any:
        """
        执行工具逻辑

        参数:
            params: 工具参数字典

        返回:
            可 JSON 序列化的执行结果
        """
        raise NotImplementedError

    def render(self, response: ToolResponse) -> str:
        """将执行结果渲染为文本内容"""
        if response.success:
            return json.dumps(response.data, indent=2, ensure_ascii=False)
        message = response.error.message if response.error else "Unknown error"
        return f"Error: {message}"
# endregion
