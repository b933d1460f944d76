"""
描述: FastMCP 服务构建
主要功能:
    - 创建 FastMCP 服务实例
    - 将注册中心中启用的工具挂载为 MCP 工具
"""

from __future__ import annotations

import logging
from typing import Type

import httpx
from fastmcp import FastMCP
from mcp.types import TextContent

import account_mcp.tools  # noqa: F401
from account_mcp.config import Settings
from account_mcp.server.dispatch import invoke
from account_mcp.tools.base import BaseTool, ToolContext
from account_mcp.tools.registry import ToolRegistry


logger = logging.getLogger(__name__)


def _make_handler(
    tool_cls: Type[BaseTool],
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None,
):
    async def handler():
        # 每次调用使用新的上下文, 调用之间不共享状态
        tool = tool_cls(ToolContext.build(settings, transport=transport))
        result = await invoke(tool)
        return [TextContent(type="text", text=block.text) for block in result.content]

    handler.__name__ = tool_cls.name.replace("-", "_")
    handler.__doc__ = tool_cls.description
    return handler


def build_server(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastMCP:
    """
    构建 MCP 服务

    参数:
        settings: 全局配置对象
        transport: 可选 httpx 传输层 (测试时注入)

    返回:
        已注册工具的 FastMCP 实例
    """
    server = FastMCP(name=settings.server.name, version=settings.server.version)

    for tool_cls in ToolRegistry.enabled(settings.tools.enabled):
        server.tool(name=tool_cls.name, description=tool_cls.description)(
            _make_handler(tool_cls, settings, transport)
        )
        logger.debug("Mounted tool %s", tool_cls.name)

    return server
