"""
描述: MCP 工具注册中心
主要功能:
    - 以装饰器方式登记工具类
    - 按配置筛选需要暴露的工具
"""

from __future__ import annotations

import logging
from typing import Type

from account_mcp.tools.base import BaseTool


logger = logging.getLogger(__name__)


# region 工具注册中心
class ToolRegistry:
    """工具注册中心 (类级别注册表, 工具名全局唯一)"""
    _tools: dict[str, Type[BaseTool]] = {}

    @classmethod
    def register(cls, tool_cls: Type[BaseTool]) -> Type[BaseTool]:
        tool_name = getattr(tool_cls, "name", "")
        if not tool_name:
            raise ValueError(f"{tool_cls.__name__} must define 'name' attribute")
        existing = cls._tools.get(tool_name)
        if existing is not None and existing is not tool_cls:
            raise ValueError(f"Tool {tool_name} already registered by {existing.__name__}")
        cls._tools[tool_name] = tool_cls
        logger.debug("Registered tool %s", tool_name)
        return tool_cls

    @classmethod
    def get(cls, name: str) -> Type[BaseTool] | None:
        return cls._tools.get(name)

    @classmethod
    def enabled(cls, names: list[str]) -> list[Type[BaseTool]]:
        """按配置过滤工具, 空列表表示全部启用"""
        if not names:
            return list(cls._tools.values())
        selected: list[Type[BaseTool]] = []
        for name in dict.fromkeys(names):
            tool_cls = cls.get(name)
            if tool_cls is None:
                logger.warning("Unknown tool in config: %s", name)
                continue
            selected.append(tool_cls)
        return selected
# endregion
