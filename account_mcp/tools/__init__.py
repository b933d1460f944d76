"""
描述: MCP 工具注册入口。
主要功能:
    - 导入并注册账户工具
"""

from account_mcp.tools import account  # noqa: F401
