"""
描述: 工具调用分发
主要功能:
    - 执行工具并将异常转换为 ToolResponse
    - 将 ToolResponse 渲染为 MCP 文本结果
"""

from __future__ import annotations

import logging
from typing import Any

from account_mcp.api.client import AccountAPIError
from account_mcp.api.token import AuthError
from account_mcp.config import ConfigurationError
from account_mcp.server.schema import ToolError, ToolResponse, ToolResult
from account_mcp.tools.base import BaseTool


logger = logging.getLogger(__name__)


def _message(exc: BaseException) -> str:
    return str(exc).strip() or "Unknown error"


# region 调用与渲染
async def call_tool(tool: BaseTool, params: dict[str, Any] | None = None) -> ToolResponse:
    """
    执行工具

    返回:
        ToolResponse, 成功或失败两种结果之一; 不向外抛出业务异常
    """
    try:
        data = await tool.run(params or {})
        return ToolResponse(success=True, data=data)
    except AccountAPIError as exc:
        logger.warning(
            "Tool %s upstream request failed: %s",
            tool.name,
            exc,
            extra={"kind": exc.kind, "status_code": exc.status_code},
        )
        return ToolResponse(
            success=False,
            error=ToolError(
                code="MCP_001",
                message=_message(exc),
                detail={"kind": exc.kind, "status_code": exc.status_code},
            ),
        )
    except AuthError as exc:
        return ToolResponse(
            success=False,
            error=ToolError(
                code="MCP_002",
                message=_message(exc),
                detail={"status_code": exc.status_code},
            ),
        )
    except ConfigurationError as exc:
        logger.error("Tool %s misconfigured: %s", tool.name, exc)
        return ToolResponse(
            success=False,
            error=ToolError(code="MCP_003", message=_message(exc)),
        )
    except NotImplementedError as exc:
        return ToolResponse(
            success=False,
            error=ToolError(code="MCP_004", message=_message(exc)),
        )
    except Exception as exc:
        logger.exception("Tool %s failed", tool.name)
        return ToolResponse(
            success=False,
            error=ToolError(code="MCP_005", message=_message(exc)),
        )


def render_result(tool: BaseTool, response: ToolResponse) -> ToolResult:
    return ToolResult.text(tool.render(response))


async def invoke(tool: BaseTool, params: dict[str, Any] | None = None) -> ToolResult:
    response = await call_tool(tool, params)
    return render_result(tool, response)
# endregion
