"""
描述: 账户数据工具
主要功能:
    - 认证后读取账户数据 (get-account-data)
    - 区分认证失败与数据读取失败的文本输出
"""

from __future__ import annotations

import json
from typing import Any

from account_mcp.server.schema import ToolResponse
from account_mcp.tools.base import BaseTool
from account_mcp.tools.registry import ToolRegistry


# 数据读取失败对应的错误码, 见 server.dispatch
FETCH_ERROR_CODE = "MCP_001"


# region 账户工具
@ToolRegistry.register
class GetAccountDataTool(BaseTool):
    """
    账户数据查询工具

    功能:
        - 每次调用重新获取 Token, 再请求账户接口
        - 无入参
    """
    name = "get-account-data"
    description = "Get account data from the account API."

    @property
    def endpoint(self) -> str:
        return self.context.settings.api.accounts_endpoint

    async def run(self, params: dict[str, Any]) -> Any:
        token = await self.context.token_acquirer.acquire()
        return await self.context.client.fetch(self.endpoint, token)

    def render(self, response: ToolResponse) -> str:
        if response.success:
            payload = json.dumps(response.data, indent=2, ensure_ascii=False)
            return f"Data from {self.endpoint}:\n\n{payload}"
        if response.error and response.error.code == FETCH_ERROR_CODE:
            return f"Failed to retrieve data from {self.endpoint}"
        return super().render(response)
# endregion
