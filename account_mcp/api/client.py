"""
描述: 账户 API 客户端
主要功能:
    - 携带 Bearer Token 与账户头发起 GET 请求
    - 按失败类型抛出 AccountAPIError
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from account_mcp.api.token import AuthToken
from account_mcp.config import Settings


logger = logging.getLogger(__name__)


# region 异常
@dataclass
class AccountAPIError(RuntimeError):
    """账户 API 调用异常"""
    kind: str
    message: str
    status_code: int | None = None

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"[{self.status_code}] {self.message}"
        return self.message


def _status_kind(status_code: int) -> str:
    if status_code in (401, 403):
        return "authorization"
    if status_code >= 500:
        return "server"
    if status_code < 400:
        return "redirect"
    return "client"
# endregion


# region 账户客户端
class AccountAPIClient:
    """
    账户 API 客户端

    功能:
        - 单次 GET 请求, 无重试
        - 空对象 {} 等合法 JSON 均视为成功
    """
    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    async def fetch(self, endpoint: str, token: AuthToken) -> Any:
        """
        获取账户数据

        参数:
            endpoint: API 路径, 直接拼接在 base_url 之后
            token: 已解析的访问令牌

        返回:
            响应 JSON 数据 (不做结构校验)

        抛出:
            AccountAPIError: 网络异常、HTTP 错误或响应非 JSON
        """
        api = self._settings.api
        url = f"{api.base_url}{endpoint}"
        headers = {
            "x-account-id": api.account_id,
            "Authorization": f"Bearer {token.access_token}",
        }

        logger.info("Using token: %s...", token.prefix)
        logger.info("Making request to: %s", url)

        try:
            async with httpx.AsyncClient(
                timeout=self._settings.request.timeout,
                transport=self._transport,
                trust_env=False,
                follow_redirects=True,
            ) as client:
                response = await client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            error_message = str(exc).strip()
            message = exc.__class__.__name__
            if error_message:
                message = f"{message}: {error_message}"
            raise AccountAPIError(kind="network", message=message) from exc

        if not response.is_success:
            logger.debug("Error response body: %s", response.text)
            raise AccountAPIError(
                kind=_status_kind(response.status_code),
                message=f"HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise AccountAPIError(
                kind="parse",
                message="Response body is not valid JSON",
                status_code=response.status_code,
            ) from exc
# endregion
