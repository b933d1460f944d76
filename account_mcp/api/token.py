"""
描述: 账户 API 访问令牌获取
主要功能:
    - 以表单方式提交 key/secret 换取 Bearer Token
    - 解析并校验令牌字段
    - 失败时记录日志并抛出 AuthError
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import BaseModel, Field

from account_mcp.config import ConfigurationError, Settings


logger = logging.getLogger(__name__)


# region 异常与令牌模型
class AuthError(RuntimeError):
    """认证相关异常"""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthToken(BaseModel):
    """已解析的访问令牌"""
    access_token: str = Field(min_length=1)
    raw: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_response(cls, payload: Any, token_field: str) -> "AuthToken":
        if not isinstance(payload, dict):
            raise AuthError("Invalid access token response")
        token = payload.get(token_field)
        if not isinstance(token, str) or not token:
            raise AuthError(f"Access token response missing '{token_field}' field")
        return cls(access_token=token, raw=payload)

    @property
    def prefix(self) -> str:
        return self.access_token[:8]
# endregion


# region 令牌获取
class TokenAcquirer:
    """
    访问令牌获取器

    功能:
        - 每次调用独立认证, 不做缓存
    """
    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    async def acquire(self) -> AuthToken:
        """请求认证接口获取新 Token"""
        api = self._settings.api
        if not api.key or not api.secret:
            raise ConfigurationError("API_KEY/API_SECRET is required")
        if not api.base_url or not api.account_id:
            raise ConfigurationError("API_BASE_URL/ACCOUNT_ID is required")

        url = f"{api.base_url}{api.auth_path}"
        headers = {
            "x-account-id": api.account_id,
            "Content-Type": "application/x-www-form-urlencoded",
        }
        form = {"key": api.key, "secret": api.secret}

        try:
            async with httpx.AsyncClient(
                timeout=self._settings.request.timeout,
                transport=self._transport,
                trust_env=False,
                follow_redirects=True,
            ) as client:
                response = await client.post(url, data=form, headers=headers)
            if not response.is_success:
                raise AuthError(
                    f"Failed to fetch access token: HTTP {response.status_code}",
                    status_code=response.status_code,
                )
            token = AuthToken.from_response(response.json(), api.token_field)
        except AuthError as exc:
            logger.error("Error authenticating: %s", exc)
            raise
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error authenticating: %s", exc.__class__.__name__)
            error_message = str(exc).strip()
            if error_message:
                raise AuthError(
                    f"Failed to fetch access token: {exc.__class__.__name__}: {error_message}"
                ) from exc
            raise AuthError(
                f"Failed to fetch access token: {exc.__class__.__name__}"
            ) from exc

        logger.info("Authentication successful")
        return token
# endregion
