"""
账户 API 访问层。
"""

from account_mcp.api.client import AccountAPIClient, AccountAPIError
from account_mcp.api.token import AuthError, AuthToken, TokenAcquirer

__all__ = [
    "AccountAPIClient",
    "AccountAPIError",
    "AuthError",
    "AuthToken",
    "TokenAcquirer",
]
