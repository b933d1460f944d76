"""
描述: MCP Server 全局配置加载器
主要功能:
    - 统一管理 API 凭据、请求与日志配置
    - 支持 YAML 文件加载与环境变量覆盖
    - 启动前校验必填配置
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")


class ConfigurationError(RuntimeError):
    """配置缺失或无效"""
    pass


# region 配置模型
class ApiSettings(BaseModel):
    """外部账户 API 配置"""
    key: str = ""
    secret: str = ""
    account_id: str = ""
    base_url: str = ""
    auth_path: str = "/auth/token"
    accounts_endpoint: str = "/accounts"
    token_field: str = "token"


class RequestSettings(BaseModel):
    timeout: float = 30.0


class ServerSettings(BaseModel):
    """MCP 服务标识"""
    name: str = "api-client"
    version: str = "1.0.0"


class ToolsSettings(BaseModel):
    enabled: list[str] = Field(default_factory=list)


class LoggingSettings(BaseModel):
    """日志系统配置"""
    level: str = "INFO"
    format: str = "json"


class Settings(BaseModel):
    """MCP Server 配置聚合根"""
    api: ApiSettings = Field(default_factory=ApiSettings)
    request: RequestSettings = Field(default_factory=RequestSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    tools: ToolsSettings = Field(default_factory=ToolsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
# endregion


# region 配置加载逻辑
_ENV_OVERRIDES: dict[str, list[str]] = {
    "API_KEY": ["api", "key"],
    "API_SECRET": ["api", "secret"],
    "ACCOUNT_ID": ["api", "account_id"],
    "API_BASE_URL": ["api", "base_url"],
    "API_AUTH_PATH": ["api", "auth_path"],
    "API_ACCOUNTS_ENDPOINT": ["api", "accounts_endpoint"],
    "API_TOKEN_FIELD": ["api", "token_field"],
    "API_REQUEST_TIMEOUT": ["request", "timeout"],
    "LOG_LEVEL": ["logging", "level"],
    "LOG_FORMAT": ["logging", "format"],
}

# 必填字段 -> 对应环境变量
_REQUIRED_API_FIELDS: dict[str, str] = {
    "key": "API_KEY",
    "secret": "API_SECRET",
    "account_id": "ACCOUNT_ID",
    "base_url": "API_BASE_URL",
}


def _expand_env(value: Any) -> Any:
    if isinstance(value, str):
        def replace(match: re.Match[str]) -> str:
            expr = match.group(1)
            if ":-" in expr:
                key, default = expr.split(":-", 1)
                return os.getenv(key) or default
            return os.getenv(expr, "")

        return _ENV_PATTERN.sub(replace, value)
    if isinstance(value, list):
        return [_expand_env(item) for item in value]
    if isinstance(value, dict):
        return {key: _expand_env(val) for key, val in value.items()}
    return value


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return _expand_env(data)


def _set_nested(data: dict[str, Any], keys: list[str], value: Any) -> None:
    current = data
    for key in keys[:-1]:
        current = current.setdefault(key, {})
    current[keys[-1]] = value


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    for env_key, path in _ENV_OVERRIDES.items():
        env_value = os.getenv(env_key)
        if env_value is not None and env_value != "":
            _set_nested(data, path, env_value)
    return data


def load_settings(config_path: str | None = None) -> Settings:
    """
    加载配置

    参数:
        config_path: YAML 配置文件路径 (默认读取 CONFIG_PATH 或 config.yaml, 文件可不存在)

    返回:
        校验后的 Settings 对象
    """
    path = Path(config_path or os.getenv("CONFIG_PATH", "config.yaml"))
    data = _load_yaml(path)
    data = _apply_env_overrides(data)
    return Settings.model_validate(data)


def missing_api_settings(settings: Settings) -> list[str]:
    """返回缺失的必填环境变量名"""
    return [
        env_name
        for field, env_name in _REQUIRED_API_FIELDS.items()
        if not str(getattr(settings.api, field) or "").strip()
    ]


def require_api_settings(settings: Settings) -> None:
    missing = missing_api_settings(settings)
    if missing:
        raise ConfigurationError(f"Missing configuration: {', '.join(missing)}")
# endregion
