"""
描述: MCP Server 主入口
主要功能:
    - 加载 .env 与配置, 初始化日志
    - 启动前校验必填配置
    - 以 stdio 传输运行 FastMCP 服务
"""

from __future__ import annotations

import logging
import sys

from dotenv import load_dotenv

from account_mcp.config import load_settings, require_api_settings
from account_mcp.server.app import build_server
from account_mcp.utils.logger import setup_logging


logger = logging.getLogger(__name__)


def main() -> None:
    load_dotenv()
    try:
        settings = load_settings()
        setup_logging(settings.logging)
        require_api_settings(settings)

        server = build_server(settings)
        logger.info(
            "Account MCP Server running on stdio",
            extra={"server": settings.server.name, "version": settings.server.version},
        )
        server.run(transport="stdio")
    except Exception:
        logger.exception("Fatal error in main()")
        sys.exit(1)


if __name__ == "__main__":
    main()
