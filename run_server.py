"""
描述: MCP Server 启动脚本
主要功能:
    - 配置 asyncio 策略 (Windows)
    - 以 stdio 传输启动账户 MCP 服务
"""
import asyncio
import os
import sys

# Windows 兼容性：在任何 asyncio 操作前设置策略
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# 添加项目路径
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from account_mcp.main import main

if __name__ == "__main__":
    main()
