"""
hyperlane-cli — 跨链消息核心合约的配置与部署工具。

命令行用法::

    hyperlane core configure                       # 交互生成 Core Config
    hyperlane core deploy --chain sepolia          # 部署核心合约
    hyperlane core read --chain sepolia --mailbox 0x...

合约部署与链上读取由按链协议安装的 SDK 后端完成，见 ``hyperlane_cli.sdk``。
"""

from hyperlane_cli.config import CoreConfig, validate_core_config
from hyperlane_cli.context import CommandContext, get_context, get_write_context
from hyperlane_cli.deploy import evaluate_if_dry_run_failure, run_core_deploy
from hyperlane_cli.errors import HyperlaneCliError
from hyperlane_cli.registry import LocalRegistry
from hyperlane_cli.sdk import ChainBackend, register_backend

__version__ = "0.1.0"

__all__ = [
    # 配置
    "CoreConfig",
    "validate_core_config",
    # 上下文
    "CommandContext",
    "get_context",
    "get_write_context",
    # 部署
    "evaluate_if_dry_run_failure",
    "run_core_deploy",
    # Registry / SDK
    "ChainBackend",
    "LocalRegistry",
    "register_backend",
    # 异常
    "HyperlaneCliError",
    # 版本
    "__version__",
]
