"""
hyperlane-cli 配置模块。

提供 Core Config Schema、链元数据 Schema 以及交互式配置构建器。
"""

from hyperlane_cli.config.chain import ChainMetadata, NativeToken, ProtocolType, RpcUrl
from hyperlane_cli.config.schema import (
    ADDRESS_PATTERN,
    CoreConfig,
    HookConfig,
    HookType,
    IsmConfig,
    IsmType,
    validate_core_config,
)

__all__ = [
    "ADDRESS_PATTERN",
    "ChainMetadata",
    "CoreConfig",
    "HookConfig",
    "HookType",
    "IsmConfig",
    "IsmType",
    "NativeToken",
    "ProtocolType",
    "RpcUrl",
    "validate_core_config",
]
