"""
Registry：链元数据与已部署合约地址。
"""

from hyperlane_cli.registry.local import DEFAULT_REGISTRY_PATH, LocalRegistry

__all__ = ["DEFAULT_REGISTRY_PATH", "LocalRegistry"]
