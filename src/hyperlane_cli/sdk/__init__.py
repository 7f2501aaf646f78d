"""
链 SDK 边界：协作方协议、后端注册表与内置签名者。
"""

from hyperlane_cli.sdk.backends import (
    BACKEND_ENTRY_POINT_GROUP,
    clear_backends,
    get_backend,
    register_backend,
)
from hyperlane_cli.sdk.protocols import ChainBackend, CoreDeployer, CoreReader, Signer
from hyperlane_cli.sdk.signers import ImpersonatedSigner

__all__ = [
    "BACKEND_ENTRY_POINT_GROUP",
    "ChainBackend",
    "CoreDeployer",
    "CoreReader",
    "ImpersonatedSigner",
    "Signer",
    "clear_backends",
    "get_backend",
    "register_backend",
]
