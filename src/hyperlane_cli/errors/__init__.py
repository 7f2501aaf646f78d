"""
hyperlane-cli 结构化异常体系。

所有异常遵循"三段式"规范：What / Why / How to fix。
"""

from hyperlane_cli.errors.exceptions import (
    BackendNotFoundError,
    ChainNotFoundError,
    ConfigValidationError,
    ContextError,
    DeploymentCancelledError,
    DeploymentError,
    FileFormatError,
    HyperlaneCliError,
    InsufficientBalanceError,
    RegistryError,
)

__all__ = [
    "BackendNotFoundError",
    "ChainNotFoundError",
    "ConfigValidationError",
    "ContextError",
    "DeploymentCancelledError",
    "DeploymentError",
    "FileFormatError",
    "HyperlaneCliError",
    "InsufficientBalanceError",
    "RegistryError",
]
