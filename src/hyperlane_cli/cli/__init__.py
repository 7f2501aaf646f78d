"""
hyperlane CLI 命令行工具。
"""

from hyperlane_cli.cli.app import app, main

__all__ = ["app", "main"]
