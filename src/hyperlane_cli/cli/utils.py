"""
CLI 工具函数 — 统一的成功 / 警告 / 错误输出。
"""

from __future__ import annotations

import sys
from typing import NoReturn

from rich.markup import escape

from hyperlane_cli.errors import HyperlaneCliError
from hyperlane_cli.logger import create_console


def print_error(message: str, exit_code: int = 1) -> NoReturn:
    """
    打印错误信息并退出程序。

    参数:
        message: 错误信息
        exit_code: 退出码（默认 1）
    """
    console = create_console()
    console.print(f"[bold red]X 错误：[/bold red]{escape(message)}")
    sys.exit(exit_code)


def print_success(message: str) -> None:
    console = create_console()
    console.print(f"[bold green]OK[/bold green] {escape(message)}")


def handle_cli_error(error: HyperlaneCliError) -> NoReturn:
    """
    统一处理 HyperlaneCliError 异常：输出三段式信息并以退出码 1 退出。
    """
    console = create_console()
    console.print("\n[bold red]X 错误[/bold red]\n")
    console.print(escape(error.full_message))
    sys.exit(1)
