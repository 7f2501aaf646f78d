"""
日志与终端输出。

两类输出：
- 诊断日志：标准库 logging，由 ``configure_logging`` 安装 RichHandler（输出到 stderr）
- 面向用户的彩色输出：``log_*`` 系列函数，统一走全局 Rich Console
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

# 全局 Console 实例
_console: Console | None = None


def create_console() -> Console:
    """创建或获取全局 Rich Console 实例。"""
    global _console
    if _console is None:
        _console = Console()
    return _console


def configure_logging(level: str = "info") -> None:
    """
    根据 ``--verbosity`` 配置 hyperlane_cli 的诊断日志。

    参数:
        level: debug / info / warning / error
    """
    try:
        log_level = _LOG_LEVELS[level.lower()]
    except KeyError:
        raise ValueError(
            f"不支持的日志级别：{level}（可选：{', '.join(_LOG_LEVELS)}）"
        ) from None

    package_logger = logging.getLogger("hyperlane_cli")
    package_logger.setLevel(log_level)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        package_logger.addHandler(handler)
    package_logger.propagate = False


def log(message: Any = "") -> None:
    create_console().print(escape(message) if isinstance(message, str) else message)


def log_gray(message: str) -> None:
    create_console().print(f"[grey50]{escape(message)}[/grey50]")


def log_blue(message: str) -> None:
    create_console().print(f"[blue]{escape(message)}[/blue]")


def log_green(message: str) -> None:
    create_console().print(f"[green]{escape(message)}[/green]")


def log_red(message: str) -> None:
    create_console().print(f"[red]{escape(message)}[/red]")


def log_bold_underlined_red(message: str) -> None:
    create_console().print(f"[bold underline red]{escape(message)}[/bold underline red]")


def warn_yellow(message: str) -> None:
    create_console().print(f"[yellow]{escape(message)}[/yellow]")


def log_table(
    rows: Iterable[Sequence[Any]],
    columns: Sequence[str],
    title: str | None = None,
) -> None:
    """
    以表格形式输出。

    参数:
        rows: 行数据
        columns: 列名
        title: 表格标题
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*(escape(str(cell)) for cell in row))
    create_console().print(table)
