"""
子命令共用的选项定义与全局选项。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import typer

DEFAULT_CORE_CONFIG_PATH = "./configs/core-config.yaml"


@dataclass
class GlobalOptions:
    """根命令的全局选项，通过 ``ctx.obj`` 传给子命令。"""

    registry: str | None = None
    key: str | None = None
    yes: bool = False
    verbosity: str = "info"


def get_global_options(ctx: typer.Context) -> GlobalOptions:
    """读取根命令保存的全局选项；直接调用子命令应用时使用默认值。"""
    obj = ctx.obj
    if isinstance(obj, GlobalOptions):
        return obj
    return GlobalOptions()


def chain_option(required: bool = False) -> Any:
    return typer.Option(
        ... if required else None,
        "--chain",
        help="目标链名称（Registry 中的链）",
    )


def output_file_option(default: str, help: str) -> Any:
    return typer.Option(
        default,
        "--config",
        help=help,
    )


def dry_run_option() -> Any:
    return typer.Option(
        None,
        "--dry-run",
        help="在分叉的链上模拟部署，不提交任何交易（参数为链名）",
    )


def from_address_option() -> Any:
    return typer.Option(
        None,
        "--from-address",
        help="dry-run 时冒充的签名者地址",
    )
