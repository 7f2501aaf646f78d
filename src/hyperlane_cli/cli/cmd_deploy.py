"""
core deploy 命令 — 按 Core Config 部署核心合约。

dry-run 下部署失败时先判断是否为模拟环境产物：是则输出提示并正常结束，
否则错误继续传播。
"""

from __future__ import annotations

import asyncio

from hyperlane_cli.cli.options import GlobalOptions
from hyperlane_cli.cli.utils import handle_cli_error
from hyperlane_cli.context import get_write_context
from hyperlane_cli.deploy import evaluate_if_dry_run_failure, run_core_deploy
from hyperlane_cli.errors import HyperlaneCliError
from hyperlane_cli.logger import log_gray
from hyperlane_cli.utils.files import read_yaml_or_json


def deploy_command(
    options: GlobalOptions,
    chain: str | None,
    config: str,
    dry_run: str | None,
    from_address: str | None,
) -> None:
    """读取 ``config`` 并部署到 ``chain``。"""
    log_gray(f"Hyperlane permissionless deployment{' dry-run' if dry_run else ''}")
    log_gray("------------------------------------------------")

    try:
        context = get_write_context(
            registry_path=options.registry,
            key=options.key,
            skip_confirmation=options.yes,
            dry_run=dry_run,
            from_address=from_address,
            chain=chain,
        )
        asyncio.run(
            run_core_deploy(
                context,
                chain,
                read_yaml_or_json(config),
                config_source=config,
            )
        )
    except Exception as error:
        if evaluate_if_dry_run_failure(error, dry_run):
            return
        if isinstance(error, HyperlaneCliError):
            handle_cli_error(error)
        raise
