"""
dry-run 失败判定。

dry-run 在模拟环境（分叉链）上执行部署。部分 RPC 不支持分叉，
此时合约调用会以特定错误失败；这类失败是模拟环境本身的产物，
不代表部署配置有问题。
"""

from __future__ import annotations

import logging

from hyperlane_cli.logger import warn_yellow

logger = logging.getLogger(__name__)

DRY_RUN_FAILURE_MARKERS: tuple[str, ...] = ("call revert exception",)


def evaluate_if_dry_run_failure(error: BaseException, dry_run: str | bool | None) -> bool:
    """
    判断错误是否为 dry-run 的预期产物。

    参数:
        error: 部署过程中抛出的异常
        dry_run: dry-run 模拟的链名（或布尔值）；为空表示非 dry-run

    返回:
        True 表示该错误是 dry-run 产物（已输出提示），调用方可以不再抛出；
        False 表示该错误需要继续传播
    """
    if not dry_run:
        return False

    message = str(error).lower()
    if not any(marker in message for marker in DRY_RUN_FAILURE_MARKERS):
        return False

    logger.debug("dry-run 失败被判定为模拟环境产物：%s", error)
    warn_yellow(
        "⛔️ [dry-run] The current RPC may not support forking. "
        "Please consider using a different RPC provider."
    )
    return True
