"""
部署流程的通用步骤：预检、部署计划确认、部署成本统计。
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING

from hyperlane_cli.config.schema import CoreConfig
from hyperlane_cli.errors import DeploymentCancelledError, InsufficientBalanceError
from hyperlane_cli.logger import log, log_blue, log_gray, log_green, log_table
from hyperlane_cli.utils import prompts

if TYPE_CHECKING:
    from hyperlane_cli.context import CommandContext

logger = logging.getLogger(__name__)

MINIMUM_CORE_DEPLOY_GAS = 100_000_000


def format_native_amount(amount: int, decimals: int = 18, symbol: str = "ETH") -> str:
    """把最小单位金额格式化为原生代币单位，例如 1500000000000000000 → "1.5 ETH"。"""
    value = Decimal(amount).scaleb(-decimals).normalize()
    return f"{value:f} {symbol}"


def _describe(config: object) -> str:
    if isinstance(config, str):
        return config
    return getattr(config, "type", type(config).__name__)


async def run_preflight_checks_for_chains(
    context: CommandContext,
    chains: list[str],
    min_gas: int = MINIMUM_CORE_DEPLOY_GAS,
) -> None:
    """
    部署前检查签名者与余额。

    dry-run 下模拟环境会为签名者注资，跳过余额检查。

    异常:
        ContextError: 没有签名者
        InsufficientBalanceError: 任一链上余额低于 gasPrice × min_gas
    """
    log_blue("Running pre-flight checks for chains...")
    signer = context.require_signer()
    address = await signer.get_address()

    if context.is_dry_run:
        log_gray("Skipping balance checks in dry-run mode")
        return

    for chain in chains:
        metadata = context.registry.get_chain_metadata(chain)
        backend = context.get_backend(chain)
        gas_price = await backend.get_gas_price(metadata)
        required = gas_price * min_gas
        balance = await backend.get_balance(metadata, address)
        logger.debug("%s: balance=%d required=%d", chain, balance, required)
        if balance < required:
            token = metadata.native_token
            raise InsufficientBalanceError(
                what=f"签名者在 {chain} 上的余额不足以完成部署。",
                why=f"当前余额 {format_native_amount(balance, token.decimals, token.symbol)}，"
                    f"预估最少需要 {format_native_amount(required, token.decimals, token.symbol)}。",
                how=f"请向 {address} 转入足够的 {token.symbol} 后重试。",
                chain=chain,
                balance=balance,
                required=required,
            )
    log_green("✅ Balances are sufficient")


async def run_deploy_plan_step(
    context: CommandContext,
    chain: str,
    config: CoreConfig,
) -> None:
    """
    展示部署计划并请用户确认。

    异常:
        DeploymentCancelledError: 用户拒绝部署计划
    """
    address = await context.require_signer().get_address()

    log_blue("\nDeployment plan")
    log_gray("===============")
    log(f"Transaction signer and owner of new contracts: {address}")
    log(f"Deploying core contracts to network: {chain}")
    log_table(
        [
            ("owner", config.owner),
            ("defaultIsm", _describe(config.default_ism)),
            ("defaultHook", _describe(config.default_hook)),
            ("requiredHook", _describe(config.required_hook)),
        ],
        columns=("Field", "Value"),
    )

    if context.skip_confirmation:
        return
    if not prompts.ask_confirm("Is this deployment plan correct?", default=True):
        raise DeploymentCancelledError(
            what="部署已取消。",
            how="请修正 Core Config 后重新运行 'hyperlane core deploy'。",
        )


async def prepare_deploy(
    context: CommandContext,
    user_address: str,
    chains: list[str],
) -> dict[str, int]:
    """记录部署前的余额，dry-run 下返回空字典。"""
    if context.is_dry_run:
        return {}
    balances: dict[str, int] = {}
    for chain in chains:
        metadata = context.registry.get_chain_metadata(chain)
        balances[chain] = await context.get_backend(chain).get_balance(metadata, user_address)
    return balances


async def complete_deploy(
    context: CommandContext,
    command: str,
    initial_balances: dict[str, int],
    user_address: str,
    chains: list[str],
) -> None:
    """输出各链上本次部署消耗的原生代币。"""
    if context.is_dry_run:
        log_green(f"✅ {command} dry-run completed successfully")
        return
    for chain in chains:
        if chain not in initial_balances:
            continue
        metadata = context.registry.get_chain_metadata(chain)
        final_balance = await context.get_backend(chain).get_balance(metadata, user_address)
        spent = max(initial_balances[chain] - final_balance, 0)
        token = metadata.native_token
        log_gray(
            f"Total cost of {command} deployment on {chain}: "
            f"{format_native_amount(spent, token.decimals, token.symbol)}"
        )
