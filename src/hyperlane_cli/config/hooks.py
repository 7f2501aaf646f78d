"""
交互式 Hook 配置构建器。

非 advanced 模式只提供常用类型（merkleTree / protocolFee / aggregation），
protocolFee 直接使用签名者作为 owner 并采用默认费用；
advanced 模式提供全部类型并逐项提示。
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from hyperlane_cli.config.ism import with_config_creation_logs
from hyperlane_cli.config.schema import HookType
from hyperlane_cli.logger import log_gray, log_red
from hyperlane_cli.utils import prompts
from hyperlane_cli.utils.chains import detect_and_confirm_or_prompt, run_multi_chain_selection_step

if TYPE_CHECKING:
    from hyperlane_cli.context import CommandContext

logger = logging.getLogger(__name__)

DEFAULT_MAX_PROTOCOL_FEE = "0.1"
DEFAULT_PROTOCOL_FEE = "0"
DEFAULT_GAS_OVERHEAD = 75_000
DEFAULT_GAS_PRICE = "1000000000"
# 兑换率以 1e10 为基准（1e10 表示两条链原生代币等价）
DEFAULT_TOKEN_EXCHANGE_RATE = "10000000000"

_BASIC_HOOK_TYPES: dict[HookType, str] = {
    HookType.AGGREGATION: (
        "Aggregate multiple hooks into a single hook (e.g. merkle tree + IGP) "
        "which will be called in sequence"
    ),
    HookType.MERKLE_TREE: (
        "Add messages to the incremental merkle tree on origin chain "
        "(needed for the merkleRootMultisigIsm on the remote chain)"
    ),
    HookType.PROTOCOL_FEE: "Charge fees for each message dispatch from this chain",
}

_ADVANCED_HOOK_TYPES: dict[HookType, str] = {
    **_BASIC_HOOK_TYPES,
    HookType.INTERCHAIN_GAS_PAYMASTER: (
        "Pay for gas on remote chains so relayers deliver messages"
    ),
    HookType.ROUTING: "Each destination chain can be handled by the specified hook",
    HookType.FALLBACK_ROUTING: (
        "Route specific destination chains to their own hooks and use a fallback hook for the rest"
    ),
    HookType.PAUSABLE: "Hook that the owner can pause to halt message dispatch",
}


def to_wei(amount: str, decimals: int = 18) -> str:
    """
    把以原生代币为单位的金额转换为最小单位字符串。

    示例::

        >>> to_wei("0.1")
        "100000000000000000"

    异常:
        ValueError: 金额不是数字、为负数或小数位超过 decimals
    """
    try:
        value = Decimal(amount.strip())
    except InvalidOperation:
        raise ValueError(f"'{amount}' 不是合法的数字") from None
    if not value.is_finite() or value < 0:
        raise ValueError(f"金额必须是非负数：{amount}")
    scaled = value.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"金额 {amount} 的小数位超过了 {decimals} 位")
    return str(int(scaled))


def _ask_wei(message: str, default: str) -> str:
    while True:
        answer = prompts.ask_text(message, default=default)
        try:
            return to_wei(answer)
        except ValueError as e:
            log_red(str(e))


async def _detect_owner(context: CommandContext, hook_label: str) -> str:
    return await detect_and_confirm_or_prompt(
        context.get_signer_address,
        f"For {hook_label}, enter",
        "owner address",
        "signer",
    )


async def create_hook_config(
    context: CommandContext,
    select_message: str = "Select hook type",
    advanced: bool = False,
) -> dict[str, Any]:
    """交互选择 Hook 类型并构建配置。"""
    choices = _ADVANCED_HOOK_TYPES if advanced else _BASIC_HOOK_TYPES
    hook_type = HookType(
        prompts.ask_select(
            select_message,
            [(t.value, description) for t, description in choices.items()],
        )
    )
    logger.debug("选择的 Hook 类型：%s", hook_type.value)

    if hook_type is HookType.MERKLE_TREE:
        return create_merkle_tree_config()
    if hook_type is HookType.PROTOCOL_FEE:
        return await create_protocol_fee_config(context, advanced)
    if hook_type is HookType.AGGREGATION:
        return await create_aggregation_hook_config(context, advanced)
    if hook_type is HookType.INTERCHAIN_GAS_PAYMASTER:
        return await create_igp_config(context)
    if hook_type in (HookType.ROUTING, HookType.FALLBACK_ROUTING):
        return await create_routing_hook_config(context, hook_type, advanced)
    return await create_pausable_hook_config(context)


def create_merkle_tree_config() -> dict[str, Any]:
    return {"type": HookType.MERKLE_TREE.value}


@with_config_creation_logs(HookType.PROTOCOL_FEE.value)
async def create_protocol_fee_config(
    context: CommandContext,
    advanced: bool = False,
) -> dict[str, Any]:
    signer_address = await context.get_signer_address()
    if not advanced and signer_address:
        owner = signer_address
    else:
        owner = await _detect_owner(context, "protocol fee hook")

    beneficiary = owner
    if advanced and not prompts.ask_confirm(
        f"Use this same address ({owner}) for the beneficiary?",
        default=True,
    ):
        beneficiary = prompts.ask_address("Enter beneficiary address for protocol fee hook")

    if advanced:
        while True:
            max_protocol_fee = _ask_wei(
                "Enter max protocol fee for protocol fee hook (in native token)",
                DEFAULT_MAX_PROTOCOL_FEE,
            )
            protocol_fee = _ask_wei(
                "Enter protocol fee for protocol fee hook (in native token)",
                DEFAULT_PROTOCOL_FEE,
            )
            if int(protocol_fee) <= int(max_protocol_fee):
                break
            log_red("Protocol fee cannot be greater than max protocol fee")
    else:
        max_protocol_fee = to_wei(DEFAULT_MAX_PROTOCOL_FEE)
        protocol_fee = to_wei(DEFAULT_PROTOCOL_FEE)

    return {
        "type": HookType.PROTOCOL_FEE.value,
        "maxProtocolFee": max_protocol_fee,
        "protocolFee": protocol_fee,
        "beneficiary": beneficiary,
        "owner": owner,
    }


@with_config_creation_logs(HookType.AGGREGATION.value)
async def create_aggregation_hook_config(
    context: CommandContext,
    advanced: bool = False,
) -> dict[str, Any]:
    count = prompts.ask_int("Enter the number of hooks to aggregate (number)", minimum=1)
    hooks = []
    for i in range(count):
        log_gray(f"Configuring hook {i + 1} of {count}")
        hooks.append(await create_hook_config(context, "Select hook type", advanced))
    return {"type": HookType.AGGREGATION.value, "hooks": hooks}


@with_config_creation_logs(HookType.INTERCHAIN_GAS_PAYMASTER.value)
async def create_igp_config(context: CommandContext) -> dict[str, Any]:
    owner = await _detect_owner(context, "interchain gas paymaster")

    beneficiary = owner
    if not prompts.ask_confirm(f"Use this same address ({owner}) for the beneficiary?", default=True):
        beneficiary = prompts.ask_address("Enter beneficiary address for IGP")

    oracle_key = owner
    if not prompts.ask_confirm(f"Use this same address ({owner}) for the oracle key?", default=True):
        oracle_key = prompts.ask_address("Enter oracle key address for IGP")

    chains = run_multi_chain_selection_step(
        context.chain_metadata,
        "Select destination chains to pay for gas on",
        required_number=1,
    )
    overhead: dict[str, int] = {}
    oracle_config: dict[str, dict[str, str]] = {}
    for chain in chains:
        overhead[chain] = prompts.ask_int(
            f"Enter gas overhead for {chain}",
            default=DEFAULT_GAS_OVERHEAD,
            minimum=0,
        )
        gas_price = prompts.ask_int(
            f"Enter gas price (in wei) for {chain}",
            default=int(DEFAULT_GAS_PRICE),
            minimum=0,
        )
        exchange_rate = prompts.ask_int(
            f"Enter token exchange rate (1e10 = parity) for {chain}",
            default=int(DEFAULT_TOKEN_EXCHANGE_RATE),
            minimum=0,
        )
        oracle_config[chain] = {
            "gasPrice": str(gas_price),
            "tokenExchangeRate": str(exchange_rate),
        }

    return {
        "type": HookType.INTERCHAIN_GAS_PAYMASTER.value,
        "owner": owner,
        "beneficiary": beneficiary,
        "oracleKey": oracle_key,
        "overhead": overhead,
        "oracleConfig": oracle_config,
    }


@with_config_creation_logs("routingHook")
async def create_routing_hook_config(
    context: CommandContext,
    hook_type: HookType,
    advanced: bool = False,
) -> dict[str, Any]:
    owner = await _detect_owner(context, "routing hook")
    chains = run_multi_chain_selection_step(
        context.chain_metadata,
        "Select destination chains to configure routing hook for",
        required_number=1,
    )
    domains: dict[str, Any] = {}
    for chain in chains:
        log_gray(f"You are about to configure the hook for destination chain {chain}.")
        domains[chain] = await create_hook_config(
            context, f"Select hook type for {chain}", advanced
        )

    config: dict[str, Any] = {"type": hook_type.value, "owner": owner, "domains": domains}
    if hook_type is HookType.FALLBACK_ROUTING:
        config["fallback"] = await create_hook_config(context, "Select fallback hook type", advanced)
    return config


@with_config_creation_logs(HookType.PAUSABLE.value)
async def create_pausable_hook_config(context: CommandContext) -> dict[str, Any]:
    owner = await _detect_owner(context, "pausable hook")
    paused = prompts.ask_confirm("Should the hook start paused?", default=False)
    return {"type": HookType.PAUSABLE.value, "owner": owner, "paused": paused}
