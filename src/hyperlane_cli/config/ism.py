"""
交互式 ISM 配置构建器。

所有构建器返回可直接写入文件的 camelCase 字典，例如::

    {"type": "messageIdMultisigIsm", "validators": ["0x...", "0x..."], "threshold": 2}

aggregation / routing 类型会递归调用 ``create_ism_config`` 构建子模块。
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeVar

from hyperlane_cli.config.schema import IsmType
from hyperlane_cli.logger import log_gray, log_green
from hyperlane_cli.utils import prompts
from hyperlane_cli.utils.chains import detect_and_confirm_or_prompt, run_multi_chain_selection_step

if TYPE_CHECKING:
    from hyperlane_cli.context import CommandContext

logger = logging.getLogger(__name__)

_F = TypeVar("_F", bound=Callable[..., Awaitable[dict[str, Any]]])

ISM_TYPE_DESCRIPTIONS: dict[IsmType, str] = {
    IsmType.MESSAGE_ID_MULTISIG: "Validators need to sign just this messageId",
    IsmType.MERKLE_ROOT_MULTISIG: (
        "Validators need to sign the root of the merkle tree of all messages from origin chain"
    ),
    IsmType.ROUTING: (
        "Each origin chain can be verified by the specified ISM type via RoutingISM"
    ),
    IsmType.FALLBACK_ROUTING: (
        "You can specify ISM type for specific chains you like and fallback to "
        "mailbox's default ISM for other chains via DefaultFallbackRoutingISM"
    ),
    IsmType.AGGREGATION: "You can aggregate multiple ISMs into one ISM via AggregationISM",
    IsmType.TRUSTED_RELAYER: "Deliver messages from an authorized address",
    IsmType.PAUSABLE: "ISM that the owner can pause to halt message delivery",
    IsmType.TEST: (
        "ISM where you can deliver messages without any validation "
        "(WARNING: only for testing, do not use in production)"
    ),
}


def with_config_creation_logs(config_type: str) -> Callable[[_F], _F]:
    """在构建器前后输出 "Creating ..." / "Created ..." 日志。"""

    def decorator(func: _F) -> _F:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> dict[str, Any]:
            log_gray(f"Creating {config_type}...")
            config = await func(*args, **kwargs)
            log_green(f"Created {config_type}!")
            return config

        return wrapper  # type: ignore[return-value]

    return decorator


async def create_ism_config(context: CommandContext) -> dict[str, Any]:
    """交互选择 ISM 类型并构建配置。"""
    module_type = IsmType(
        prompts.ask_select(
            "Select ISM type",
            [(t.value, description) for t, description in ISM_TYPE_DESCRIPTIONS.items()],
        )
    )
    logger.debug("选择的 ISM 类型：%s", module_type.value)

    if module_type in (IsmType.MESSAGE_ID_MULTISIG, IsmType.MERKLE_ROOT_MULTISIG):
        return await create_multisig_config(module_type)
    if module_type in (IsmType.ROUTING, IsmType.FALLBACK_ROUTING):
        return await create_routing_config(context, module_type)
    if module_type is IsmType.AGGREGATION:
        return await create_aggregation_config(context)
    if module_type is IsmType.TRUSTED_RELAYER:
        return await create_trusted_relayer_config(context)
    if module_type is IsmType.PAUSABLE:
        return await create_pausable_ism_config(context)
    return {"type": IsmType.TEST.value}


@with_config_creation_logs("multisigIsm")
async def create_multisig_config(ism_type: IsmType) -> dict[str, Any]:
    validators = prompts.ask_addresses(
        "Enter validator addresses (comma separated list) for multisig ISM"
    )
    threshold = prompts.ask_int(
        "Enter threshold of validators (number) for multisig ISM",
        minimum=1,
        maximum=len(validators),
    )
    return {
        "type": ism_type.value,
        "validators": validators,
        "threshold": threshold,
    }


@with_config_creation_logs(IsmType.TRUSTED_RELAYER.value)
async def create_trusted_relayer_config(context: CommandContext) -> dict[str, Any]:
    relayer = await detect_and_confirm_or_prompt(
        context.get_signer_address,
        "For trusted relayer ISM, enter",
        "relayer address",
        "signer",
    )
    return {"type": IsmType.TRUSTED_RELAYER.value, "relayer": relayer}


@with_config_creation_logs(IsmType.AGGREGATION.value)
async def create_aggregation_config(context: CommandContext) -> dict[str, Any]:
    count = prompts.ask_int("Enter the number of ISMs to aggregate (number)", minimum=1)
    threshold = prompts.ask_int(
        "Enter the threshold of ISMs for verification (number)",
        minimum=1,
        maximum=count,
    )
    modules = []
    for i in range(count):
        log_gray(f"Configuring ISM {i + 1} of {count}")
        modules.append(await create_ism_config(context))
    return {
        "type": IsmType.AGGREGATION.value,
        "modules": modules,
        "threshold": threshold,
    }


@with_config_creation_logs("routingIsm")
async def create_routing_config(context: CommandContext, ism_type: IsmType) -> dict[str, Any]:
    owner = await detect_and_confirm_or_prompt(
        context.get_signer_address,
        "Enter",
        "owner address for routing ISM",
        "signer",
    )
    chains = run_multi_chain_selection_step(
        context.chain_metadata,
        "Select chains to configure routing ISM for",
        required_number=1,
    )
    domains: dict[str, Any] = {}
    for chain in chains:
        log_gray(f"You are about to configure routing ISM from source chain {chain}.")
        domains[chain] = await create_ism_config(context)
    return {"type": ism_type.value, "owner": owner, "domains": domains}


@with_config_creation_logs(IsmType.PAUSABLE.value)
async def create_pausable_ism_config(context: CommandContext) -> dict[str, Any]:
    owner = await detect_and_confirm_or_prompt(
        context.get_signer_address,
        "For pausable ISM, enter",
        "owner address",
        "signer",
    )
    paused = prompts.ask_confirm("Should the ISM start paused?", default=False)
    return {"type": IsmType.PAUSABLE.value, "owner": owner, "paused": paused}
