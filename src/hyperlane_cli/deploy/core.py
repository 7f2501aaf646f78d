"""
核心合约部署流程。

流程：
1. 选择目标链（dry-run 下使用模拟链）
2. 校验 Core Config
3. 预检（签名者、余额）
4. 部署计划确认
5. 调用 SDK 部署器；真实部署时把合约地址写回 Registry
6. 输出部署地址与成本
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from hyperlane_cli.config.schema import CoreConfig, validate_core_config
from hyperlane_cli.deploy.utils import (
    complete_deploy,
    prepare_deploy,
    run_deploy_plan_step,
    run_preflight_checks_for_chains,
)
from hyperlane_cli.logger import log, log_blue, log_green
from hyperlane_cli.utils.chains import run_single_chain_selection_step
from hyperlane_cli.utils.files import dump_yaml_or_json

if TYPE_CHECKING:
    from hyperlane_cli.context import CommandContext

logger = logging.getLogger(__name__)


async def run_core_deploy(
    context: CommandContext,
    chain: str | None,
    config: dict[str, Any] | CoreConfig,
    config_source: str = "<core-config>",
) -> dict[str, str]:
    """
    在指定链上部署核心合约。

    参数:
        context: 写命令上下文（必须有签名者）
        chain: 目标链；None 时 dry-run 下使用模拟链，否则提示选择
        config: Core Config（原始字典或已校验模型）
        config_source: 配置来源，用于校验错误信息

    返回:
        合约名 → 地址

    异常:
        ConfigValidationError: Core Config 无效
        InsufficientBalanceError / DeploymentCancelledError: 预检或确认未通过
        其他异常：SDK 部署器抛出的错误原样传播
    """
    if context.is_dry_run and chain and chain != context.dry_run_chain:
        logger.warning(
            "--chain %s 与 dry-run 链 %s 不一致，使用 dry-run 链",
            chain,
            context.dry_run_chain,
        )
        chain = context.dry_run_chain
    if not chain:
        if context.is_dry_run and context.dry_run_chain:
            chain = context.dry_run_chain
        else:
            chain = run_single_chain_selection_step(
                context.chain_metadata,
                "Select chain to connect",
            )
    context.use_signer_for_chain(chain)

    core_config = config if isinstance(config, CoreConfig) else validate_core_config(config, config_source)

    await run_preflight_checks_for_chains(context, [chain])
    await run_deploy_plan_step(context, chain, core_config)

    user_address = await context.require_signer().get_address()
    initial_balances = await prepare_deploy(context, user_address, [chain])

    log_blue("All systems ready, captain! Beginning deployment...")
    deployer = context.get_backend(chain).create_deployer(context, chain)
    deployed_addresses = await deployer.deploy(chain, core_config)
    logger.debug("部署完成：%s", deployed_addresses)

    if not context.is_dry_run:
        context.registry.update_chain_addresses(chain, deployed_addresses)

    await complete_deploy(context, "core", initial_balances, user_address, [chain])

    log_green("✅ Core contract deployments complete:\n")
    log(dump_yaml_or_json(deployed_addresses, "yaml").rstrip())
    return deployed_addresses
