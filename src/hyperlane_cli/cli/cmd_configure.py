"""
core configure 命令 — 交互式生成 Core Config。

收集 owner 地址，构建默认 ISM 与默认 / 必需 Hook，校验后写出文件。
"""

from __future__ import annotations

import asyncio
from typing import Any

from hyperlane_cli.cli.options import GlobalOptions
from hyperlane_cli.cli.utils import handle_cli_error, print_success
from hyperlane_cli.config.hooks import create_hook_config
from hyperlane_cli.config.ism import create_ism_config, create_trusted_relayer_config
from hyperlane_cli.config.schema import validate_core_config
from hyperlane_cli.context import CommandContext, get_context
from hyperlane_cli.errors import HyperlaneCliError
from hyperlane_cli.logger import log_blue, log_bold_underlined_red, log_gray, log_red
from hyperlane_cli.utils.chains import detect_and_confirm_or_prompt
from hyperlane_cli.utils.files import write_yaml_or_json


def configure_command(
    options: GlobalOptions,
    ism_advanced: bool,
    config: str,
) -> None:
    """生成 Core Config 并写入 ``config``。"""
    log_gray("Hyperlane Core Configure")
    log_gray("------------------------")

    try:
        context = get_context(
            registry_path=options.registry,
            key=options.key,
            skip_confirmation=options.yes,
        )
        core_config = asyncio.run(build_core_config(context, ism_advanced))
        validate_core_config(core_config, config)
        write_yaml_or_json(config, core_config)
    except HyperlaneCliError as e:
        handle_cli_error(e)

    print_success(f"Core Config 已写入 {config}")


async def build_core_config(context: CommandContext, ism_advanced: bool) -> dict[str, Any]:
    """交互构建 Core Config 字典（未校验）。"""
    owner = await detect_and_confirm_or_prompt(
        context.get_signer_address,
        "Enter the desired",
        "owner address",
        "signer",
    )

    # 默认 ISM：advanced 模式可任意组合，否则使用 trusted relayer
    if ism_advanced:
        log_blue("Creating a new advanced ISM config")
        log_bold_underlined_red("WARNING: USE AT YOUR RISK.")
        log_red(
            "Advanced ISM configs require knowledge of different ISM types and how "
            "they work together topologically. If possible, use the basic ISM configs "
            "are recommended."
        )
        default_ism = await create_ism_config(context)
    else:
        default_ism = await create_trusted_relayer_config(context)

    default_hook = await create_hook_config(context, "Select default hook type", ism_advanced)
    required_hook = await create_hook_config(context, "Select required hook type", ism_advanced)

    return {
        "owner": owner,
        "defaultIsm": default_ism,
        "defaultHook": default_hook,
        "requiredHook": required_hook,
    }
