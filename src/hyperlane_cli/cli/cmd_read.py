"""
core read 命令 — 从链上推导 Core Config。

推导结果原样写出，不做任何转换或校验。
"""

from __future__ import annotations

import asyncio

from hyperlane_cli.cli.options import GlobalOptions
from hyperlane_cli.cli.utils import handle_cli_error, print_error, print_success
from hyperlane_cli.context import get_context
from hyperlane_cli.errors import HyperlaneCliError
from hyperlane_cli.logger import log_gray
from hyperlane_cli.utils.files import write_yaml_or_json
from hyperlane_cli.utils.prompts import is_address


def read_command(
    options: GlobalOptions,
    chain: str,
    mailbox: str,
    config: str,
) -> None:
    """读取 ``chain`` 上 ``mailbox`` 的 ISM / Hook 配置并写入 ``config``。"""
    log_gray("Hyperlane Core Read")
    log_gray("-------------------")

    mailbox = mailbox.strip()
    if not is_address(mailbox):
        print_error(f"--mailbox 不是合法地址：{mailbox}", exit_code=2)

    try:
        context = get_context(
            registry_path=options.registry,
            key=options.key,
            skip_confirmation=options.yes,
        )
        reader = context.get_backend(chain).create_core_reader(context, chain)
        core_config = asyncio.run(reader.derive_core_config(mailbox))
        write_yaml_or_json(config, core_config)
    except HyperlaneCliError as e:
        handle_cli_error(e)

    print_success(f"{chain} 上的 Core Config 已写入 {config}")
