"""
链选择与值检测的交互步骤。
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping

from hyperlane_cli.config.chain import ChainMetadata
from hyperlane_cli.errors import RegistryError
from hyperlane_cli.utils import prompts

logger = logging.getLogger(__name__)


def _chain_choices(chain_metadata: Mapping[str, ChainMetadata]) -> list[tuple[str, str]]:
    """主网在前、测试网在后，各自按名称排序。"""
    ordered = sorted(chain_metadata.values(), key=lambda m: (m.is_testnet, m.name))
    return [
        (m.name, f"{m.label}（{'testnet' if m.is_testnet else 'mainnet'}，domain {m.domain_id}）")
        for m in ordered
    ]


def _require_chains(chain_metadata: Mapping[str, ChainMetadata]) -> None:
    if not chain_metadata:
        raise RegistryError(
            what="Registry 中没有任何链。",
            why="未在 Registry 的 chains/ 目录下找到 metadata.yaml。",
            how="请通过 --registry 指定包含链元数据的目录，"
                "或在 <registry>/chains/<chain>/metadata.yaml 中添加链。",
        )


def run_single_chain_selection_step(
    chain_metadata: Mapping[str, ChainMetadata],
    message: str = "选择链",
) -> str:
    """提示从 Registry 中选择一条链。"""
    _require_chains(chain_metadata)
    chain = prompts.ask_select(message, _chain_choices(chain_metadata))
    logger.debug("已选择链：%s", chain)
    return chain


def run_multi_chain_selection_step(
    chain_metadata: Mapping[str, ChainMetadata],
    message: str = "选择链",
    required_number: int = 1,
) -> list[str]:
    """提示从 Registry 中选择多条链。"""
    _require_chains(chain_metadata)
    chains = prompts.ask_multi_select(
        message,
        _chain_choices(chain_metadata),
        required_number=required_number,
    )
    logger.debug("已选择链：%s", ", ".join(chains))
    return chains


async def detect_and_confirm_or_prompt(
    detect: Callable[[], Awaitable[str | None]],
    prompt: str,
    label: str,
    source: str | None = None,
) -> str:
    """
    先尝试自动检测值，检测到则请用户确认，否则提示输入。

    检测失败（抛出异常）时回退到输入提示，检测到但未被确认的值作为输入默认值。

    参数:
        detect: 异步检测函数，返回 None 表示未检测到
        prompt: 输入提示前缀，例如 "Enter the desired"
        label: 值的名称，例如 "owner address"
        source: 检测来源，例如 "signer"

    返回:
        地址字符串
    """
    detected: str | None = None
    try:
        detected = await detect()
    except Exception as e:
        logger.debug("自动检测 %s 失败：%s", label, e)

    if detected:
        suffix = f" from {source}" if source else ""
        if prompts.ask_confirm(
            f"Detected {label} as {detected}{suffix}, is this correct?",
            default=True,
        ):
            return detected

    return prompts.ask_address(f"{prompt} {label}", default=detected)
