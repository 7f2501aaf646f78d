"""
命令上下文 — 每次命令调用时构建一次，传给配置构建器与部署流程。

- ``get_context``：只读命令（configure / read）。提供 key 时尝试创建签名者，失败不阻塞。
- ``get_write_context``：写命令（deploy）。签名者必须存在；dry-run 下可用
  ``--from-address`` 冒充签名者，无需私钥。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from hyperlane_cli.config.chain import ChainMetadata, ProtocolType
from hyperlane_cli.errors import BackendNotFoundError, ContextError
from hyperlane_cli.registry import DEFAULT_REGISTRY_PATH, LocalRegistry
from hyperlane_cli.sdk import ChainBackend, ImpersonatedSigner, Signer, get_backend

logger = logging.getLogger(__name__)


@dataclass
class CommandContext:
    """
    命令上下文。

    属性:
        registry: 链元数据与合约地址存储
        chain_metadata: 链名 → 元数据
        skip_confirmation: 是否跳过确认步骤（--yes）
        key: 签名私钥（可选）
        signer: 签名者（可选）
        signer_protocol: 由私钥创建签名者时使用的协议；冒充的签名者为 None
        is_dry_run: 是否为 dry-run
        dry_run_chain: dry-run 模拟的链
    """

    registry: LocalRegistry
    chain_metadata: dict[str, ChainMetadata] = field(default_factory=dict)
    skip_confirmation: bool = False
    key: str | None = None
    signer: Signer | None = None
    signer_protocol: ProtocolType | None = None
    is_dry_run: bool = False
    dry_run_chain: str | None = None

    def get_backend(self, chain: str) -> ChainBackend:
        """按链的协议类型返回 SDK 后端。"""
        metadata = self.registry.get_chain_metadata(chain)
        return get_backend(metadata.protocol)

    def use_signer_for_chain(self, chain: str) -> Signer | None:
        """
        确保私钥签名者与目标链的协议一致。

        协议不同时用目标链的后端重新创建签名者；冒充的签名者保持不变。
        """
        protocol = self.registry.get_chain_metadata(chain).protocol
        if self.key and self.signer_protocol is not None and self.signer_protocol != protocol:
            logger.debug("按 %s 协议重新创建签名者（链 %s）", protocol.value, chain)
            self.signer = _create_signer(self.key, protocol)
            self.signer_protocol = protocol
        return self.signer

    async def get_signer_address(self) -> str | None:
        if self.signer is None:
            return None
        return await self.signer.get_address()

    def require_signer(self) -> Signer:
        if self.signer is None:
            raise ContextError(
                what="该命令需要签名者。",
                why="既没有提供私钥（--key / HYP_KEY），也没有在 dry-run 下指定 --from-address。",
                how="请通过 --key 或环境变量 HYP_KEY 提供私钥。",
            )
        return self.signer


def _load_registry(registry_path: str | Path | None) -> LocalRegistry:
    registry = LocalRegistry(registry_path or DEFAULT_REGISTRY_PATH)
    logger.debug("使用 Registry：%s", registry.root)
    return registry


def _create_signer(key: str, protocol: ProtocolType = ProtocolType.ETHEREUM) -> Signer:
    return get_backend(protocol).create_signer(key)


def get_context(
    registry_path: str | Path | None = None,
    key: str | None = None,
    skip_confirmation: bool = False,
) -> CommandContext:
    """
    构建只读命令上下文。

    提供 key 但没有可用后端时只记录警告，签名者为 None。
    """
    registry = _load_registry(registry_path)

    signer: Signer | None = None
    signer_protocol: ProtocolType | None = None
    if key:
        try:
            signer = _create_signer(key)
            signer_protocol = ProtocolType.ETHEREUM
        except BackendNotFoundError as e:
            logger.warning("无法根据私钥创建签名者：%s", e.what)

    return CommandContext(
        registry=registry,
        chain_metadata=registry.get_metadata(),
        skip_confirmation=skip_confirmation,
        key=key,
        signer=signer,
        signer_protocol=signer_protocol,
    )


def get_write_context(
    registry_path: str | Path | None = None,
    key: str | None = None,
    skip_confirmation: bool = False,
    dry_run: str | None = None,
    from_address: str | None = None,
    chain: str | None = None,
) -> CommandContext:
    """
    构建写命令上下文。

    私钥签名者按目标链（dry-run 链优先，其次 ``chain``）的协议创建；
    目标链未知时使用 ethereum 后端，部署前由 ``use_signer_for_chain`` 校正。

    参数:
        registry_path: Registry 目录
        key: 签名私钥
        skip_confirmation: 是否跳过确认
        dry_run: dry-run 模拟的链名；None 表示真实部署
        from_address: dry-run 下冒充的签名者地址
        chain: 已知的目标链（可选）

    异常:
        ContextError: 没有可用的签名者，或非 dry-run 下使用了 --from-address
        ChainNotFoundError: dry-run 链或目标链不在 Registry 中
    """
    registry = _load_registry(registry_path)
    is_dry_run = bool(dry_run)

    if from_address and not is_dry_run:
        raise ContextError(
            what="--from-address 只能在 dry-run 下使用。",
            why="真实部署必须由持有私钥的签名者发送交易。",
            how="去掉 --from-address，或同时指定 --dry-run <chain>。",
        )

    target = dry_run or chain
    protocol = registry.get_chain_metadata(target).protocol if target else ProtocolType.ETHEREUM

    signer: Signer | None = None
    signer_protocol: ProtocolType | None = None
    if is_dry_run and from_address:
        signer = ImpersonatedSigner(from_address)
    elif key:
        signer = _create_signer(key, protocol)
        signer_protocol = protocol

    context = CommandContext(
        registry=registry,
        chain_metadata=registry.get_metadata(),
        skip_confirmation=skip_confirmation,
        key=key,
        signer=signer,
        signer_protocol=signer_protocol,
        is_dry_run=is_dry_run,
        dry_run_chain=dry_run,
    )
    context.require_signer()
    return context
