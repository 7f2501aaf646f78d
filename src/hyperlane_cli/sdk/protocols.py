"""
链 SDK 协作方协议定义。

合约部署、链上配置推导、签名与余额查询都由按链协议（ethereum / sealevel / cosmos）
提供的 SDK 后端完成。CLI 只依赖这里定义的协议，不依赖任何具体实现。

# [Design Decision] 协议为结构化子类型：实现了对应方法的对象即可作为后端，
# 不需要继承本包中的任何类。
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from hyperlane_cli.config.chain import ChainMetadata
    from hyperlane_cli.config.schema import CoreConfig
    from hyperlane_cli.context import CommandContext


@runtime_checkable
class Signer(Protocol):
    """交易签名者。"""

    async def get_address(self) -> str:
        """返回签名者地址。"""
        ...


@runtime_checkable
class CoreDeployer(Protocol):
    """核心合约部署器。"""

    async def deploy(self, chain: str, config: CoreConfig) -> dict[str, str]:
        """
        按 Core Config 在指定链上部署 Mailbox 及其 ISM / Hook。

        参数:
            chain: 链名
            config: 已校验的 Core Config

        返回:
            合约名 → 地址，例如 {"mailbox": "0x...", "proxyAdmin": "0x..."}
        """
        ...


@runtime_checkable
class CoreReader(Protocol):
    """链上核心配置读取器。"""

    async def derive_core_config(self, mailbox: str) -> dict[str, Any]:
        """
        从指定 Mailbox 地址推导当前的 Core Config。

        返回:
            camelCase 键的 Core Config 字典（owner / defaultIsm / defaultHook / requiredHook）
        """
        ...


@runtime_checkable
class ChainBackend(Protocol):
    """
    链 SDK 后端协议。

    最小实现示例::

        class MyEvmBackend:
            def create_signer(self, key: str) -> Signer: ...
            def create_deployer(self, context, chain: str) -> CoreDeployer: ...
            def create_core_reader(self, context, chain: str) -> CoreReader: ...
            async def get_balance(self, metadata, address: str) -> int: ...
            async def get_gas_price(self, metadata) -> int: ...

        register_backend("ethereum", MyEvmBackend())
    """

    def create_signer(self, key: str) -> Signer:
        """根据私钥创建签名者。"""
        ...

    def create_deployer(self, context: CommandContext, chain: str) -> CoreDeployer:
        """创建核心合约部署器（dry-run 信息由 context 提供）。"""
        ...

    def create_core_reader(self, context: CommandContext, chain: str) -> CoreReader:
        """创建链上核心配置读取器。"""
        ...

    async def get_balance(self, metadata: ChainMetadata, address: str) -> int:
        """查询地址的原生代币余额（最小单位）。"""
        ...

    async def get_gas_price(self, metadata: ChainMetadata) -> int:
        """查询当前 gas 价格（最小单位）。"""
        ...
