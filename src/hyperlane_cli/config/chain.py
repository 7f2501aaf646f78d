"""
链元数据 Schema。

每条链在 Registry 中对应一份 ``metadata.yaml``，描述链的标识、协议类型与 RPC 端点。
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProtocolType(str, Enum):
    """链协议类型，决定使用哪个 SDK 后端。"""

    ETHEREUM = "ethereum"
    SEALEVEL = "sealevel"
    COSMOS = "cosmos"


class RpcUrl(BaseModel):
    """RPC 端点。"""

    http: str = Field(min_length=1)


class NativeToken(BaseModel):
    """链的原生代币。"""

    name: str = "Ether"
    symbol: str = "ETH"
    decimals: int = Field(default=18, ge=0)


class ChainMetadata(BaseModel):
    """
    链元数据。

    允许额外字段（blockExplorers、blocks 等），读取后原样保留在 ``model_extra`` 中。
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    name: str = Field(pattern=r"^[a-z][a-z0-9]*$")
    chain_id: int | str
    domain_id: int = Field(ge=0)
    protocol: ProtocolType = ProtocolType.ETHEREUM
    rpc_urls: list[RpcUrl] = Field(min_length=1)
    native_token: NativeToken = Field(default_factory=NativeToken)
    display_name: str | None = None
    is_testnet: bool = False

    @property
    def label(self) -> str:
        """用于交互界面的显示名。"""
        return self.display_name or self.name
