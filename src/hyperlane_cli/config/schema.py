"""
Core Config 的 Schema 定义与校验。

Core Config 描述一条链上 Mailbox 的安全与派发策略：

- owner: 控制账户地址
- defaultIsm: 默认的 Interchain Security Module（消息验证策略）
- defaultHook / requiredHook: 消息派发时执行的 Hook 策略

ISM 与 Hook 都是按 ``type`` 字段区分的变体，可以任意递归组合
（aggregation / routing），也可以直接写成已部署合约的地址。

# [Design Decision] 文件中的键为 camelCase，Python 侧字段为 snake_case，
# 通过 alias_generator 互相映射。
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationError,
    model_validator,
)
from pydantic.alias_generators import to_camel

from hyperlane_cli.errors import ConfigValidationError

ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"

Address = Annotated[str, StringConstraints(pattern=ADDRESS_PATTERN)]
"""EVM 地址：0x + 40 位十六进制。"""

WeiAmount = Annotated[str, StringConstraints(pattern=r"^\d+$")]
"""以字符串表示的 wei 数量（避免 YAML/JSON 中的大整数精度问题）。"""


class IsmType(str, Enum):
    """ISM 类型。"""

    TRUSTED_RELAYER = "trustedRelayerIsm"
    TEST = "testIsm"
    MERKLE_ROOT_MULTISIG = "merkleRootMultisigIsm"
    MESSAGE_ID_MULTISIG = "messageIdMultisigIsm"
    AGGREGATION = "staticAggregationIsm"
    ROUTING = "domainRoutingIsm"
    FALLBACK_ROUTING = "defaultFallbackRoutingIsm"
    PAUSABLE = "pausableIsm"


class HookType(str, Enum):
    """Hook 类型。"""

    MERKLE_TREE = "merkleTreeHook"
    PROTOCOL_FEE = "protocolFee"
    INTERCHAIN_GAS_PAYMASTER = "interchainGasPaymaster"
    AGGREGATION = "aggregationHook"
    ROUTING = "domainRoutingHook"
    FALLBACK_ROUTING = "fallbackRoutingHook"
    PAUSABLE = "pausableHook"


class _ConfigModel(BaseModel):
    """所有配置模型的基类：camelCase 别名，忽略未知字段。"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def _check_threshold(threshold: int, total: int, members: str) -> None:
    if total == 0:
        raise ValueError(f"{members} 不能为空")
    if not 1 <= threshold <= total:
        raise ValueError(
            f"threshold 为 {threshold}，必须在 1 到 {total}（{members} 数量）之间"
        )


# ============================================================
# ISM
# ============================================================


class TrustedRelayerIsmConfig(_ConfigModel):
    """只接受指定 relayer 投递的消息。"""

    type: Literal["trustedRelayerIsm"] = "trustedRelayerIsm"
    relayer: Address


class TestIsmConfig(_ConfigModel):
    """接受任何消息（仅用于测试网络）。"""

    type: Literal["testIsm"] = "testIsm"


class MultisigIsmConfig(_ConfigModel):
    """m-of-n 验证者签名。"""

    type: Literal["merkleRootMultisigIsm", "messageIdMultisigIsm"]
    validators: list[Address]
    threshold: int

    @model_validator(mode="after")
    def _validate_threshold(self) -> MultisigIsmConfig:
        _check_threshold(self.threshold, len(self.validators), "validators")
        if len(set(v.lower() for v in self.validators)) != len(self.validators):
            raise ValueError("validators 中存在重复地址")
        return self


class AggregationIsmConfig(_ConfigModel):
    """m-of-n 子 ISM 验证通过。"""

    type: Literal["staticAggregationIsm"] = "staticAggregationIsm"
    modules: list[IsmConfig]
    threshold: int

    @model_validator(mode="after")
    def _validate_threshold(self) -> AggregationIsmConfig:
        _check_threshold(self.threshold, len(self.modules), "modules")
        return self


class RoutingIsmConfig(_ConfigModel):
    """按来源链路由到不同的 ISM。"""

    type: Literal["domainRoutingIsm", "defaultFallbackRoutingIsm"]
    owner: Address
    domains: dict[str, IsmConfig]


class PausableIsmConfig(_ConfigModel):
    """可由 owner 暂停的 ISM。"""

    type: Literal["pausableIsm"] = "pausableIsm"
    owner: Address
    paused: bool = False


_IsmModule = Annotated[
    Union[
        TrustedRelayerIsmConfig,
        TestIsmConfig,
        MultisigIsmConfig,
        AggregationIsmConfig,
        RoutingIsmConfig,
        PausableIsmConfig,
    ],
    Field(discriminator="type"),
]

IsmConfig = Union[Address, _IsmModule]


# ============================================================
# Hook
# ============================================================


class MerkleTreeHookConfig(_ConfigModel):
    """把消息 ID 插入增量 Merkle 树。"""

    type: Literal["merkleTreeHook"] = "merkleTreeHook"


class ProtocolFeeHookConfig(_ConfigModel):
    """每条消息收取固定协议费用。"""

    type: Literal["protocolFee"] = "protocolFee"
    owner: Address
    beneficiary: Address
    max_protocol_fee: WeiAmount
    protocol_fee: WeiAmount

    @model_validator(mode="after")
    def _validate_fee(self) -> ProtocolFeeHookConfig:
        if int(self.protocol_fee) > int(self.max_protocol_fee):
            raise ValueError(
                f"protocolFee（{self.protocol_fee}）不能超过 maxProtocolFee（{self.max_protocol_fee}）"
            )
        return self


class GasOracleConfig(_ConfigModel):
    """目标链的 gas 价格与兑换率。"""

    gas_price: WeiAmount
    token_exchange_rate: WeiAmount


class IgpHookConfig(_ConfigModel):
    """Interchain Gas Paymaster：为目标链上的处理预付 gas。"""

    type: Literal["interchainGasPaymaster"] = "interchainGasPaymaster"
    owner: Address
    beneficiary: Address
    oracle_key: Address
    overhead: dict[str, Annotated[int, Field(ge=0)]] = Field(default_factory=dict)
    oracle_config: dict[str, GasOracleConfig] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _validate_chains(self) -> IgpHookConfig:
        missing = sorted(set(self.overhead) - set(self.oracle_config))
        if missing:
            raise ValueError(f"以下链配置了 overhead 但缺少 oracleConfig：{', '.join(missing)}")
        return self


class AggregationHookConfig(_ConfigModel):
    """依次执行多个 Hook。"""

    type: Literal["aggregationHook"] = "aggregationHook"
    hooks: list[HookConfig] = Field(min_length=1)


class RoutingHookConfig(_ConfigModel):
    """按目标链路由到不同的 Hook。"""

    type: Literal["domainRoutingHook"] = "domainRoutingHook"
    owner: Address
    domains: dict[str, HookConfig]


class FallbackRoutingHookConfig(_ConfigModel):
    """按目标链路由，未配置的链使用 fallback。"""

    type: Literal["fallbackRoutingHook"] = "fallbackRoutingHook"
    owner: Address
    domains: dict[str, HookConfig]
    fallback: HookConfig


class PausableHookConfig(_ConfigModel):
    """可由 owner 暂停的 Hook。"""

    type: Literal["pausableHook"] = "pausableHook"
    owner: Address
    paused: bool = False


_HookModule = Annotated[
    Union[
        MerkleTreeHookConfig,
        ProtocolFeeHookConfig,
        IgpHookConfig,
        AggregationHookConfig,
        RoutingHookConfig,
        FallbackRoutingHookConfig,
        PausableHookConfig,
    ],
    Field(discriminator="type"),
]

HookConfig = Union[Address, _HookModule]


# ============================================================
# Core Config
# ============================================================


class CoreConfig(_ConfigModel):
    """
    Core Config 根模型。

    示例::

        CoreConfig.model_validate({
            "owner": "0xa0Ee7A142d267C1f36714E4a8F75612F20a79720",
            "defaultIsm": {"type": "trustedRelayerIsm", "relayer": "0xa0Ee...9720"},
            "defaultHook": {"type": "merkleTreeHook"},
            "requiredHook": {"type": "merkleTreeHook"},
        })
    """

    owner: Address
    default_ism: IsmConfig
    default_hook: HookConfig
    required_hook: HookConfig

    def to_file_dict(self) -> dict[str, Any]:
        """转换为写入文件用的 camelCase 字典。"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


for _model in (
    AggregationIsmConfig,
    RoutingIsmConfig,
    AggregationHookConfig,
    RoutingHookConfig,
    FallbackRoutingHookConfig,
    CoreConfig,
):
    _model.model_rebuild()


# pydantic 在 loc 中为联合成员插入的标签，例如 "constrained-str"、"tagged-union[...]"
_UNION_MEMBER_LOC = re.compile(r"^(constrained-str|[a-z-]+\[.*\])$")

# 输入类型与联合成员不匹配产生的错误（例如给地址分支传入 mapping）
_BRANCH_MISMATCH_TYPES = frozenset({"string_type", "model_attributes_type", "model_type", "dict_type"})


def _is_union_member(loc: object) -> bool:
    return isinstance(loc, str) and bool(_UNION_MEMBER_LOC.match(loc))


def _readable_errors(errors: list[dict[str, Any]]) -> list[tuple[str, str]]:
    """
    把 pydantic 错误转换为 (字段路径, 信息) 列表。

    去掉 loc 中的联合成员标签；输入类型与某个联合成员不匹配的错误
    在还有其他错误时省略，只保留真正相关的分支。
    """
    relevant = [
        err for err in errors
        if not (
            err["type"] in _BRANCH_MISMATCH_TYPES
            and any(_is_union_member(loc) for loc in err["loc"])
        )
    ] or errors

    readable = []
    for err in relevant:
        field_path = " → ".join(str(loc) for loc in err["loc"] if not _is_union_member(loc))
        readable.append((field_path, err["msg"]))
    return readable


def validate_core_config(data: Any, source: str = "<core-config>") -> CoreConfig:
    """
    校验 Core Config。

    参数:
        data: 从文件读取或交互构建的原始字典
        source: 配置来源（用于错误信息）

    返回:
        CoreConfig 实例

    异常:
        ConfigValidationError: 校验失败，错误信息精确到字段
    """
    try:
        return CoreConfig.model_validate(data)
    except ValidationError as e:
        errors = _readable_errors(e.errors())
        error_details = [f"  字段 '{field_path}': {msg}" for field_path, msg in errors]

        raise ConfigValidationError(
            what=f"Core Config '{source}' 校验失败（{len(errors)} 个错误）。",
            why="\n".join(error_details),
            how="请对照错误字段修正配置，"
                "或使用 'hyperlane core configure' 重新生成配置文件。",
            config_path=source,
            field_path=errors[0][0] if errors else "",
        ) from e
