"""
结构化异常体系 — 错误信息即文档。

每条异常遵循"三段式"规范：
1. What went wrong（发生了什么）
2. Why it happened（为什么发生）
3. How to fix it（怎么修）

示例::

    InsufficientBalanceError(
        what="签名者在 sepolia 上的余额不足以完成核心合约部署。",
        why="当前余额 0.001 ETH，预估最少需要 0.05 ETH。",
        how="请向 0xa0Ee...9720 转入足够的原生代币后重试。",
    )
"""

from __future__ import annotations

from typing import Any


class HyperlaneCliError(Exception):
    """
    hyperlane-cli 异常基类。

    属性:
        what: 发生了什么
        why: 为什么发生
        how: 怎么修复
        details: 额外的上下文信息（用于调试）
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        details: dict[str, Any] | None = None,
    ) -> None:
        self.what = what
        self.why = why
        self.how = how
        self.details = details or {}

        parts = [what]
        if why:
            parts.append(f"→ 原因：{why}")
        if how:
            parts.append(f"→ 修复建议：{how}")

        self.full_message = "\n".join(parts)
        super().__init__(self.full_message)

    def __str__(self) -> str:
        return self.full_message

    def to_dict(self) -> dict[str, Any]:
        """转换为字典格式，用于 JSON 输出。"""
        result: dict[str, Any] = {
            "error_type": type(self).__name__,
            "what": self.what,
        }
        if self.why:
            result["why"] = self.why
        if self.how:
            result["how"] = self.how
        if self.details:
            result["details"] = self.details
        return result


# === 配置 / 文件相关异常 ===


class ConfigValidationError(HyperlaneCliError):
    """
    配置校验异常。

    当 Core Config 或链元数据不满足 Schema 时抛出。

    示例::

        raise ConfigValidationError(
            what="Core Config 'configs/core-config.yaml' 校验失败（1 个错误）。",
            why="  字段 'defaultIsm → threshold': threshold 超过了 validators 数量",
            how="请修正配置后重试，或使用 'hyperlane core configure' 重新生成。",
            config_path="configs/core-config.yaml",
        )
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        config_path: str = "",
        field_path: str = "",
        **kwargs: Any,
    ) -> None:
        details = {
            "config_path": config_path,
            "field_path": field_path,
        }
        details.update(kwargs)
        super().__init__(what=what, why=why, how=how, details=details)
        self.config_path = config_path
        self.field_path = field_path


class FileFormatError(HyperlaneCliError):
    """
    文件读写异常。

    当 JSON/YAML 文件不存在、格式错误或根元素不是 mapping 时抛出。
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        file_path: str = "",
        **kwargs: Any,
    ) -> None:
        details = {"file_path": file_path}
        details.update(kwargs)
        super().__init__(what=what, why=why, how=how, details=details)
        self.file_path = file_path


# === Registry 相关异常 ===


class RegistryError(HyperlaneCliError):
    """Registry 读写失败。"""

    pass


class ChainNotFoundError(RegistryError):
    """
    链未找到异常。

    示例::

        raise ChainNotFoundError(
            what="未找到链 'sepolai'。",
            why="Registry 中没有该链的元数据。",
            how="可用链：anvil1, sepolia",
            chain="sepolai",
        )
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        chain: str = "",
        **kwargs: Any,
    ) -> None:
        details = {"chain": chain}
        details.update(kwargs)
        super().__init__(what=what, why=why, how=how, details=details)
        self.chain = chain


# === SDK / 上下文相关异常 ===


class BackendNotFoundError(HyperlaneCliError):
    """
    链后端缺失异常。

    当某个链协议（ethereum / sealevel / cosmos）没有已安装的 SDK 后端时抛出。
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        protocol: str = "",
        **kwargs: Any,
    ) -> None:
        details = {"protocol": protocol}
        details.update(kwargs)
        super().__init__(what=what, why=why, how=how, details=details)
        self.protocol = protocol


class ContextError(HyperlaneCliError):
    """命令上下文无法构建（例如写命令缺少签名者）。"""

    pass


# === 部署相关异常 ===


class DeploymentError(HyperlaneCliError):
    """部署流程失败。"""

    pass


class DeploymentCancelledError(DeploymentError):
    """用户在部署计划确认步骤中取消。"""

    pass


class InsufficientBalanceError(DeploymentError):
    """
    余额不足异常。

    预检阶段发现签名者余额低于部署所需的最低余额时抛出。
    """

    def __init__(
        self,
        what: str,
        why: str = "",
        how: str = "",
        chain: str = "",
        balance: int = 0,
        required: int = 0,
        **kwargs: Any,
    ) -> None:
        details: dict[str, Any] = {
            "chain": chain,
            "balance": balance,
            "required": required,
        }
        details.update(kwargs)
        super().__init__(what=what, why=why, how=how, details=details)
        self.chain = chain
        self.balance = balance
        self.required = required
