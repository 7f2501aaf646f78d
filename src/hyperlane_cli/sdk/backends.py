"""
SDK 后端注册表 — 根据链协议选择后端。

查找优先级：
1. 通过 ``register_backend()`` 显式注册的后端
2. 已安装插件通过 entry point（group ``hyperlane_cli.backends``）声明的后端

插件在自己的 pyproject.toml 中声明::

    [project.entry-points."hyperlane_cli.backends"]
    ethereum = "my_evm_plugin:EvmBackend"

entry point 指向一个无参工厂（通常是类），加载后调用一次得到后端实例。
"""

from __future__ import annotations

import logging
from importlib.metadata import entry_points

from hyperlane_cli.config.chain import ProtocolType
from hyperlane_cli.errors import BackendNotFoundError
from hyperlane_cli.sdk.protocols import ChainBackend

logger = logging.getLogger(__name__)

BACKEND_ENTRY_POINT_GROUP = "hyperlane_cli.backends"

# 用户注册的后端
_custom_backends: dict[str, ChainBackend] = {}

# 从 entry point 加载的后端实例缓存
_loaded_backends: dict[str, ChainBackend] = {}


def _protocol_name(protocol: ProtocolType | str) -> str:
    return protocol.value if isinstance(protocol, ProtocolType) else str(protocol)


def register_backend(protocol: ProtocolType | str, backend: ChainBackend) -> None:
    """
    注册链 SDK 后端。注册后优先于 entry point 发现的后端。

    参数:
        protocol: 链协议，例如 "ethereum"
        backend: 实现 ChainBackend 协议的对象
    """
    if not isinstance(backend, ChainBackend):
        raise TypeError(
            f"backend 必须实现 ChainBackend 协议，"
            f"但 {type(backend).__name__} 缺少必要的方法。"
            f"需要实现：create_signer, create_deployer, create_core_reader, "
            f"get_balance, get_gas_price"
        )
    name = _protocol_name(protocol)
    _custom_backends[name] = backend
    logger.info("已为协议 '%s' 注册后端：%s", name, type(backend).__name__)


def get_backend(protocol: ProtocolType | str) -> ChainBackend:
    """
    获取指定链协议的 SDK 后端。

    异常:
        BackendNotFoundError: 没有可用的后端
    """
    name = _protocol_name(protocol)

    if name in _custom_backends:
        return _custom_backends[name]

    if name in _loaded_backends:
        return _loaded_backends[name]

    for ep in entry_points(group=BACKEND_ENTRY_POINT_GROUP):
        if ep.name != name:
            continue
        logger.debug("从 entry point 加载后端：%s = %s", ep.name, ep.value)
        backend = ep.load()()
        if not isinstance(backend, ChainBackend):
            raise BackendNotFoundError(
                what=f"协议 '{name}' 的后端插件无效。",
                why=f"entry point '{ep.value}' 返回的对象没有实现 ChainBackend 协议。",
                how="请升级或重新安装该插件。",
                protocol=name,
            )
        _loaded_backends[name] = backend
        return backend

    raise BackendNotFoundError(
        what=f"没有可用于协议 '{name}' 的 SDK 后端。",
        why=f"未注册该协议的后端，也没有已安装插件在 entry point 组 "
            f"'{BACKEND_ENTRY_POINT_GROUP}' 中声明 '{name}'。",
        how="请安装提供该协议支持的 SDK 插件，"
            "或在代码中调用 register_backend() 注册后端。",
        protocol=name,
    )


def clear_backends() -> None:
    """清除已注册和已加载的后端。通常仅在测试中使用。"""
    _custom_backends.clear()
    _loaded_backends.clear()
