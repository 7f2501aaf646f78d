"""
本地文件系统 Registry。

目录结构::

    <root>/chains/<chain>/metadata.yaml    # 链元数据
    <root>/chains/<chain>/addresses.yaml   # 已部署合约：合约名 → 地址

部署完成后，新合约地址合并写回 ``addresses.yaml``。
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from hyperlane_cli.config.chain import ChainMetadata
from hyperlane_cli.errors import ChainNotFoundError, FileFormatError, RegistryError
from hyperlane_cli.utils.files import read_yaml_or_json, write_yaml_or_json

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_PATH = Path.home() / ".hyperlane"

_METADATA_FILE = "metadata.yaml"
_ADDRESSES_FILE = "addresses.yaml"


class LocalRegistry:
    """
    基于本地目录的链元数据与合约地址存储。

    用法::

        registry = LocalRegistry("~/.hyperlane")
        registry.get_chain_names()            # ["anvil1", "sepolia"]
        registry.get_chain_metadata("sepolia")
        registry.update_chain_addresses("sepolia", {"mailbox": "0x..."})
    """

    def __init__(self, root: str | Path = DEFAULT_REGISTRY_PATH) -> None:
        self.root = Path(root).expanduser()
        self._metadata_cache: dict[str, ChainMetadata] | None = None

    @property
    def chains_dir(self) -> Path:
        return self.root / "chains"

    def get_chain_names(self) -> list[str]:
        """返回所有存在元数据文件的链名（已排序）。"""
        if not self.chains_dir.is_dir():
            logger.debug("Registry 目录不存在：%s", self.chains_dir)
            return []
        return sorted(
            p.name for p in self.chains_dir.iterdir()
            if (p / _METADATA_FILE).is_file()
        )

    def get_metadata(self) -> dict[str, ChainMetadata]:
        """加载全部链元数据（结果缓存）。"""
        if self._metadata_cache is None:
            self._metadata_cache = {
                name: self._load_chain_metadata(name) for name in self.get_chain_names()
            }
            logger.debug("已加载 %d 条链的元数据", len(self._metadata_cache))
        return dict(self._metadata_cache)

    def get_chain_metadata(self, chain: str) -> ChainMetadata:
        metadata = self.get_metadata()
        if chain not in metadata:
            raise ChainNotFoundError(
                what=f"未找到链 '{chain}'。",
                why=f"Registry '{self.root}' 中没有该链的元数据。",
                how=f"可用链：{', '.join(metadata) or '（无）'}",
                chain=chain,
            )
        return metadata[chain]

    def get_chain_addresses(self, chain: str) -> dict[str, str]:
        """读取链上已部署的合约地址，文件不存在时返回空字典。"""
        path = self.chains_dir / chain / _ADDRESSES_FILE
        if not path.exists():
            return {}
        data = read_yaml_or_json(path)
        return {str(k): str(v) for k, v in data.items()}

    def update_chain_addresses(self, chain: str, addresses: dict[str, str]) -> dict[str, str]:
        """
        把新部署的合约地址合并写回 Registry。

        返回:
            合并后的完整地址表
        """
        self.get_chain_metadata(chain)
        merged = self.get_chain_addresses(chain)
        merged.update(addresses)
        write_yaml_or_json(self.chains_dir / chain / _ADDRESSES_FILE, merged)
        logger.info("已更新 %s 的合约地址（%d 个）", chain, len(addresses))
        return merged

    def _load_chain_metadata(self, chain: str) -> ChainMetadata:
        path = self.chains_dir / chain / _METADATA_FILE
        try:
            data = read_yaml_or_json(path)
        except FileFormatError as e:
            raise RegistryError(
                what=f"链 '{chain}' 的元数据无法读取。",
                why=e.what,
                how=f"请检查 {path}。",
                details={"chain": chain, "path": str(path)},
            ) from e

        data.setdefault("name", chain)
        try:
            return ChainMetadata.model_validate(data)
        except ValidationError as e:
            error_details = [
                f"  字段 '{' → '.join(str(loc) for loc in err['loc'])}': {err['msg']}"
                for err in e.errors()
            ]
            raise RegistryError(
                what=f"链 '{chain}' 的元数据校验失败（{len(e.errors())} 个错误）。",
                why="\n".join(error_details),
                how=f"请修正 {path}。",
                details={"chain": chain, "path": str(path)},
            ) from e
