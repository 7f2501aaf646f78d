"""
本地 Registry 与链元数据单元测试。
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from hyperlane_cli.config.chain import ChainMetadata, ProtocolType
from hyperlane_cli.errors import ChainNotFoundError, RegistryError
from hyperlane_cli.registry import LocalRegistry

MAILBOX = "0x5FbDB2315678afecb367f032d93F642f64180aa3"


class TestChainMetadata:
    """链元数据 Schema。"""

    def test_defaults(self) -> None:
        metadata = ChainMetadata.model_validate({
            "name": "anvil1",
            "chainId": 31337,
            "domainId": 31337,
            "rpcUrls": [{"http": "http://127.0.0.1:8545"}],
        })
        assert metadata.protocol is ProtocolType.ETHEREUM
        assert metadata.native_token.symbol == "ETH"
        assert metadata.native_token.decimals == 18
        assert metadata.is_testnet is False
        assert metadata.label == "anvil1"

    def test_extra_fields_kept(self) -> None:
        metadata = ChainMetadata.model_validate({
            "name": "sepolia",
            "chainId": 11155111,
            "domainId": 11155111,
            "rpcUrls": [{"http": "https://rpc"}],
            "blockExplorers": [{"url": "https://explorer"}],
        })
        assert metadata.model_extra == {"blockExplorers": [{"url": "https://explorer"}]}

    @pytest.mark.parametrize("name", ["Sepolia", "1chain", "my-chain"])
    def test_invalid_name(self, name: str) -> None:
        with pytest.raises(ValueError):
            ChainMetadata.model_validate({
                "name": name,
                "chainId": 1,
                "domainId": 1,
                "rpcUrls": [{"http": "https://rpc"}],
            })


class TestLocalRegistry:
    """LocalRegistry 读写。"""

    def test_chain_names_sorted(self, registry: LocalRegistry) -> None:
        assert registry.get_chain_names() == ["anvil1", "ethereum", "sepolia"]

    def test_missing_root_has_no_chains(self, tmp_path: Path) -> None:
        registry = LocalRegistry(tmp_path / "nowhere")
        assert registry.get_chain_names() == []
        assert registry.get_metadata() == {}

    def test_directory_without_metadata_ignored(self, registry: LocalRegistry) -> None:
        (registry.chains_dir / "empty").mkdir()
        assert "empty" not in registry.get_chain_names()

    def test_name_defaults_to_directory(self, registry: LocalRegistry) -> None:
        metadata = registry.get_chain_metadata("anvil1")
        assert metadata.name == "anvil1"
        assert metadata.domain_id == 31337
        assert metadata.label == "Anvil 1"

    def test_unknown_chain(self, registry: LocalRegistry) -> None:
        with pytest.raises(ChainNotFoundError) as exc_info:
            registry.get_chain_metadata("sepolai")
        error = exc_info.value
        assert error.chain == "sepolai"
        assert "anvil1, ethereum, sepolia" in error.how

    def test_invalid_metadata(self, registry: LocalRegistry) -> None:
        path = registry.chains_dir / "broken" / "metadata.yaml"
        path.parent.mkdir()
        path.write_text("chainId: 5\n", encoding="utf-8")
        with pytest.raises(RegistryError, match="broken"):
            registry.get_metadata()

    def test_addresses_missing_returns_empty(self, registry: LocalRegistry) -> None:
        assert registry.get_chain_addresses("sepolia") == {}

    def test_update_addresses_merges(self, registry: LocalRegistry) -> None:
        path = registry.chains_dir / "sepolia" / "addresses.yaml"
        path.write_text(yaml.safe_dump({"interchainGasPaymaster": "0x1", "mailbox": "0x2"}), encoding="utf-8")

        merged = registry.update_chain_addresses("sepolia", {"mailbox": MAILBOX})

        assert merged == {"interchainGasPaymaster": "0x1", "mailbox": MAILBOX}
        assert yaml.safe_load(path.read_text(encoding="utf-8")) == merged

    def test_update_addresses_unknown_chain(self, registry: LocalRegistry) -> None:
        with pytest.raises(ChainNotFoundError):
            registry.update_chain_addresses("unknown", {"mailbox": MAILBOX})
        assert not (registry.chains_dir / "unknown").exists()

    def test_root_expands_user(self) -> None:
        registry = LocalRegistry("~/.hyperlane")
        assert registry.root == Path.home() / ".hyperlane"
