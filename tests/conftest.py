"""
测试套件共享 Fixtures 和配置。

本文件定义了所有测试中可复用的 fixtures、假的链 SDK 后端和脚本化的交互输入。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pytest
import yaml

from hyperlane_cli.registry import LocalRegistry
from hyperlane_cli.sdk import clear_backends, register_backend
from hyperlane_cli.utils import prompts

SIGNER_ADDRESS = "0xa0Ee7A142d267C1f36714E4a8F75612F20a79720"
OTHER_ADDRESS = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
MAILBOX_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"

DEPLOYED_ADDRESSES = {
    "mailbox": MAILBOX_ADDRESS,
    "proxyAdmin": "0xe7f1725E7734CE288F8367e1Bb143E90bb3F0512",
    "validatorAnnounce": "0x9fE46736679d2D9a65F0992F2272dE9f3c7fa6e0",
}

CHAINS: dict[str, dict[str, Any]] = {
    "anvil1": {
        "chainId": 31337,
        "domainId": 31337,
        "protocol": "ethereum",
        "rpcUrls": [{"http": "http://127.0.0.1:8545"}],
        "isTestnet": True,
        "displayName": "Anvil 1",
    },
    "sepolia": {
        "chainId": 11155111,
        "domainId": 11155111,
        "protocol": "ethereum",
        "rpcUrls": [{"http": "https://rpc.sepolia.example"}],
        "isTestnet": True,
    },
    "ethereum": {
        "chainId": 1,
        "domainId": 1,
        "protocol": "ethereum",
        "rpcUrls": [{"http": "https://rpc.ethereum.example"}],
    },
}


# === 假的链 SDK 后端 ===


class FakeSigner:
    """返回固定地址的签名者。"""

    def __init__(self, address: str = SIGNER_ADDRESS) -> None:
        self.address = address

    async def get_address(self) -> str:
        return self.address


class FakeDeployer:
    """记录部署调用；按后端设置返回地址或抛出错误。"""

    def __init__(self, backend: FakeBackend, context: Any) -> None:
        self.backend = backend
        self.context = context

    async def deploy(self, chain: str, config: Any) -> dict[str, str]:
        self.backend.deploy_calls.append((chain, config, self.context.is_dry_run))
        if self.backend.deploy_error is not None:
            raise self.backend.deploy_error
        self.backend.balance -= self.backend.deploy_cost
        return dict(self.backend.deployed_addresses)


class FakeReader:
    """返回后端预设的链上配置。"""

    def __init__(self, backend: FakeBackend) -> None:
        self.backend = backend

    async def derive_core_config(self, mailbox: str) -> dict[str, Any]:
        self.backend.read_calls.append(mailbox)
        return self.backend.derived_config


class FakeBackend:
    """
    实现 ChainBackend 协议的假后端。

    属性可在测试中直接修改：余额、gas 价格、部署错误、部署返回的地址、
    链上推导出的配置。
    """

    def __init__(self) -> None:
        self.balance = 10**18
        self.gas_price = 1
        self.deploy_cost = 10**15
        self.deploy_error: BaseException | None = None
        self.deployed_addresses: dict[str, str] = dict(DEPLOYED_ADDRESSES)
        self.derived_config: dict[str, Any] = {
            "owner": SIGNER_ADDRESS,
            "defaultIsm": {"type": "trustedRelayerIsm", "relayer": SIGNER_ADDRESS},
            "defaultHook": {"type": "merkleTreeHook", "address": OTHER_ADDRESS},
            "requiredHook": {"type": "merkleTreeHook"},
        }
        self.created_signers: list[str] = []
        self.deploy_calls: list[tuple[str, Any, bool]] = []
        self.read_calls: list[str] = []

    def create_signer(self, key: str) -> FakeSigner:
        self.created_signers.append(key)
        return FakeSigner()

    def create_deployer(self, context: Any, chain: str) -> FakeDeployer:
        return FakeDeployer(self, context)

    def create_core_reader(self, context: Any, chain: str) -> FakeReader:
        return FakeReader(self)

    async def get_balance(self, metadata: Any, address: str) -> int:
        return self.balance

    async def get_gas_price(self, metadata: Any) -> int:
        return self.gas_price


# === 脚本化交互输入 ===


class ScriptedPrompts:
    """
    按顺序回放预设答案的交互输入。

    用法::

        scripted_prompts.push(True, "merkleTreeHook")
        ...
        assert scripted_prompts.names() == ["ask_confirm", "ask_select"]
    """

    PROMPT_FUNCTIONS = (
        "ask_text",
        "ask_address",
        "ask_addresses",
        "ask_confirm",
        "ask_int",
        "ask_select",
        "ask_multi_select",
    )

    def __init__(self) -> None:
        self.answers: list[Any] = []
        self.calls: list[tuple[str, str, dict[str, Any]]] = []

    def push(self, *answers: Any) -> None:
        self.answers.extend(answers)

    def names(self) -> list[str]:
        return [name for name, _, _ in self.calls]

    def messages(self) -> list[str]:
        return [message for _, message, _ in self.calls]

    def make(self, name: str):
        def answer(message: str, *args: Any, **kwargs: Any) -> Any:
            self.calls.append((name, message, kwargs))
            if not self.answers:
                raise AssertionError(f"没有为 {name}({message!r}) 预设答案")
            return self.answers.pop(0)

        return answer


# === Fixtures ===


@pytest.fixture(autouse=True)
def reset_backends():
    """每个测试前后清空后端注册表。"""
    clear_backends()
    yield
    clear_backends()


@pytest.fixture(autouse=True)
def reset_package_logger():
    """还原 configure_logging 对 hyperlane_cli logger 的修改。"""
    yield
    package_logger = logging.getLogger("hyperlane_cli")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


def write_chain(root: Path, name: str, metadata: dict[str, Any]) -> Path:
    chain_dir = root / "chains" / name
    chain_dir.mkdir(parents=True, exist_ok=True)
    path = chain_dir / "metadata.yaml"
    path.write_text(yaml.safe_dump(metadata, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def registry_dir(tmp_path: Path) -> Path:
    """包含 anvil1 / sepolia / ethereum 三条链的 Registry 目录。"""
    root = tmp_path / "registry"
    for name, metadata in CHAINS.items():
        write_chain(root, name, metadata)
    return root


@pytest.fixture
def registry(registry_dir: Path) -> LocalRegistry:
    return LocalRegistry(registry_dir)


@pytest.fixture
def fake_backend() -> FakeBackend:
    """注册为 ethereum 协议后端的假后端。"""
    backend = FakeBackend()
    register_backend("ethereum", backend)
    return backend


@pytest.fixture
def sealevel_backend(registry_dir: Path) -> FakeBackend:
    """在 Registry 中加入 sealevel 链 solanadev，并注册对应的假后端。"""
    write_chain(registry_dir, "solanadev", {
        "chainId": "solanadev",
        "domainId": 1399811151,
        "protocol": "sealevel",
        "rpcUrls": [{"http": "https://api.devnet.solana.example"}],
        "isTestnet": True,
    })
    backend = FakeBackend()
    register_backend("sealevel", backend)
    return backend


@pytest.fixture
def scripted_prompts(monkeypatch: pytest.MonkeyPatch) -> ScriptedPrompts:
    """替换 prompts 模块中的全部交互函数。"""
    scripted = ScriptedPrompts()
    for name in ScriptedPrompts.PROMPT_FUNCTIONS:
        monkeypatch.setattr(prompts, name, scripted.make(name))
    return scripted


@pytest.fixture
def core_config_data() -> dict[str, Any]:
    """合法的 Core Config 原始字典。"""
    return {
        "owner": SIGNER_ADDRESS,
        "defaultIsm": {"type": "trustedRelayerIsm", "relayer": SIGNER_ADDRESS},
        "defaultHook": {"type": "merkleTreeHook"},
        "requiredHook": {
            "type": "protocolFee",
            "owner": SIGNER_ADDRESS,
            "beneficiary": SIGNER_ADDRESS,
            "maxProtocolFee": "100000000000000000",
            "protocolFee": "0",
        },
    }


@pytest.fixture
def core_config_file(tmp_path: Path, core_config_data: dict[str, Any]) -> Path:
    path = tmp_path / "configs" / "core-config.yaml"
    path.parent.mkdir(parents=True)
    path.write_text(yaml.safe_dump(core_config_data, sort_keys=False), encoding="utf-8")
    return path
