"""
交互输入与链选择单元测试。

rich.prompt 通过内置 input() 读取输入，这里用 monkeypatch 逐行回放。
"""

from __future__ import annotations

import builtins
from collections.abc import Iterable

import pytest

from hyperlane_cli.errors import RegistryError
from hyperlane_cli.utils import prompts
from hyperlane_cli.utils.chains import (
    detect_and_confirm_or_prompt,
    run_multi_chain_selection_step,
    run_single_chain_selection_step,
)

ADDRESS = "0xa0Ee7A142d267C1f36714E4a8F75612F20a79720"
OTHER = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"


@pytest.fixture
def feed_input(monkeypatch: pytest.MonkeyPatch):
    """把给定的行依次作为 input() 的返回值。"""

    def feed(lines: Iterable[str]) -> list[str]:
        remaining = list(lines)

        def fake_input(*args: object) -> str:
            if not remaining:
                raise AssertionError("输入已用完")
            return remaining.pop(0)

        monkeypatch.setattr(builtins, "input", fake_input)
        return remaining

    return feed


# ============================================================
# prompts
# ============================================================


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (ADDRESS, True),
        (f"  {ADDRESS}  ", True),
        (ADDRESS.lower(), True),
        ("0x123", False),
        (ADDRESS[2:], False),
        ("0x" + "g" * 40, False),
    ],
)
def test_is_address(value: str, expected: bool) -> None:
    assert prompts.is_address(value) is expected


class TestPrompts:
    """rich.prompt 封装。"""

    def test_ask_text_strips(self, feed_input) -> None:
        feed_input(["  hello  "])
        assert prompts.ask_text("Say") == "hello"

    def test_ask_text_default(self, feed_input) -> None:
        feed_input([""])
        assert prompts.ask_text("Say", default="fallback") == "fallback"

    def test_ask_address_retries(self, feed_input, capsys) -> None:
        remaining = feed_input(["nope", ADDRESS])
        assert prompts.ask_address("Address") == ADDRESS
        assert remaining == []
        assert "nope" in capsys.readouterr().out

    def test_ask_addresses(self, feed_input) -> None:
        feed_input([f"{ADDRESS}, 0x123", "", f"{ADDRESS}, {OTHER}"])
        assert prompts.ask_addresses("Validators") == [ADDRESS, OTHER]

    def test_ask_addresses_rejects_duplicates(self, feed_input, capsys) -> None:
        """重复地址（不区分大小写）会被拒绝，避免生成无法通过校验的 multisig 配置。"""
        remaining = feed_input([f"{ADDRESS},{ADDRESS}", f"{ADDRESS}, {ADDRESS.lower()}", f"{ADDRESS}, {OTHER}"])

        assert prompts.ask_addresses("Validators") == [ADDRESS, OTHER]
        assert remaining == []
        assert "重复" in capsys.readouterr().out

    @pytest.mark.parametrize(("line", "expected"), [("y", True), ("n", False), ("", True)])
    def test_ask_confirm(self, feed_input, line: str, expected: bool) -> None:
        feed_input([line])
        assert prompts.ask_confirm("Sure?", default=True) is expected

    def test_ask_int_range(self, feed_input) -> None:
        remaining = feed_input(["abc", "0", "9", "2"])
        assert prompts.ask_int("Threshold", minimum=1, maximum=3) == 2
        assert remaining == []

    def test_ask_int_default(self, feed_input) -> None:
        feed_input([""])
        assert prompts.ask_int("Overhead", default=75000) == 75000

    def test_ask_select(self, feed_input) -> None:
        feed_input(["unknown", "testIsm"])
        choices = [("trustedRelayerIsm", "relayer"), ("testIsm", "test")]
        assert prompts.ask_select("Select ISM type", choices) == "testIsm"

    def test_ask_multi_select(self, feed_input) -> None:
        remaining = feed_input(["mars", "sepolia", "sepolia, anvil1, sepolia"])
        choices = [("anvil1", ""), ("sepolia", ""), ("ethereum", "")]
        assert prompts.ask_multi_select("Chains", choices, required_number=2) == ["sepolia", "anvil1"]
        assert remaining == []


# ============================================================
# 链选择
# ============================================================


class TestChainSelection:
    """链选择步骤。"""

    def test_single_selection(self, registry, scripted_prompts) -> None:
        scripted_prompts.push("sepolia")
        chain = run_single_chain_selection_step(registry.get_metadata(), "Select chain to connect")

        assert chain == "sepolia"
        name, message, _ = scripted_prompts.calls[0]
        assert (name, message) == ("ask_select", "Select chain to connect")

    def test_choices_order(self, registry, monkeypatch: pytest.MonkeyPatch) -> None:
        seen: list[list[str]] = []

        def fake_select(message, choices):
            seen.append([value for value, _ in choices])
            return choices[0][0]

        monkeypatch.setattr(prompts, "ask_select", fake_select)
        run_single_chain_selection_step(registry.get_metadata())
        assert seen == [["ethereum", "anvil1", "sepolia"]]

    def test_multi_selection(self, registry, scripted_prompts) -> None:
        scripted_prompts.push(["anvil1", "sepolia"])
        chains = run_multi_chain_selection_step(registry.get_metadata(), "Pick", required_number=2)

        assert chains == ["anvil1", "sepolia"]
        assert scripted_prompts.calls[0][2] == {"required_number": 2}

    def test_empty_registry(self) -> None:
        with pytest.raises(RegistryError, match="没有任何链"):
            run_single_chain_selection_step({})


class TestDetectAndConfirmOrPrompt:
    """检测 → 确认 → 输入。"""

    @pytest.mark.asyncio
    async def test_detected_and_confirmed(self, scripted_prompts) -> None:
        async def detect():
            return ADDRESS

        scripted_prompts.push(True)
        value = await detect_and_confirm_or_prompt(detect, "Enter the desired", "owner address", "signer")

        assert value == ADDRESS
        assert scripted_prompts.messages() == [
            f"Detected owner address as {ADDRESS} from signer, is this correct?"
        ]

    @pytest.mark.asyncio
    async def test_detected_but_rejected(self, scripted_prompts) -> None:
        async def detect():
            return ADDRESS

        scripted_prompts.push(False, OTHER)
        value = await detect_and_confirm_or_prompt(detect, "Enter the desired", "owner address", "signer")

        assert value == OTHER
        name, message, kwargs = scripted_prompts.calls[1]
        assert (name, message) == ("ask_address", "Enter the desired owner address")
        assert kwargs == {"default": ADDRESS}

    @pytest.mark.asyncio
    async def test_nothing_detected(self, scripted_prompts) -> None:
        async def detect():
            return None

        scripted_prompts.push(OTHER)
        value = await detect_and_confirm_or_prompt(detect, "Enter", "relayer address")

        assert value == OTHER
        assert scripted_prompts.names() == ["ask_address"]

    @pytest.mark.asyncio
    async def test_detect_failure_falls_back_to_prompt(self, scripted_prompts) -> None:
        async def detect():
            raise RuntimeError("rpc down")

        scripted_prompts.push(OTHER)
        assert await detect_and_confirm_or_prompt(detect, "Enter", "owner address") == OTHER
