"""
交互式输入。

基于 ``rich.prompt``，所有提示都输出到全局 Console。
配置构建器通过 ``prompts.ask_*`` 调用这些函数，测试中可以整体替换。
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from rich.prompt import Confirm, IntPrompt, Prompt

from hyperlane_cli.config.schema import ADDRESS_PATTERN
from hyperlane_cli.logger import create_console, log_red, log_table

_ADDRESS_RE = re.compile(ADDRESS_PATTERN)


def is_address(value: str) -> bool:
    """判断字符串是否为合法的 EVM 地址。"""
    return bool(_ADDRESS_RE.match(value.strip()))


def ask_text(message: str, default: str | None = None) -> str:
    """提示输入一段文本，去掉首尾空白。"""
    if default is None:
        answer = Prompt.ask(message, console=create_console())
    else:
        answer = Prompt.ask(message, console=create_console(), default=default)
    return answer.strip()


def ask_address(message: str, default: str | None = None) -> str:
    """提示输入地址，格式无效时重新提示。"""
    while True:
        answer = ask_text(message, default=default)
        if is_address(answer):
            return answer
        log_red(f"'{answer}' 不是合法地址（需要 0x + 40 位十六进制）。")


def ask_addresses(message: str) -> list[str]:
    """提示输入逗号分隔的地址列表，任一地址无效或重复（不区分大小写）时重新提示。"""
    while True:
        answer = ask_text(message)
        addresses = [a.strip() for a in answer.split(",") if a.strip()]
        invalid = [a for a in addresses if not is_address(a)]
        if not addresses:
            log_red("至少需要一个地址。")
            continue
        if invalid:
            log_red(f"以下地址无效：{', '.join(invalid)}")
            continue
        seen: set[str] = set()
        duplicates = []
        for address in addresses:
            if address.lower() in seen:
                duplicates.append(address)
            seen.add(address.lower())
        if duplicates:
            log_red(f"以下地址重复：{', '.join(duplicates)}")
            continue
        return addresses


def ask_confirm(message: str, default: bool = False) -> bool:
    return Confirm.ask(message, console=create_console(), default=default)


def ask_int(
    message: str,
    default: int | None = None,
    minimum: int | None = None,
    maximum: int | None = None,
) -> int:
    """提示输入整数，超出范围时重新提示。"""
    while True:
        if default is None:
            value = IntPrompt.ask(message, console=create_console())
        else:
            value = IntPrompt.ask(message, console=create_console(), default=default)
        if minimum is not None and value < minimum:
            log_red(f"数值不能小于 {minimum}。")
            continue
        if maximum is not None and value > maximum:
            log_red(f"数值不能大于 {maximum}。")
            continue
        return value


def ask_select(message: str, choices: Sequence[tuple[str, str]]) -> str:
    """
    从列表中选择一项。

    参数:
        message: 提示信息
        choices: (值, 描述) 列表

    返回:
        选中的值
    """
    log_table(
        ((value, description) for value, description in choices),
        columns=("选项", "说明"),
        title=message,
    )
    values = [value for value, _ in choices]
    return Prompt.ask(message, console=create_console(), choices=values)


def ask_multi_select(
    message: str,
    choices: Sequence[tuple[str, str]],
    required_number: int = 1,
) -> list[str]:
    """
    从列表中选择多项（逗号分隔输入）。

    参数:
        message: 提示信息
        choices: (值, 描述) 列表
        required_number: 至少需要选择的数量

    返回:
        按输入顺序去重后的选中值
    """
    log_table(
        ((value, description) for value, description in choices),
        columns=("选项", "说明"),
        title=message,
    )
    values = {value for value, _ in choices}
    while True:
        answer = ask_text(f"{message}（逗号分隔）")
        selected = list(dict.fromkeys(s.strip() for s in answer.split(",") if s.strip()))
        unknown = [s for s in selected if s not in values]
        if unknown:
            log_red(f"未知选项：{', '.join(unknown)}")
            continue
        if len(selected) < required_number:
            log_red(f"至少需要选择 {required_number} 项。")
            continue
        return selected
