"""
不依赖私钥的签名者。
"""

from __future__ import annotations


class ImpersonatedSigner:
    """
    dry-run 下冒充指定地址的签名者。

    模拟执行时不需要真实签名，后端根据地址在模拟环境中代为发送交易。
    """

    def __init__(self, address: str) -> None:
        self.address = address

    async def get_address(self) -> str:
        return self.address

    def __repr__(self) -> str:
        return f"ImpersonatedSigner({self.address!r})"
