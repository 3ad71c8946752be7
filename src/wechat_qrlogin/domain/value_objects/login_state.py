"""登录状态值对象"""

from __future__ import annotations

from enum import IntEnum


class LoginState(IntEnum):
    """
    扫码登录状态

    取值即协议中的 tip 参数，只允许沿 1 -> 0 -> -1 单向推进。
    """

    AWAITING_SCAN = 1  # 等待扫码
    SCANNED = 0  # 已扫码，等待手机确认
    CONFIRMED = -1  # 已确认（终态）

    @property
    def is_terminal(self) -> bool:
        """是否为终态"""
        return self is LoginState.CONFIRMED

    @property
    def label(self) -> str:
        """状态描述"""
        return _LABELS[self]

    def can_advance_to(self, other: LoginState) -> bool:
        """是否允许迁移到目标状态（只允许前进一步）"""
        return other.value == self.value - 1

    @classmethod
    def from_tip(cls, tip: int) -> LoginState:
        """从 tip 整数值创建"""
        return cls(tip)


_LABELS = {
    LoginState.AWAITING_SCAN: "等待扫码",
    LoginState.SCANNED: "已扫码，请在手机上确认",
    LoginState.CONFIRMED: "登录已确认",
}
