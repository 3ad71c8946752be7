"""登录会话实体"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from ...shared.constants import DEFAULT_LANG, SESSION_FIELDS
from ...shared.exceptions import InvalidStateTransitionError
from ..value_objects import LoginState


@dataclass
class LoginSession:
    """
    登录会话

    一次扫码登录尝试期间客户端的全部身份信息。
    会话只属于单个登录任务，不应在并发任务之间共享。

    生命周期：
    - 创建时 state=AWAITING_SCAN，字符串字段为空（lang 为默认语言）
    - 二维码签发成功后写入 uuid
    - 确认登录（0 -> -1）时一次性写入 uuid/lang/scan/ticket
    """

    uuid: str = ""
    lang: str = DEFAULT_LANG
    scan: str = ""
    ticket: str = ""
    state: LoginState = field(default=LoginState.AWAITING_SCAN)

    @property
    def tip(self) -> int:
        """协议中的 tip 参数"""
        return int(self.state)

    @property
    def is_confirmed(self) -> bool:
        """是否已确认登录"""
        return self.state.is_terminal

    def advance(self, new_state: LoginState) -> None:
        """推进登录状态

        Raises:
            InvalidStateTransitionError: 不是沿 1 -> 0 -> -1 前进一步
        """
        if not self.state.can_advance_to(new_state):
            raise InvalidStateTransitionError(
                f"不允许从 {self.state.name} 迁移到 {new_state.name}",
                details={"from": self.tip, "to": int(new_state)},
            )
        self.state = new_state

    def confirm(self, fields: Mapping[str, str]) -> None:
        """确认登录并合并跳转地址中的会话字段

        状态迁移和字段写入一起完成；未识别的字段被忽略。
        """
        if self.state is not LoginState.SCANNED:
            raise InvalidStateTransitionError(
                f"只有已扫码的会话才能确认登录，当前状态: {self.state.name}",
                details={"from": self.tip, "to": int(LoginState.CONFIRMED)},
            )

        updates = {name: fields[name] for name in SESSION_FIELDS if name in fields}
        self.state = LoginState.CONFIRMED
        for name, value in updates.items():
            setattr(self, name, value)

    def to_dict(self) -> dict[str, str | int]:
        """转换为字典（用于日志和输出）"""
        return {
            "uuid": self.uuid,
            "lang": self.lang,
            "scan": self.scan,
            "ticket": self.ticket,
            "tip": self.tip,
        }
