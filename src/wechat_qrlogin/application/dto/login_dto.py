"""登录数据传输对象"""

from dataclasses import dataclass, field
from datetime import datetime

from ...shared.utils import utc_now


@dataclass
class QRCodeDTO:
    """二维码签发结果"""

    uuid: str
    login_url: str  # 需要在第二台设备上打开/扫描的地址


@dataclass
class LoginResult:
    """登录确认后的会话字段"""

    ticket: str
    uuid: str
    lang: str
    scan: str
    polls: int = 0  # 本次登录共轮询的次数
    confirmed_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict[str, str | int]:
        """转换为字典（用于 JSON 输出）"""
        return {
            "ticket": self.ticket,
            "uuid": self.uuid,
            "lang": self.lang,
            "scan": self.scan,
            "polls": self.polls,
            "confirmed_at": self.confirmed_at.isoformat(),
        }
