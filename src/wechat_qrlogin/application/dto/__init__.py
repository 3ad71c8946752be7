"""数据传输对象"""

from .login_dto import LoginResult, QRCodeDTO

__all__ = [
    "QRCodeDTO",
    "LoginResult",
]
