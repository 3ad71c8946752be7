"""自定义异常类

包含：
- 错误码枚举 (ErrorCode)
- 分层异常类（领域层、应用层、基础设施层）
- 用户友好的错误消息
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """错误码枚举

    错误码范围：
    - 1xxx: 通用错误
    - 2xxx: 网络/传输错误
    - 3xxx: 登录协议错误
    - 6xxx: 配置错误
    """

    # 通用错误 1xxx
    UNKNOWN_ERROR = (1000, "未知错误")
    MALFORMED_URL = (1002, "无效的URL")

    # 网络/传输错误 2xxx
    TRANSPORT_ERROR = (2000, "网络请求失败")
    TRANSPORT_TIMEOUT = (2002, "网络请求超时")

    # 登录协议错误 3xxx
    QR_ISSUANCE_REJECTED = (3000, "二维码获取被拒绝")
    MISSING_REDIRECT_URL = (3001, "确认登录响应缺少跳转地址")
    UNVALIDATED_FIELD = (3002, "响应缺少必要字段")
    INVALID_STATE_TRANSITION = (3003, "非法的登录状态迁移")
    POLL_ATTEMPTS_EXHAUSTED = (3004, "轮询次数已用尽")

    # 配置错误 6xxx
    CONFIG_ERROR = (6000, "配置错误")

    def __init__(self, code: int, message: str):
        self._code = code
        self._message = message

    @property
    def code(self) -> int:
        """错误码"""
        return self._code

    @property
    def message(self) -> str:
        """错误消息"""
        return self._message

    def __str__(self) -> str:
        return f"[{self._code}] {self._message}"


class QRLoginError(Exception):
    """基础异常类

    所有自定义异常的基类，支持错误码和详细信息。
    """

    error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    def __init__(
        self,
        message: str | None = None,
        *,
        error_code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        self._error_code = error_code or self.error_code
        self._message = message or self._error_code.message
        self._details = details or {}
        self._cause = cause

        super().__init__(self._message)

    @property
    def code(self) -> int:
        """错误码"""
        return self._error_code.code

    @property
    def user_message(self) -> str:
        """用户友好的错误消息"""
        return self._message

    @property
    def details(self) -> dict[str, Any]:
        """详细信息"""
        return self._details

    @property
    def cause(self) -> Exception | None:
        """原始异常"""
        return self._cause

    def to_dict(self) -> dict[str, Any]:
        """转换为字典（用于API响应或日志）"""
        return {
            "error_code": self._error_code.code,
            "error_type": self._error_code.name,
            "message": self._message,
            "details": self._details,
        }

    def __str__(self) -> str:
        return f"[{self._error_code.code}] {self._message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self._error_code.code}, message={self._message!r})"


# ============ 领域层异常 ============


class DomainError(QRLoginError):
    """领域异常基类"""


class MalformedUrlError(DomainError):
    """跳转地址不是合法的URL"""

    error_code = ErrorCode.MALFORMED_URL


class MissingRedirectUrlError(DomainError):
    """确认登录（200）但响应中没有可用的跳转地址"""

    error_code = ErrorCode.MISSING_REDIRECT_URL


class UnvalidatedFieldError(DomainError):
    """校验点上缺少必要字段"""

    error_code = ErrorCode.UNVALIDATED_FIELD

    def __init__(self, field: str, message: str | None = None, **kwargs: Any):
        self.field = field
        details = kwargs.pop("details", None) or {}
        details.setdefault("field", field)
        super().__init__(message or f"缺少必要字段: {field}", details=details, **kwargs)


class InvalidStateTransitionError(DomainError):
    """登录状态只能按 1 -> 0 -> -1 单向推进"""

    error_code = ErrorCode.INVALID_STATE_TRANSITION


# ============ 应用层异常 ============


class ApplicationError(QRLoginError):
    """应用层异常基类"""


class QrIssuanceRejectedError(ApplicationError):
    """二维码获取响应的状态码不是 200"""

    error_code = ErrorCode.QR_ISSUANCE_REJECTED

    def __init__(self, status: str | None, message: str | None = None, **kwargs: Any):
        self.status = status
        details = kwargs.pop("details", None) or {}
        details.setdefault("status", status)
        super().__init__(
            message or f"二维码获取被拒绝: window.QRLogin.code={status!r}",
            details=details,
            **kwargs,
        )


class PollAttemptsExhaustedError(ApplicationError):
    """达到轮询上限仍未确认登录"""

    error_code = ErrorCode.POLL_ATTEMPTS_EXHAUSTED


# ============ 基础设施层异常 ============


class InfrastructureError(QRLoginError):
    """基础设施异常基类"""


class TransportError(InfrastructureError):
    """网络/传输异常（包括非成功的HTTP状态码）"""

    error_code = ErrorCode.TRANSPORT_ERROR


class TransportTimeoutError(TransportError):
    """请求超时"""

    error_code = ErrorCode.TRANSPORT_TIMEOUT


class ConfigError(InfrastructureError):
    """配置异常"""

    error_code = ErrorCode.CONFIG_ERROR


# ============ 工具函数 ============


def wrap_exception(
    exc: Exception,
    error_class: type[QRLoginError] = QRLoginError,
    message: str | None = None,
) -> QRLoginError:
    """将普通异常包装为 QRLoginError

    Args:
        exc: 原始异常
        error_class: 目标异常类
        message: 自定义消息（可选）

    Returns:
        包装后的异常
    """
    if isinstance(exc, QRLoginError):
        return exc

    return error_class(
        message=message or str(exc),
        cause=exc,
    )
