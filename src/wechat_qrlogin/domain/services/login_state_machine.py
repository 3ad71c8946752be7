"""扫码登录状态机

根据单次轮询响应中的状态码推进会话状态::

    AWAITING_SCAN (1) --201--> SCANNED (0) --200 + redirect--> CONFIRMED (-1)

其他任何状态码与当前状态的组合（包括未扫码就收到 200、重复收到相同状态码）
都视为本次轮询无结论，不改变状态，也不算错误。
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from ...shared.constants import (
    FIELD_REDIRECT_URI,
    FIELD_REDIRECT_URL,
    FIELD_SCAN_CODE,
    STATUS_OK,
    STATUS_SCANNED,
)
from ...shared.exceptions import MissingRedirectUrlError
from ..value_objects import LoginState
from .redirect_parser import parse_redirect

if TYPE_CHECKING:
    from ..entities import LoginSession


def read_status(fields: Mapping[str, str]) -> str:
    """读取轮询响应中的状态码，缺失时视为空字符串"""
    return fields.get(FIELD_SCAN_CODE, "")


def read_redirect_url(fields: Mapping[str, str]) -> str:
    """读取跳转地址，缺失时视为空字符串"""
    return fields.get(FIELD_REDIRECT_URI) or fields.get(FIELD_REDIRECT_URL) or ""


def apply_status(session: LoginSession, fields: Mapping[str, str]) -> bool:
    """将一次轮询响应应用到会话

    Args:
        session: 当前登录会话
        fields: ``text_to_map`` 解析后的响应字段

    Returns:
        会话状态是否发生变化

    Raises:
        MissingRedirectUrlError: 已扫码后收到 200 但没有跳转地址
        MalformedUrlError: 跳转地址无法解析

    两种异常情况下会话都保持原样。
    """
    status = read_status(fields)

    if session.state is LoginState.AWAITING_SCAN and status == STATUS_SCANNED:
        session.advance(LoginState.SCANNED)
        return True

    if session.state is LoginState.SCANNED and status == STATUS_OK:
        redirect_url = read_redirect_url(fields)
        if not redirect_url:
            raise MissingRedirectUrlError(
                "确认登录响应中缺少 window.redirect_uri",
                details={"uuid": session.uuid},
            )
        session.confirm(parse_redirect(redirect_url))
        return True

    return False
