"""测试夹具和共享配置

提供测试中常用的夹具：
- 记录请求并按顺序返回响应体的 FakeTransport
- 固定时间的 FixedClock
- 登录接口的示例响应体
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from typing import TYPE_CHECKING
from urllib.parse import parse_qsl, urlsplit

import pytest
from loguru import logger

from wechat_qrlogin.domain.entities import LoginSession
from wechat_qrlogin.domain.value_objects import LoginState
from wechat_qrlogin.infrastructure.config import get_settings, reset_container

if TYPE_CHECKING:
    from collections.abc import Generator


FIXED_MILLIS = 1648884679000

QR_BODY = 'window.QRLogin.code = 200; window.QRLogin.uuid = "AZJIzIcS5g==";'
WAITING_BODY = "window.code=408;"
SCANNED_BODY = "window.code=201;"
REDIRECT_URL = (
    "https://wx.qq.com/cgi-bin/mmwebwx-bin/webwxnewloginpage"
    "?ticket=AVTK4m8A8ThyfrYZKuoHiY6i@qrticket_0&uuid=YZeXOrjTMw==&lang=zh_CN&scan=1648884679"
)
CONFIRMED_BODY = f'window.code=200;\nwindow.redirect_uri="{REDIRECT_URL}";'


# ============== 测试替身 ==============


class FakeTransport:
    """按顺序返回预置响应的传输

    队列中的异常实例会被抛出而不是返回。
    """

    def __init__(self, responses: Iterable[str | Exception] = ()) -> None:
        self.responses: list[str | Exception] = list(responses)
        self.requests: list[dict] = []

    def queue(self, *responses: str | Exception) -> None:
        self.responses.extend(responses)

    async def post_form(self, url, fields, timeout=None) -> str:
        self.requests.append({"method": "POST", "url": url, "fields": dict(fields), "timeout": timeout})
        return self._next()

    async def get(self, url, timeout=None) -> str:
        self.requests.append({"method": "GET", "url": url, "fields": None, "timeout": timeout})
        return self._next()

    def _next(self) -> str:
        if not self.responses:
            raise AssertionError("FakeTransport 没有更多预置响应")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def query_of(self, index: int) -> dict[str, str]:
        """第 index 个请求的查询参数"""
        return dict(parse_qsl(urlsplit(self.requests[index]["url"]).query, keep_blank_values=True))


class FixedClock:
    """固定时间的时钟"""

    def __init__(self, millis: int = FIXED_MILLIS) -> None:
        self.millis = millis

    def now_millis(self) -> int:
        return self.millis


# ============== 基础夹具 ==============


@pytest.fixture
def fake_transport() -> FakeTransport:
    """空的 FakeTransport"""
    return FakeTransport()


@pytest.fixture
def fixed_clock() -> FixedClock:
    """固定时钟"""
    return FixedClock()


@pytest.fixture
def session() -> LoginSession:
    """新建的登录会话"""
    return LoginSession()


@pytest.fixture
def issued_session() -> LoginSession:
    """已签发 uuid 的会话"""
    return LoginSession(uuid="AZJIzIcS5g==")


@pytest.fixture
def scanned_session() -> LoginSession:
    """已扫码的会话"""
    return LoginSession(uuid="AZJIzIcS5g==", state=LoginState.SCANNED)


# ============== 环境隔离 ==============


@pytest.fixture(autouse=True)
def isolated_settings(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path,
) -> Generator[None, None, None]:
    """隔离环境变量、.env 和全局容器"""
    for name in list(os.environ):
        if name.startswith("WECHAT_QRLOGIN_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("WECHAT_QRLOGIN_LOG_TO_FILE", "false")
    monkeypatch.chdir(tmp_path)

    get_settings.cache_clear()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_container()
    # CLI 测试会把日志输出绑定到 CliRunner 的临时流
    logger.remove()


# ============== 示例响应 ==============


@pytest.fixture
def qr_body() -> str:
    """二维码签发成功的响应体"""
    return QR_BODY


@pytest.fixture
def waiting_body() -> str:
    """等待扫码（长轮询超时）的响应体"""
    return WAITING_BODY


@pytest.fixture
def scanned_body() -> str:
    """已扫码的响应体"""
    return SCANNED_BODY


@pytest.fixture
def redirect_url() -> str:
    """确认登录后的跳转地址"""
    return REDIRECT_URL


@pytest.fixture
def confirmed_body() -> str:
    """确认登录的响应体"""
    return CONFIRMED_BODY
