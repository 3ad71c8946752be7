"""依赖注入容器 - 组装应用组件"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from loguru import logger

from ...application.use_cases import PollLoginStatusUseCase, RetrieveQrCodeUseCase
from ...domain.entities import LoginSession
from ..adapters import ClientConfig, HttpClientPool, HttpxTransport, SystemClock
from .settings import AppSettings, get_settings

if TYPE_CHECKING:
    from ...application.ports.outbound import ClockPort, HttpTransportPort


@dataclass
class Container:
    """
    依赖注入容器

    传输和时钟在所有登录尝试之间共享；
    每次登录尝试使用独立的 LoginSession 和用例实例。
    """

    settings: AppSettings = field(default_factory=get_settings)

    # 线程安全锁（保护懒加载属性的初始化）
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    _transport: HttpTransportPort | None = field(default=None, init=False)
    _clock: ClockPort | None = field(default=None, init=False)

    @property
    def transport(self) -> HttpTransportPort:
        """获取HTTP传输"""
        if self._transport is None:
            with self._lock:
                if self._transport is None:
                    self._transport = self._create_transport()
        return self._transport

    @property
    def clock(self) -> ClockPort:
        """获取时钟"""
        if self._clock is None:
            with self._lock:
                if self._clock is None:
                    self._clock = SystemClock()
        return self._clock

    def override(
        self,
        transport: HttpTransportPort | None = None,
        clock: ClockPort | None = None,
    ) -> None:
        """替换协作者（用于测试或自定义传输）"""
        with self._lock:
            if transport is not None:
                self._transport = transport
            if clock is not None:
                self._clock = clock

    def new_session(self) -> LoginSession:
        """创建一次登录尝试的会话"""
        return LoginSession(lang=self.settings.login.lang)

    def retrieve_qr_code_use_case(self, session: LoginSession) -> RetrieveQrCodeUseCase:
        """获取二维码签发用例"""
        login = self.settings.login
        return RetrieveQrCodeUseCase(
            self.transport,
            self.clock,
            session,
            issuance_url=login.issuance_url,
            login_host=login.login_host,
            app_id=login.app_id,
            lang=login.lang,
        )

    def poll_use_case(
        self,
        session: LoginSession,
        poll_timeout: float | None = None,
    ) -> PollLoginStatusUseCase:
        """获取扫码状态轮询用例

        Args:
            session: 已签发 uuid 的会话
            poll_timeout: 覆盖配置中的单次轮询等待上限（秒）
        """
        login = self.settings.login
        return PollLoginStatusUseCase(
            self.transport,
            self.clock,
            session,
            status_url=login.status_url,
            poll_timeout=poll_timeout or login.poll_timeout,
            login_icon=login.login_icon,
        )

    def _create_transport(self) -> HttpTransportPort:
        """创建 httpx 传输"""
        login = self.settings.login
        config = ClientConfig(
            timeout_connect=login.connect_timeout,
            timeout_read=login.poll_timeout,
            proxy=login.proxy,
            headers={"User-Agent": login.user_agent},
        )
        logger.debug(f"创建 httpx 传输: {login.transport_host}")
        return HttpxTransport(host=login.transport_host, config=config)

    async def aclose(self) -> None:
        """关闭连接池中的客户端"""
        await HttpClientPool().close_all()
        self._transport = None


# 全局容器实例
_container: Container | None = None


def get_container() -> Container:
    """获取全局容器实例"""
    global _container
    if _container is None:
        _container = Container()
    return _container


def reset_container() -> None:
    """重置容器（用于测试）"""
    global _container
    _container = None
    HttpClientPool.reset()
