"""轮询扫码状态用例"""

from __future__ import annotations

import time
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

from loguru import logger

from ...domain.services import apply_status, read_status, text_to_map
from ...domain.value_objects import LoginState
from ...shared.constants import POLL_TIMEOUT, QR_CODE_SCAN_RESULT_URL
from ...shared.exceptions import PollAttemptsExhaustedError, UnvalidatedFieldError
from ...shared.utils import append_query_to_url, mask_ticket
from ...shared.utils.logger import log_poll, log_state_change
from ..dto import LoginResult

if TYPE_CHECKING:
    from ...domain.entities import LoginSession
    from ..ports.outbound import ClockPort, HttpTransportPort


class PollLoginStatusUseCase:
    """
    轮询扫码状态用例

    按顺序重复请求状态接口，直到用户在手机上确认登录。
    状态接口是长轮询：服务端挂起连接直到用户操作或等待窗口结束，
    因此两次轮询之间不做额外等待。

    任何传输或解析错误都会立即中止轮询；
    取消正在 await 的任务即可中止进行中的请求。
    """

    def __init__(
        self,
        transport: HttpTransportPort,
        clock: ClockPort,
        session: LoginSession,
        *,
        status_url: str = QR_CODE_SCAN_RESULT_URL,
        poll_timeout: float = POLL_TIMEOUT,
        login_icon: bool = False,
    ):
        """
        Args:
            transport: HTTP传输
            clock: 时钟（生成防缓存时间戳）
            session: 当前登录会话（需已签发 uuid）
            status_url: 扫码状态接口
            poll_timeout: 单次轮询的等待上限（秒）
            login_icon: 是否请求头像，不影响后续流程
        """
        self._transport = transport
        self._clock = clock
        self._session = session
        self._status_url = status_url
        self._poll_timeout = poll_timeout
        self._login_icon = login_icon
        self._polls = 0

    @property
    def session(self) -> LoginSession:
        """当前登录会话"""
        return self._session

    @property
    def polls(self) -> int:
        """已完成的轮询次数"""
        return self._polls

    def build_params(self) -> dict[str, str | int | bool]:
        """根据当前会话构造查询参数"""
        return {
            "tip": self._session.tip,
            "uuid": self._session.uuid,
            "_": self._clock.now_millis(),
            "loginicon": self._login_icon,
        }

    def build_url(self) -> str:
        """构造带查询串的状态接口地址"""
        return append_query_to_url(self._status_url, self.build_params())

    async def poll_once(self) -> LoginState:
        """
        执行一次轮询

        Returns:
            本次轮询后的会话状态

        Raises:
            UnvalidatedFieldError: 会话尚未签发 uuid
            TransportError: 网络请求失败
            MissingRedirectUrlError: 确认登录但缺少跳转地址
            MalformedUrlError: 跳转地址无法解析
        """
        if not self._session.uuid:
            raise UnvalidatedFieldError("uuid", "会话尚未获取二维码 uuid，无法轮询")

        old_tip = self._session.tip
        started = time.perf_counter()
        body = await self._transport.get(self.build_url(), timeout=self._poll_timeout)
        duration_ms = int((time.perf_counter() - started) * 1000)
        self._polls += 1

        fields = text_to_map(body)
        log_poll(self._session.uuid, old_tip, read_status(fields), duration_ms)

        if apply_status(self._session, fields):
            log_state_change(self._session.uuid, old_tip, self._session.tip)
            if self._session.is_confirmed:
                logger.info(f"登录已确认，ticket: {mask_ticket(self._session.ticket)}")
            else:
                logger.info("已扫码，请在手机上确认登录")

        return self._session.state

    async def iter_polls(self, max_polls: int | None = None) -> AsyncIterator[LoginState]:
        """
        逐次轮询，每次轮询后产出当前状态，确认登录后结束

        Args:
            max_polls: 最大轮询次数（None 表示不限）

        Raises:
            PollAttemptsExhaustedError: 达到上限仍未确认
        """
        attempts = 0
        while not self._session.is_confirmed:
            if max_polls is not None and attempts >= max_polls:
                raise PollAttemptsExhaustedError(
                    f"轮询 {max_polls} 次后仍未确认登录",
                    details={"max_polls": max_polls, "tip": self._session.tip},
                )
            attempts += 1
            yield await self.poll_once()

    async def execute(self, max_polls: int | None = None) -> LoginResult:
        """
        轮询直到确认登录

        Args:
            max_polls: 最大轮询次数（None 表示不限）

        Returns:
            登录结果（ticket/uuid/lang/scan）
        """
        async for _state in self.iter_polls(max_polls):
            pass
        return self.result()

    def result(self) -> LoginResult:
        """从已确认的会话生成登录结果"""
        if not self._session.is_confirmed:
            raise UnvalidatedFieldError("ticket", "会话尚未确认登录")
        return LoginResult(
            ticket=self._session.ticket,
            uuid=self._session.uuid,
            lang=self._session.lang,
            scan=self._session.scan,
            polls=self._polls,
        )
