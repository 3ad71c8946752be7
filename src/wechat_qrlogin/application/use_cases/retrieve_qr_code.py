"""获取登录二维码用例"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from ...domain.services import text_to_map
from ...shared.constants import (
    DEFAULT_LANG,
    FIELD_QR_CODE,
    FIELD_QR_UUID,
    QR_CODE_URL,
    QR_FUN_NEW,
    STATUS_OK,
    WECHAT_WEB_APP_ID,
    WECHAT_WEB_HOST,
)
from ...shared.exceptions import QrIssuanceRejectedError, UnvalidatedFieldError
from ...shared.utils import normalize_base_url
from ...shared.utils.logger import log_qr_issued
from ..dto import QRCodeDTO

if TYPE_CHECKING:
    from ...domain.entities import LoginSession
    from ..ports.outbound import ClockPort, HttpTransportPort


class RetrieveQrCodeUseCase:
    """
    获取登录二维码用例

    向签发接口申请一次性的登录 uuid，并写入会话。
    这是该用例对会话的唯一修改。
    """

    def __init__(
        self,
        transport: HttpTransportPort,
        clock: ClockPort,
        session: LoginSession,
        *,
        issuance_url: str = QR_CODE_URL,
        login_host: str = WECHAT_WEB_HOST,
        app_id: str = WECHAT_WEB_APP_ID,
        lang: str = DEFAULT_LANG,
    ):
        """
        Args:
            transport: HTTP传输
            clock: 时钟（生成防缓存时间戳）
            session: 当前登录会话
            issuance_url: 二维码签发接口
            login_host: 拼接扫码页面地址的主机
            app_id: 网页版应用标识
            lang: 请求语言
        """
        self._transport = transport
        self._clock = clock
        self._session = session
        self._issuance_url = issuance_url
        self._login_host = normalize_base_url(login_host)
        self._app_id = app_id
        self._lang = lang

    @property
    def session(self) -> LoginSession:
        """当前登录会话"""
        return self._session

    def build_params(self) -> dict[str, str | int]:
        """构造签发请求的表单字段"""
        return {
            "appid": self._app_id,
            "fun": QR_FUN_NEW,
            "lang": self._lang,
            "_": self._clock.now_millis(),
        }

    def login_page_url(self, uuid: str) -> str:
        """用户需要在手机上访问/扫描的登录地址"""
        return f"{self._login_host}/qrcode/{uuid}"

    async def execute(self) -> str:
        """
        申请登录二维码

        Returns:
            签发的 uuid

        Raises:
            TransportError: 网络请求失败
            QrIssuanceRejectedError: 状态码不是 200
            UnvalidatedFieldError: 状态码为 200 但没有 uuid
        """
        body = await self._transport.post_form(self._issuance_url, self.build_params())
        uuid = self.process_response(body)

        self._session.uuid = uuid
        login_url = self.login_page_url(uuid)
        logger.info(f"请使用微信扫码登录: {login_url}")
        log_qr_issued(uuid, login_url)
        return uuid

    async def issue(self) -> QRCodeDTO:
        """申请登录二维码并返回展示用数据"""
        uuid = await self.execute()
        return QRCodeDTO(uuid=uuid, login_url=self.login_page_url(uuid))

    @staticmethod
    def process_response(body: str) -> str:
        """校验签发响应并取出 uuid

        响应示例::

            window.QRLogin.code = 200; window.QRLogin.uuid = "AZJIzIcS5g==";
        """
        fields = text_to_map(body)

        status = fields.get(FIELD_QR_CODE)
        if status != STATUS_OK:
            raise QrIssuanceRejectedError(status, details={"body": body[:200]})

        uuid = fields.get(FIELD_QR_UUID, "")
        if not uuid:
            raise UnvalidatedFieldError(FIELD_QR_UUID)

        return uuid
