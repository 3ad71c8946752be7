"""配置和依赖注入容器测试"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from wechat_qrlogin.application.use_cases import PollLoginStatusUseCase, RetrieveQrCodeUseCase
from wechat_qrlogin.infrastructure.adapters import HttpxTransport, SystemClock
from wechat_qrlogin.infrastructure.config import (
    AppSettings,
    Container,
    get_container,
    get_settings,
    reset_container,
)
from wechat_qrlogin.infrastructure.config.settings import LoginSettings
from wechat_qrlogin.shared.exceptions import ConfigError


class TestSettings:
    """配置测试"""

    @pytest.mark.unit
    def test_defaults(self) -> None:
        """测试默认配置"""
        settings = AppSettings()

        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.login.issuance_url == "https://wx.qq.com/jslogin"
        assert settings.login.status_url == "https://wx.qq.com/cgi-bin/mmwebwx-bin/login"
        assert settings.login.app_id == "wx782c26e4c19acffb"
        assert settings.login.lang == "zh_CN"
        assert settings.login.poll_timeout == 300.0
        assert settings.login.max_polls is None
        assert settings.login.login_icon is False
        assert settings.login.transport_host == "wx.qq.com"

    @pytest.mark.unit
    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """测试环境变量覆盖嵌套配置"""
        monkeypatch.setenv("WECHAT_QRLOGIN_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("WECHAT_QRLOGIN_LOGIN__POLL_TIMEOUT", "120")
        monkeypatch.setenv("WECHAT_QRLOGIN_LOGIN__MAX_POLLS", "5")

        settings = AppSettings()

        assert settings.log_level == "DEBUG"
        assert settings.login.poll_timeout == 120.0
        assert settings.login.max_polls == 5

    @pytest.mark.unit
    def test_system_lang_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """测试不读取无前缀的 LANG"""
        monkeypatch.setenv("LANG", "en_US.UTF-8")

        assert AppSettings().login.lang == "zh_CN"

    @pytest.mark.unit
    def test_env_file(self, tmp_path) -> None:
        """测试读取当前目录的 .env"""
        (tmp_path / ".env").write_text("WECHAT_QRLOGIN_LOGIN__LANG=en_US\n", encoding="utf-8")

        assert AppSettings().login.lang == "en_US"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"status_url": "wx.qq.com/login"},
            {"issuance_url": "ftp://wx.qq.com/jslogin"},
            {"poll_timeout": 0},
            {"max_polls": 0},
        ],
    )
    def test_invalid_login_settings(self, kwargs: dict) -> None:
        """测试非法配置被拒绝"""
        with pytest.raises(ValidationError):
            LoginSettings(**kwargs)

    @pytest.mark.unit
    def test_get_settings_cached(self) -> None:
        """测试配置单例"""
        assert get_settings() is get_settings()


class TestContainer:
    """Container 测试"""

    @pytest.mark.unit
    def test_lazy_collaborators(self) -> None:
        """测试懒加载的传输和时钟"""
        container = Container(settings=AppSettings())

        assert isinstance(container.transport, HttpxTransport)
        assert container.transport is container.transport
        assert isinstance(container.clock, SystemClock)

    @pytest.mark.unit
    def test_override(self, fake_transport, fixed_clock) -> None:
        """测试替换协作者"""
        container = Container(settings=AppSettings())
        container.override(transport=fake_transport, clock=fixed_clock)

        assert container.transport is fake_transport
        assert container.clock is fixed_clock

    @pytest.mark.unit
    def test_new_session_uses_configured_lang(self) -> None:
        """测试新会话使用配置的语言"""
        container = Container(settings=AppSettings(login=LoginSettings(lang="en_US")))

        session = container.new_session()

        assert session.lang == "en_US"
        assert session.tip == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_use_cases_wired(self, fake_transport, fixed_clock, qr_body: str) -> None:
        """测试用例按配置组装"""
        settings = AppSettings(login=LoginSettings(lang="en_US", poll_timeout=60))
        container = Container(settings=settings)
        container.override(transport=fake_transport, clock=fixed_clock)
        session = container.new_session()

        issuer = container.retrieve_qr_code_use_case(session)
        poller = container.poll_use_case(session)

        assert isinstance(issuer, RetrieveQrCodeUseCase)
        assert isinstance(poller, PollLoginStatusUseCase)
        assert issuer.session is poller.session is session

        fake_transport.queue(qr_body, "window.code=408;")
        await issuer.execute()
        await poller.poll_once()

        assert fake_transport.requests[0]["fields"]["lang"] == "en_US"
        assert fake_transport.requests[1]["timeout"] == 60.0

    @pytest.mark.unit
    def test_poll_timeout_override(self, fake_transport, fixed_clock) -> None:
        """测试覆盖单次轮询超时"""
        container = Container(settings=AppSettings())
        container.override(transport=fake_transport, clock=fixed_clock)

        poller = container.poll_use_case(container.new_session(), poll_timeout=5.0)

        assert poller._poll_timeout == 5.0

    @pytest.mark.unit
    def test_global_container(self) -> None:
        """测试全局容器"""
        container = get_container()
        assert get_container() is container

        reset_container()
        assert get_container() is not container

    @pytest.mark.unit
    def test_invalid_env_raises_config_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """测试无效的环境变量转换为 ConfigError"""
        monkeypatch.setenv("WECHAT_QRLOGIN_LOGIN__POLL_TIMEOUT", "-1")

        with pytest.raises(ConfigError) as exc_info:
            get_settings()

        assert isinstance(exc_info.value.cause, ValidationError)
