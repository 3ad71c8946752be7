"""配置管理 - 基于Pydantic Settings

环境变量使用 WECHAT_QRLOGIN_ 前缀，嵌套字段用双下划线分隔，例如::

    WECHAT_QRLOGIN_LOG_LEVEL=DEBUG
    WECHAT_QRLOGIN_LOGIN__POLL_TIMEOUT=120
    WECHAT_QRLOGIN_LOGIN__PROXY=http://127.0.0.1:7890

同名变量也可以写在当前目录的 .env 文件中。
"""

from functools import lru_cache
from typing import Literal
from urllib.parse import urlsplit

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ...shared.constants import (
    CONNECT_TIMEOUT,
    DEFAULT_LANG,
    DEFAULT_USER_AGENT,
    POLL_TIMEOUT,
    QR_CODE_SCAN_RESULT_URL,
    QR_CODE_URL,
    WECHAT_WEB_APP_ID,
    WECHAT_WEB_HOST,
)
from ...shared.exceptions import ConfigError, wrap_exception


class LoginSettings(BaseModel):
    """扫码登录配置

    只作为 AppSettings 的嵌套字段读取，不读取无前缀的环境变量。
    """

    login_host: str = Field(default=WECHAT_WEB_HOST, description="扫码页面所在主机")
    issuance_url: str = Field(default=QR_CODE_URL, description="二维码签发接口")
    status_url: str = Field(default=QR_CODE_SCAN_RESULT_URL, description="扫码状态接口")
    app_id: str = Field(default=WECHAT_WEB_APP_ID, description="网页版应用标识")
    lang: str = Field(default=DEFAULT_LANG, description="请求语言")
    poll_timeout: float = Field(default=POLL_TIMEOUT, gt=0, description="单次轮询等待上限（秒）")
    connect_timeout: float = Field(default=CONNECT_TIMEOUT, gt=0, description="连接超时（秒）")
    max_polls: int | None = Field(default=None, ge=1, description="最大轮询次数（不设置则不限）")
    login_icon: bool = Field(default=False, description="轮询时是否请求头像")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent")
    proxy: str | None = Field(default=None, description="代理服务器地址")

    @field_validator("login_host", "issuance_url", "status_url")
    @classmethod
    def _require_absolute_url(cls, value: str) -> str:
        parsed = urlsplit(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"需要 http/https 绝对地址: {value!r}")
        return value

    @property
    def transport_host(self) -> str:
        """连接池中使用的主机键"""
        return urlsplit(self.status_url).netloc


class AppSettings(BaseSettings):
    """主应用配置"""

    model_config = SettingsConfigDict(
        env_prefix="WECHAT_QRLOGIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = Field(default=False, description="调试模式")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="日志级别",
    )
    log_to_file: bool = Field(default=True, description="是否写入日志文件")

    login: LoginSettings = Field(default_factory=LoginSettings)


@lru_cache
def get_settings() -> AppSettings:
    """获取应用配置（单例）

    Raises:
        ConfigError: 环境变量或 .env 中的配置无效
    """
    try:
        return AppSettings()
    except ValidationError as e:
        raise wrap_exception(e, ConfigError, f"配置无效: {e.error_count()} 处错误\n{e}") from e
