"""配置模块"""

from .container import Container, get_container, reset_container
from .paths import get_data_dir, get_log_dir
from .settings import AppSettings, LoginSettings, get_settings

__all__ = [
    "AppSettings",
    "LoginSettings",
    "get_settings",
    "Container",
    "get_container",
    "reset_container",
    "get_data_dir",
    "get_log_dir",
]
