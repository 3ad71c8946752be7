"""
基础设施层

包含外部协作者的具体实现（适配器）：
- adapters: httpx 传输、连接池、系统时钟
- config: 配置管理和依赖注入
"""

from .config import AppSettings, Container, get_container, get_settings

__all__ = [
    "AppSettings",
    "get_settings",
    "Container",
    "get_container",
]
