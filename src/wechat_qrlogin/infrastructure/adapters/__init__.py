"""基础设施适配器"""

from .http_client_pool import ClientConfig, HttpClientPool, get_http_pool
from .httpx_transport import HttpxTransport
from .system_clock import SystemClock

__all__ = [
    "ClientConfig",
    "HttpClientPool",
    "get_http_pool",
    "HttpxTransport",
    "SystemClock",
]
