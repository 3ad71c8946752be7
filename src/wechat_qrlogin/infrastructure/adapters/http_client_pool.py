"""HTTP 连接池

按主机共享 httpx.AsyncClient：同一进程中的多个登录尝试
复用一条连接池，每个尝试只持有自己的 LoginSession。
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, ClassVar

import httpx
from loguru import logger

from ...shared.constants import CONNECT_TIMEOUT, POLL_TIMEOUT

_DEFAULT_KEY = "_default"


@dataclass
class ClientConfig:
    """客户端配置

    读超时默认等于长轮询窗口，签发请求和状态请求共用同一客户端。
    """

    timeout_connect: float = CONNECT_TIMEOUT
    timeout_read: float = POLL_TIMEOUT
    timeout_write: float = 30.0
    timeout_pool: float = 5.0
    max_connections: int = 20
    max_keepalive_connections: int = 10
    keepalive_expiry: float = 60.0
    follow_redirects: bool = False  # 跳转地址只解析，不跟随
    proxy: str | None = None
    headers: dict[str, str] = field(default_factory=dict)

    def to_httpx_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(
            connect=self.timeout_connect,
            read=self.timeout_read,
            write=self.timeout_write,
            pool=self.timeout_pool,
        )

    def to_httpx_limits(self) -> httpx.Limits:
        return httpx.Limits(
            max_connections=self.max_connections,
            max_keepalive_connections=self.max_keepalive_connections,
            keepalive_expiry=self.keepalive_expiry,
        )

    def client_kwargs(self) -> dict[str, Any]:
        """构造 httpx.AsyncClient 的参数"""
        kwargs: dict[str, Any] = {
            "timeout": self.to_httpx_timeout(),
            "limits": self.to_httpx_limits(),
            "follow_redirects": self.follow_redirects,
            "headers": self.headers,
        }
        if self.proxy:
            kwargs["proxy"] = self.proxy
        return kwargs


class HttpClientPool:
    """
    HTTP 客户端池（进程内单例）

    ``configure`` 只记录配置，客户端在第一次 ``get_client`` 时创建；
    已创建的客户端不会因为再次 ``configure`` 而重建。
    """

    _instance: ClassVar[HttpClientPool | None] = None

    def __new__(cls) -> HttpClientPool:
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._clients = {}
            instance._configs = {}
            instance._lock = None
            cls._instance = instance
        return cls._instance

    def _get_lock(self) -> asyncio.Lock:
        # 锁绑定到首次使用它的事件循环
        if self._lock is None:
            self._lock = asyncio.Lock()
        return self._lock

    def configure(self, host: str, config: ClientConfig) -> None:
        """
        为主机登记客户端配置

        Args:
            host: 主机名（如 'wx.qq.com'）
            config: 客户端配置
        """
        self._configs[host] = config

    async def get_client(self, host: str | None = None) -> httpx.AsyncClient:
        """获取主机对应的客户端，不存在则按登记的配置创建"""
        key = host or _DEFAULT_KEY
        async with self._get_lock():
            client = self._clients.get(key)
            if client is None:
                config = self._configs.get(key) or ClientConfig()
                client = httpx.AsyncClient(**config.client_kwargs())
                self._clients[key] = client
                logger.debug(f"创建 HTTP 客户端: {key}")
            return client

    async def close_all(self) -> None:
        """关闭所有客户端"""
        async with self._get_lock():
            clients, self._clients = self._clients, {}
            for key, client in clients.items():
                try:
                    await client.aclose()
                except httpx.HTTPError as e:
                    logger.warning(f"关闭客户端 {key} 失败: {e}")
            if clients:
                logger.debug(f"已关闭 {len(clients)} 个 HTTP 客户端")

    @property
    def active_clients(self) -> int:
        """已创建的客户端数量"""
        return len(self._clients)

    @classmethod
    def reset(cls) -> None:
        """丢弃单例（用于测试），不关闭客户端"""
        cls._instance = None


def get_http_pool() -> HttpClientPool:
    """获取全局连接池实例"""
    return HttpClientPool()
