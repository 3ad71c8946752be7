"""基于 httpx 的HTTP传输适配器"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx
from loguru import logger

from ...shared.exceptions import TransportError, TransportTimeoutError
from .http_client_pool import ClientConfig, get_http_pool


class HttpxTransport:
    """
    httpx 传输适配器

    实现 HttpTransportPort：返回完整响应体文本，
    网络错误、超时和非 2xx 状态码统一转换为 TransportError。
    客户端本身无状态，可在并发的登录尝试之间共享。
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        host: str | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        """
        Args:
            client: 直接使用的客户端（可选，主要用于测试）
            host: 连接池中的主机键
            config: 该主机的客户端配置
        """
        self._client = client
        self._host = host
        self._config = config

    async def _get_client(self) -> httpx.AsyncClient:
        """获取HTTP客户端"""
        if self._client is None:
            pool = get_http_pool()
            if self._host and self._config:
                pool.configure(self._host, self._config)
            self._client = await pool.get_client(self._host)
        return self._client

    async def post_form(
        self,
        url: str,
        fields: Mapping[str, Any],
        timeout: float | None = None,
    ) -> str:
        """以表单形式 POST，返回响应体文本"""
        data = {key: str(value) for key, value in fields.items()}
        logger.debug(f"==> [{url}] form: {data}")
        return await self._send("POST", url, data=data, timeout=timeout)

    async def get(self, url: str, timeout: float | None = None) -> str:
        """GET 请求，返回响应体文本"""
        logger.debug(f"==> [{url}]")
        return await self._send("GET", url, timeout=timeout)

    async def _send(
        self,
        method: str,
        url: str,
        *,
        timeout: float | None = None,
        **kwargs: Any,
    ) -> str:
        client = await self._get_client()
        if timeout is not None:
            # 只放宽读超时，连接超时沿用客户端配置
            kwargs["timeout"] = httpx.Timeout(
                connect=client.timeout.connect,
                read=timeout,
                write=client.timeout.write,
                pool=client.timeout.pool,
            )

        try:
            resp = await client.request(method, url, **kwargs)
            resp.raise_for_status()
        except httpx.TimeoutException as e:
            raise TransportTimeoutError(
                f"请求超时: {method} {url}",
                details={"url": url, "method": method},
                cause=e,
            ) from e
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"HTTP {e.response.status_code}: {method} {url}",
                details={"url": url, "method": method, "status_code": e.response.status_code},
                cause=e,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(
                f"请求失败: {method} {url}: {e}",
                details={"url": url, "method": method},
                cause=e,
            ) from e

        text = resp.text
        logger.debug(f"<== [{url}] body: [{text}]")
        return text

    async def close(self) -> None:
        """释放客户端引用（连接池负责真正关闭）"""
        self._client = None
