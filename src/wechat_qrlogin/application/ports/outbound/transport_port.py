"""HTTP传输与时钟出站端口 - 定义登录流程依赖的外部协作者"""

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class HttpTransportPort(Protocol):
    """
    HTTP传输端口

    只负责收发，返回完整响应体文本。
    实现应当无状态、可在多个登录尝试之间共享。
    """

    async def post_form(
        self,
        url: str,
        fields: Mapping[str, Any],
        timeout: float | None = None,
    ) -> str:
        """
        以表单形式 POST

        Args:
            url: 请求地址
            fields: 表单字段
            timeout: 读超时秒数（None 使用客户端默认值）

        Returns:
            响应体文本

        Raises:
            TransportError: 网络错误、超时或非成功状态码
        """
        ...

    async def get(self, url: str, timeout: float | None = None) -> str:
        """
        GET 请求（查询参数已拼接在 url 中）

        Args:
            url: 带查询串的请求地址
            timeout: 读超时秒数（None 使用客户端默认值）

        Returns:
            响应体文本

        Raises:
            TransportError: 网络错误、超时或非成功状态码
        """
        ...


@runtime_checkable
class ClockPort(Protocol):
    """时钟端口"""

    def now_millis(self) -> int:
        """当前时间（毫秒时间戳），仅用作防缓存参数"""
        ...
