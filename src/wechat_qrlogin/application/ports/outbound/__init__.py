"""出站端口 - 定义应用层依赖的外部服务接口"""

from .transport_port import ClockPort, HttpTransportPort

__all__ = [
    "HttpTransportPort",
    "ClockPort",
]
