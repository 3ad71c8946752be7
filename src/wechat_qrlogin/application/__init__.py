"""应用层

应用层负责用例编排，协调领域层和基础设施层。

包含：
- ports: 端口定义（出站）
- use_cases: 二维码签发、扫码状态轮询
- dto: 数据传输对象
"""

from . import dto, ports, use_cases

__all__ = [
    "dto",
    "ports",
    "use_cases",
]
