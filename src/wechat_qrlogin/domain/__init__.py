"""
领域层 - 扫码登录核心逻辑

领域层包含：
- entities: 登录会话
- value_objects: 登录状态
- services: 文本协议解析、跳转地址解析、登录状态机

依赖规则：领域层不依赖任何外部层
"""

from .entities import LoginSession
from .services import apply_status, parse_redirect, text_to_map
from .value_objects import LoginState

__all__ = [
    # Entities
    "LoginSession",
    # Value Objects
    "LoginState",
    # Services
    "text_to_map",
    "parse_redirect",
    "apply_status",
]
