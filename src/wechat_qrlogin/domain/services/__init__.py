"""领域服务"""

from .login_state_machine import apply_status, read_redirect_url, read_status
from .redirect_parser import parse_redirect
from .text_protocol import text_to_map

__all__ = [
    "text_to_map",
    "parse_redirect",
    "apply_status",
    "read_status",
    "read_redirect_url",
]
