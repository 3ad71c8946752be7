"""值对象"""

from .login_state import LoginState

__all__ = ["LoginState"]
