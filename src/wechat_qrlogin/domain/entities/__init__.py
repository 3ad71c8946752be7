"""领域实体"""

from .session import LoginSession

__all__ = ["LoginSession"]
