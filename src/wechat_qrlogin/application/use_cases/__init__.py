"""应用用例"""

from .poll_login_status import PollLoginStatusUseCase
from .retrieve_qr_code import RetrieveQrCodeUseCase

__all__ = [
    "RetrieveQrCodeUseCase",
    "PollLoginStatusUseCase",
]
