"""共享工具"""

from datetime import datetime, timezone

from .logger import logger, mask_sensitive, mask_ticket, setup_logger
from .url import append_query_to_url, encode_params, normalize_base_url


def utc_now() -> datetime:
    """返回当前 UTC 时间（带时区信息）"""
    return datetime.now(timezone.utc)


__all__ = [
    # Logger
    "logger",
    "setup_logger",
    "mask_sensitive",
    "mask_ticket",
    # URL
    "append_query_to_url",
    "encode_params",
    "normalize_base_url",
    # Datetime
    "utc_now",
]
