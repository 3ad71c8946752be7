"""URL 工具"""

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode


def _encode_value(value: Any) -> str:
    # bool 需在 int 之前判断
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_params(params: Mapping[str, Any]) -> str:
    """将参数编码为 query string / 表单体（保持参数顺序）"""
    return urlencode([(key, _encode_value(value)) for key, value in params.items()])


def append_query_to_url(url: str, params: Mapping[str, Any]) -> str:
    """将查询参数追加到URL

    参数为空时原样返回；URL 已带查询串时用 ``&`` 连接。
    """
    query = encode_params(params)
    if not query:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{query}"


def normalize_base_url(url: str) -> str:
    """标准化基础URL"""
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    return url.rstrip("/")
