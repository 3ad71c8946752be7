"""跳转地址解析"""

from __future__ import annotations

from urllib.parse import parse_qsl, urlsplit

from ...shared.exceptions import MalformedUrlError


def parse_redirect(url: str) -> dict[str, str]:
    """解析跳转地址的查询参数

    Args:
        url: 确认登录后服务端返回的跳转地址

    Returns:
        查询参数映射（重复参数以最后一个为准）；没有查询串时返回空字典

    Raises:
        MalformedUrlError: 不是带主机名的绝对URL（需要 scheme 和网络位置，
            ``mailto:`` 这类没有主机的地址也会被拒绝），或端口无效
    """
    try:
        parsed = urlsplit(url.strip())
        hostname = parsed.hostname
        # urlsplit 不校验端口，访问 port 时才会解析
        parsed.port
    except ValueError as e:
        raise MalformedUrlError(f"无法解析跳转地址: {url!r}", cause=e) from e

    if not parsed.scheme or not hostname:
        raise MalformedUrlError(f"无效的跳转地址: {url!r}", details={"url": url})

    if not parsed.query:
        return {}

    return dict(parse_qsl(parsed.query, keep_blank_values=True))
