"""日志配置 - 基于Loguru

- 每次登录尝试分配一个 request_id，经 patcher 写入每条记录的 extra
- ticket 等凭据在日志和输出中脱敏
- 控制台输出到 stderr，文件日志按大小轮转
"""

import sys
import uuid
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from loguru import logger

from ..constants import LOG_FILE_NAME

_request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<magenta>{extra[request_id]}</magenta> | <level>{message}</level>"
)
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {extra[request_id]} | {name}:{line} - {message}"


def mask_sensitive(value: str, visible_chars: int = 4) -> str:
    """
    脱敏处理敏感信息

    Examples:
        >>> mask_sensitive("ARD37_ikx-Kakd2i0W@qrticket_0")
        'ARD3***et_0'
        >>> mask_sensitive("short")
        '***'
    """
    if len(value) <= visible_chars * 2:
        return "***"
    return f"{value[:visible_chars]}***{value[-visible_chars:]}"


def mask_ticket(ticket: str) -> str:
    """登录 ticket 脱敏，未取得时返回占位文本"""
    if not ticket:
        return "[未获取]"
    return mask_sensitive(ticket)


def _patch_request_id(record: dict) -> None:
    record["extra"].setdefault("request_id", _request_id_var.get() or "-")


def setup_logger(
    level: str = "INFO",
    log_to_file: bool = True,
    log_dir: Path | None = None,
    json_format: bool = False,
    rotation: str = "10 MB",
    retention: str = "30 days",
    compression: str = "zip",
) -> None:
    """
    配置日志

    Args:
        level: 控制台日志级别 (DEBUG, INFO, WARNING, ERROR)
        log_to_file: 是否写入文件（文件始终记录 DEBUG，包含完整的收发报文）
        log_dir: 日志目录，默认使用平台标准数据目录
        json_format: 控制台输出 JSON（便于日志收集系统）
        rotation: 轮转策略 (例如 "10 MB", "1 day")
        retention: 保留时间 (例如 "30 days", "5 files")
        compression: 轮转后的压缩格式
    """
    logger.remove()
    logger.configure(patcher=_patch_request_id)

    if json_format:
        logger.add(sys.stderr, level=level, format="{message}", serialize=True)
    else:
        logger.add(sys.stderr, level=level, format=_CONSOLE_FORMAT, colorize=True)

    if not log_to_file:
        return

    if log_dir is None:
        from ...infrastructure.config.paths import get_log_dir

        log_dir = get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_dir / LOG_FILE_NAME,
        level="DEBUG",
        format=_FILE_FORMAT,
        rotation=rotation,
        retention=retention,
        compression=compression,
        encoding="utf-8",
        enqueue=True,
    )


# -------------------- Request ID 追踪 --------------------

def set_request_id(request_id: str | None = None) -> str:
    """为当前登录尝试设置 request_id，不传则随机生成 8 位"""
    if request_id is None:
        request_id = uuid.uuid4().hex[:8]
    _request_id_var.set(request_id)
    return request_id


def get_request_id() -> str | None:
    return _request_id_var.get()


def clear_request_id() -> None:
    _request_id_var.set(None)


# -------------------- 结构化日志记录 --------------------

def log_event(event: str, level: str = "INFO", **fields: Any) -> None:
    """
    记录结构化事件

    事件属性放入 extra，消息本身不经过 str.format，
    服务端返回的花括号可以原样写入。

    Examples:
        log_event("qr_issued", uuid="AZJIzIcS5g==")
    """
    message = f"[{event}] " + " ".join(f"{key}={value}" for key, value in fields.items())
    logger.bind(event=event, **fields).log(level.upper(), message)


def log_qr_issued(uuid: str, login_url: str) -> None:
    """二维码签发"""
    log_event("qr_issued", uuid=uuid, login_url=login_url)


def log_state_change(uuid: str, old_tip: int, new_tip: int) -> None:
    """登录状态迁移：进入 0 为已扫码，进入 -1 为已确认"""
    event = "login_confirmed" if new_tip < 0 else "login_scanned"
    log_event(event, uuid=uuid, old_tip=old_tip, new_tip=new_tip)


def log_poll(uuid: str, tip: int, status: str, duration_ms: int) -> None:
    """单次轮询结果（DEBUG）"""
    log_event(
        "login_polled",
        level="DEBUG",
        uuid=uuid,
        tip=tip,
        status=status or "<empty>",
        duration_ms=duration_ms,
    )


__all__ = [
    "logger",
    "setup_logger",
    "mask_sensitive",
    "mask_ticket",
    "set_request_id",
    "get_request_id",
    "clear_request_id",
    "log_event",
    "log_qr_issued",
    "log_state_change",
    "log_poll",
]
