"""跨平台路径管理

遵循各平台标准路径规范（基于 platformdirs）：
- Windows: AppData/Local
- macOS: ~/Library/Application Support
- Linux: ~/.local/share (XDG规范)
"""

from __future__ import annotations

from pathlib import Path

import platformdirs

# 应用标识
APP_NAME = "WechatQRLogin"
APP_AUTHOR = "WechatQRLogin"


def get_data_dir() -> Path:
    """获取数据目录"""
    data_dir = Path(platformdirs.user_data_dir(APP_NAME, APP_AUTHOR))
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def get_log_dir() -> Path:
    """获取日志目录"""
    log_dir = get_data_dir() / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir
