"""``key = value;`` 文本协议解析

微信网页版登录接口返回的不是 JSON，而是一段 JS 赋值语句，例如::

    window.QRLogin.code = 200; window.QRLogin.uuid = "AZJIzIcS5g==";
    window.code=200;
    window.redirect_uri="https://wx.qq.com/...";

二维码签发和扫码状态两个接口共用这一格式。
"""

from __future__ import annotations

import re

_SECTION_SEPARATOR = ";"
_ASSIGNMENT = re.compile(r"\s*=\s*")

# 服务端偶尔在片段开头输出字面量 "\n"（反斜杠 + n，而不是换行符）
_ESCAPED_NEWLINE = "\\n"


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def text_to_map(text: str) -> dict[str, str]:
    """将响应文本解析为 {字段名: 值} 映射

    - 按 ``;`` 切分，第一个字段之前的空片段忽略
    - 片段开头的字面量 ``\\n`` 会被去掉
    - 之后遇到空片段或不含 ``=`` 的片段即停止解析，其后内容视为无法解释
    - 值两端成对的双引号去掉一层
    - 重复字段以后出现的为准

    从不抛出异常；字段是否齐全由调用方判断。

    Examples:
        >>> text_to_map('window.QRLogin.code = 200; window.QRLogin.uuid = "AZJIzIcS5g==";')
        {'window.QRLogin.code': '200', 'window.QRLogin.uuid': 'AZJIzIcS5g=='}
        >>> text_to_map("window.code=201;")
        {'window.code': '201'}
    """
    result: dict[str, str] = {}

    for raw_section in text.split(_SECTION_SEPARATOR):
        section = raw_section.strip()
        if section.startswith(_ESCAPED_NEWLINE):
            section = section[len(_ESCAPED_NEWLINE):].strip()
        if not section and not result:
            continue

        parts = _ASSIGNMENT.split(section, maxsplit=1)
        if len(parts) < 2:
            break

        key, value = parts
        result[key] = _strip_quotes(value)

    return result
