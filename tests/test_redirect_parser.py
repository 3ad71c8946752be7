"""跳转地址解析测试"""

import pytest

from wechat_qrlogin.domain.services import parse_redirect
from wechat_qrlogin.shared.exceptions import MalformedUrlError


class TestParseRedirect:
    """parse_redirect 测试"""

    @pytest.mark.unit
    def test_confirmed_redirect(self, redirect_url: str) -> None:
        """测试解析确认登录的跳转地址"""
        assert parse_redirect(redirect_url) == {
            "ticket": "AVTK4m8A8ThyfrYZKuoHiY6i@qrticket_0",
            "uuid": "YZeXOrjTMw==",
            "lang": "zh_CN",
            "scan": "1648884679",
        }

    @pytest.mark.unit
    def test_no_query(self) -> None:
        """测试没有查询串时返回空字典"""
        assert parse_redirect("https://wx.qq.com/cgi-bin/mmwebwx-bin/webwxnewloginpage") == {}
        assert parse_redirect("https://wx.qq.com/path?") == {}

    @pytest.mark.unit
    def test_duplicate_parameter_last_wins(self) -> None:
        """测试重复参数以最后一个为准"""
        assert parse_redirect("https://wx.qq.com/?ticket=A&ticket=B") == {"ticket": "B"}

    @pytest.mark.unit
    def test_blank_values_kept(self) -> None:
        """测试保留空值参数"""
        assert parse_redirect("https://wx.qq.com/?scan=&ticket=T") == {"scan": "", "ticket": "T"}

    @pytest.mark.unit
    def test_percent_decoding(self) -> None:
        """测试参数值被解码"""
        assert parse_redirect("https://wx.qq.com/?uuid=YZeXOrjTMw%3D%3D") == {"uuid": "YZeXOrjTMw=="}

    @pytest.mark.unit
    def test_surrounding_whitespace(self) -> None:
        """测试首尾空白被忽略"""
        assert parse_redirect("  https://wx.qq.com/?a=1 ") == {"a": "1"}

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "url",
        [
            "not a url",
            "",
            "/cgi-bin/mmwebwx-bin/webwxnewloginpage?ticket=T",
            "wx.qq.com/?ticket=T",
            "http://[::1",
            "mailto:x@y",
            "https://:80/?ticket=T",
        ],
    )
    def test_malformed_url(self, url: str) -> None:
        """测试非法地址抛出 MalformedUrlError"""
        with pytest.raises(MalformedUrlError):
            parse_redirect(url)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "url",
        ["https://host:99999/p?ticket=T", "https://wx.qq.com:abc/?ticket=T"],
    )
    def test_invalid_port(self, url: str) -> None:
        """测试端口无效时抛出 MalformedUrlError"""
        with pytest.raises(MalformedUrlError):
            parse_redirect(url)
