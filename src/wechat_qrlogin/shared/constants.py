"""全局常量"""

# 版本信息
VERSION = "0.3.0"
APP_NAME = "WeChat QR Login"

# 微信网页版登录
WECHAT_WEB_APP_ID = "wx782c26e4c19acffb"
WECHAT_WEB_HOST = "https://wx.qq.com"
QR_CODE_URL = f"{WECHAT_WEB_HOST}/jslogin"
QR_CODE_SCAN_RESULT_URL = f"{WECHAT_WEB_HOST}/cgi-bin/mmwebwx-bin/login"
DEFAULT_LANG = "zh_CN"
QR_FUN_NEW = "new"

# 长轮询：服务端会挂起连接直到用户操作或窗口超时
POLL_TIMEOUT = 300.0  # 秒
CONNECT_TIMEOUT = 10.0  # 秒

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# 协议字段名
FIELD_QR_CODE = "window.QRLogin.code"
FIELD_QR_UUID = "window.QRLogin.uuid"
FIELD_SCAN_CODE = "window.code"
FIELD_REDIRECT_URI = "window.redirect_uri"
FIELD_REDIRECT_URL = "window.redirect_url"  # 兼容字段名

STATUS_OK = "200"
STATUS_SCANNED = "201"

# 重定向URL中会写回会话的字段
SESSION_FIELDS = ("uuid", "lang", "scan", "ticket")

# 文件路径
LOG_FILE_NAME = "qrlogin.log"
