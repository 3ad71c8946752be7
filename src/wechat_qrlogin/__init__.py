"""微信网页版扫码登录客户端

两阶段握手：
1. 向签发接口申请一次性登录 uuid（展示为二维码/登录地址）
2. 长轮询扫码状态接口，直到用户在手机上扫码并确认，
   从跳转地址中取得 ticket/uuid/lang/scan

架构：
- 领域驱动设计 (DDD) + 六边形架构 (Hexagonal Architecture)
- 传输层基于 httpx，可替换

使用方式：
    python -m wechat_qrlogin login
    python -m wechat_qrlogin decode 'window.code=201;'
"""

from .shared.constants import APP_NAME, VERSION

__version__ = VERSION
__app_name__ = APP_NAME

__all__ = ["__version__", "__app_name__"]
