"""微信网页版扫码登录 - 主入口点

python -m wechat_qrlogin <command> [args]
"""

from .presentation.cli import run_cli


def main() -> None:
    """主入口函数"""
    run_cli()


if __name__ == "__main__":
    main()
