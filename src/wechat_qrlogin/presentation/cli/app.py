"""CLI主应用 - 基于Click和Rich"""

from __future__ import annotations

import asyncio
import json
import sys

import click
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from ...application.dto import LoginResult
from ...domain.services import parse_redirect, text_to_map
from ...domain.value_objects import LoginState
from ...infrastructure.config import Container, get_container, get_settings
from ...shared.constants import VERSION
from ...shared.exceptions import QRLoginError
from ...shared.utils import mask_ticket, setup_logger
from ...shared.utils.logger import clear_request_id, set_request_id

console = Console()
err_console = Console(stderr=True)


async def _login(
    container: Container,
    max_polls: int | None,
    poll_timeout: float | None,
    out: Console,
) -> LoginResult:
    """签发二维码并轮询直到确认登录"""
    session = container.new_session()
    issuer = container.retrieve_qr_code_use_case(session)
    poller = container.poll_use_case(session, poll_timeout=poll_timeout)

    try:
        out.print("[yellow]正在获取登录二维码...[/yellow]")
        qr = await issuer.issue()

        out.print()
        out.print(Panel(
            f"[bold]请在手机微信中打开以下地址并确认登录[/bold]\n\n"
            f"登录地址: {qr.login_url}\n"
            f"[dim]uuid: {qr.uuid}[/dim]",
            title="登录二维码",
            border_style="blue",
        ))

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=out,
        ) as progress:
            task = progress.add_task(LoginState.AWAITING_SCAN.label, total=None)
            async for state in poller.iter_polls(max_polls):
                if state is LoginState.SCANNED:
                    progress.update(task, description=f"[yellow]{state.label}[/yellow]")
                elif state is LoginState.CONFIRMED:
                    progress.update(task, description=f"[green]{state.label}[/green]")
                else:
                    progress.update(task, description=state.label)

        return poller.result()
    finally:
        await container.aclose()


@click.group()
@click.version_option(VERSION, prog_name="wechat-qrlogin")
@click.option("--debug", is_flag=True, help="启用调试模式")
def cli(debug: bool):
    """微信网页版扫码登录 - 命令行工具"""
    try:
        settings = get_settings()
    except QRLoginError as e:
        err_console.print(f"[red]{e}[/red]")
        sys.exit(1)
    log_level = "DEBUG" if debug or settings.debug else settings.log_level
    setup_logger(level=log_level, log_to_file=settings.log_to_file)


@cli.command()
@click.option("--max-polls", type=click.IntRange(min=1), default=None, help="最大轮询次数（默认不限）")
@click.option("--timeout", "poll_timeout", type=click.FloatRange(min=0, min_open=True), default=None, help="单次轮询等待上限（秒）")
@click.option("--json", "as_json", is_flag=True, help="以 JSON 输出登录结果")
@click.option("--show-ticket", is_flag=True, help="显示完整 ticket（默认脱敏）")
def login(max_polls: int | None, poll_timeout: float | None, as_json: bool, show_ticket: bool):
    """
    扫码登录微信网页版

    示例:
        wechat-qrlogin login
        wechat-qrlogin login --max-polls 3 --json
    """
    container = get_container()
    if max_polls is None:
        max_polls = container.settings.login.max_polls

    # JSON 模式下交互信息走 stderr，stdout 只输出结果
    out = err_console if as_json else console

    set_request_id()
    try:
        result = asyncio.run(_login(container, max_polls, poll_timeout, out))
    except QRLoginError as e:
        out.print(f"[red]登录失败: {e}[/red]")
        sys.exit(1)
    except KeyboardInterrupt:
        out.print("[yellow]已取消登录[/yellow]")
        sys.exit(130)
    finally:
        clear_request_id()

    if as_json:
        data = result.to_dict()
        if not show_ticket:
            data["ticket"] = mask_ticket(result.ticket)
        click.echo(json.dumps(data, ensure_ascii=False))
        return

    _display_result(result, show_ticket=show_ticket)


@cli.command()
@click.argument("text", required=False)
@click.option("--file", "-f", "input_file", type=click.File("r", encoding="utf-8"), help="从文件读取响应体（- 表示标准输入）")
def decode(text: str | None, input_file):
    """
    解析登录接口的 ``key = value;`` 响应体

    示例:
        wechat-qrlogin decode 'window.code=201;'
    """
    if input_file is not None:
        text = input_file.read()
    if text is None:
        raise click.UsageError("需要提供 TEXT 参数或 --file")

    fields = text_to_map(text)
    if not fields:
        console.print("[yellow]没有解析出任何字段[/yellow]")
        return

    table = Table(title="响应字段")
    table.add_column("字段", style="cyan")
    table.add_column("值", style="green")
    for key, value in fields.items():
        table.add_row(key, value)
    console.print(table)


@cli.command()
@click.argument("url")
def redirect(url: str):
    """
    解析确认登录后的跳转地址

    示例:
        wechat-qrlogin redirect 'https://wx.qq.com/cgi-bin/mmwebwx-bin/webwxnewloginpage?ticket=T&uuid=U&lang=zh_CN&scan=1'
    """
    try:
        params = parse_redirect(url)
    except QRLoginError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    table = Table(title="跳转参数")
    table.add_column("参数", style="cyan")
    table.add_column("值", style="green")
    for key, value in params.items():
        table.add_row(key, value)
    console.print(table)


def _display_result(result: LoginResult, show_ticket: bool = False) -> None:
    """显示登录结果"""
    ticket = result.ticket if show_ticket else mask_ticket(result.ticket)
    info_text = f"""[bold]ticket:[/bold] {ticket}
[bold]uuid:[/bold] {result.uuid}
[bold]lang:[/bold] {result.lang}
[bold]scan:[/bold] {result.scan}
[bold]轮询次数:[/bold] {result.polls}"""

    console.print(Panel(info_text, title="✓ 登录成功", border_style="green"))


def run_cli():
    """运行CLI"""
    cli()


if __name__ == "__main__":
    run_cli()
