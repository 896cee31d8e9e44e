"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.
서브명령 없이 실행하면 전체 화면 리소스 브라우저를 시작합니다.

명령어 구조:
    a9s                         # 브라우저 시작
    a9s -p dev -r eu-west-1     # 프로파일/리전 지정
    a9s -R ec2                  # EC2 목록으로 바로 시작
    a9s --select-profile        # 시작 전 프로파일 선택
    a9s --version               # 버전 표시
    a9s version                 # 버전 표시
    a9s resources               # 사용 가능한 리소스 목록

로깅:
    브라우저 실행 중에는 화면이 깨지지 않도록 로그를 파일(~/.a9s/a9s.log)로만 기록하고,
    서브명령 실행 시에는 Rich 핸들러로 콘솔에 출력합니다.

Usage:
    $ a9s
    $ python -m cli.app
"""

from __future__ import annotations

import logging
from pathlib import Path

import boto3
import click
import questionary
from click import Context

from cli.i18n import set_lang, t
from cli.ui.browser import BrowserView
from cli.ui.console import get_console_handler, print_error, print_info, print_table, print_warning
from core.browser import RESERVED_KEYS, BrowserController
from core.client import AWSClient
from core.config import LogConfig, get_version, load_browser_config, settings
from core.exceptions import ClientConfigError, ConfigError, UnknownResourceError
from core.resources import Registry, default_registry

logger = logging.getLogger(__name__)

VERSION = get_version()


# =============================================================================
# 로깅
# =============================================================================


def setup_logging(debug: bool = False, to_file: bool = False) -> Path | None:
    """루트 로거 설정

    Args:
        debug: DEBUG 레벨 사용
        to_file: 파일로만 기록 (전체 화면 UI 실행 시)

    Returns:
        파일로 기록하는 경우 로그 파일 경로
    """
    log_config = LogConfig.from_env()
    level = logging.DEBUG if debug else getattr(logging, log_config.level, logging.INFO)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)

    log_path: Path | None = None
    if to_file and log_config.file is not None:
        log_path = log_config.file
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(log_config.format, datefmt=log_config.date_format))
        handler.setLevel(level)
    else:
        # 콘솔에는 경고 이상만 (debug 시 전체)
        handler = get_console_handler(level if debug else logging.WARNING)
    root.addHandler(handler)
    return log_path


# =============================================================================
# 프로파일 선택
# =============================================================================


def pick_profile() -> str | None:
    """설정된 프로파일 중 하나를 대화형으로 선택

    Returns:
        선택한 프로파일 (프로파일이 없으면 None)

    Raises:
        click.Abort: 사용자가 취소한 경우
    """
    profiles = sorted(boto3.Session().available_profiles)
    if not profiles:
        print_warning(t("cli.no_profiles"))
        return None

    choice = questionary.select(t("cli.select_profile_prompt"), choices=profiles).ask()
    if choice is None:
        raise click.Abort()
    return choice


# =============================================================================
# 브라우저 실행
# =============================================================================


def build_registry() -> Registry:
    return default_registry(reserved_keys=RESERVED_KEYS)


def run_browser(
    profile: str | None,
    region: str | None,
    resource: str | None,
    auto_refresh: bool,
    refresh_interval: int,
    lang: str,
) -> None:
    """AWS client를 만들고 브라우저 루프를 실행

    Raises:
        SystemExit: client 초기화 실패 또는 알 수 없는 시작 리소스 (exit code 1)
    """
    registry = build_registry()
    if resource:
        try:
            registry.require(resource)
        except UnknownResourceError as e:
            print_error(t("cli.unknown_resource", key=e.key))
            raise SystemExit(1) from e

    try:
        client = AWSClient(profile=profile, region=region)
    except ClientConfigError as e:
        print_error(t("cli.client_init_failed", error=e))
        raise SystemExit(1) from e

    view = BrowserView(lang=lang)
    controller = BrowserController(
        registry,
        client,
        view,
        auto_refresh=auto_refresh,
        refresh_interval=refresh_interval,
        lang=lang,
    )
    if resource:
        controller.select(resource)

    logger.info("브라우저 시작: %r, auto_refresh=%s", client, auto_refresh)
    view.run(controller)
    logger.info("브라우저 종료")


# =============================================================================
# Click 명령어
# =============================================================================


@click.group(invoke_without_command=True)
@click.version_option(VERSION, prog_name="a9s")
@click.option("-p", "--profile", default=None, help=t("cli.help_profile"))
@click.option("-r", "--region", default=None, help=t("cli.help_region"))
@click.option("-R", "--resource", default=None, help=t("cli.help_resource"))
@click.option("--no-auto-refresh", is_flag=True, help=t("cli.help_no_auto_refresh"))
@click.option("--lang", type=click.Choice(list(settings.SUPPORTED_LANGS)), default=None, help=t("cli.help_lang"))
@click.option("--select-profile", is_flag=True, help=t("cli.help_select_profile"))
@click.option("--debug", is_flag=True, help=t("cli.help_debug"))
@click.pass_context
def cli(
    ctx: Context,
    profile: str | None,
    region: str | None,
    resource: str | None,
    no_auto_refresh: bool,
    lang: str | None,
    select_profile: bool,
    debug: bool,
) -> None:
    """a9s - AWS Resource Browser"""
    try:
        config = load_browser_config()
    except ConfigError as e:
        print_error(t("cli.config_error", error=e))
        raise SystemExit(1) from e

    lang = lang or config.lang
    set_lang(lang)

    if ctx.invoked_subcommand is not None:
        setup_logging(debug=debug)
        return

    if select_profile:
        profile = pick_profile() or profile

    log_path = setup_logging(debug=debug, to_file=True)
    run_browser(
        profile=profile,
        region=region,
        resource=resource or config.start_resource,
        auto_refresh=config.auto_refresh and not no_auto_refresh,
        refresh_interval=config.refresh_interval,
        lang=lang,
    )
    if debug and log_path is not None:
        print_info(t("cli.log_file", path=log_path))


cli.help = t("cli.help_intro")


@cli.command("version", help=t("cli.help_version"))
def version_command() -> None:
    click.echo(t("cli.version_line", version=VERSION))


@cli.command("resources", help=t("cli.help_resources"))
def resources_command() -> None:
    """사용 가능한 리소스 목록

    \b
    Examples:
        a9s resources
    """
    registry = build_registry()
    rows = [
        [key, resource.name, ", ".join(f"{a.key}: {a.label}" for a in resource.quick_actions())]
        for key, resource in registry
    ]
    print_table(
        t("cli.resources_title"),
        [t("cli.col_key"), t("cli.col_name"), t("cli.col_actions")],
        rows,
    )


if __name__ == "__main__":
    cli()
