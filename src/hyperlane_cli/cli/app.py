"""
hyperlane CLI — 命令行工具入口。

提供 core 命令组下的 configure / deploy / read 子命令。

用法::

    hyperlane --help
    hyperlane core configure --ismAdvanced
    hyperlane core deploy --chain sepolia --config ./configs/core-config.yaml
    hyperlane core deploy --dry-run sepolia --from-address 0x...
    hyperlane core read --chain sepolia --mailbox 0x...
"""

from __future__ import annotations

import typer

from hyperlane_cli.cli.options import (
    DEFAULT_CORE_CONFIG_PATH,
    GlobalOptions,
    chain_option,
    dry_run_option,
    from_address_option,
    get_global_options,
    output_file_option,
)
from hyperlane_cli.logger import configure_logging, create_console

# 创建主应用
app = typer.Typer(
    name="hyperlane",
    help="Hyperlane CLI — 管理跨链消息核心合约与配置",
    add_completion=False,
    no_args_is_help=True,
)

core_app = typer.Typer(
    name="core",
    help="Manage core Hyperlane contracts & configs",
    no_args_is_help=True,
)
app.add_typer(core_app, name="core")

console = create_console()


@app.callback()
def main_callback(
    ctx: typer.Context,
    registry: str | None = typer.Option(
        None,
        "--registry",
        envvar="HYP_REGISTRY",
        help="本地 Registry 目录（默认 ~/.hyperlane）",
    ),
    key: str | None = typer.Option(
        None,
        "--key",
        envvar="HYP_KEY",
        help="签名私钥（也可通过环境变量 HYP_KEY 提供）",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="跳过所有确认步骤",
    ),
    verbosity: str = typer.Option(
        "info",
        "--verbosity",
        help="日志级别：debug / info / warning / error",
    ),
) -> None:
    """Hyperlane CLI — 管理跨链消息核心合约与配置。"""
    try:
        configure_logging(verbosity)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--verbosity") from e
    ctx.obj = GlobalOptions(registry=registry, key=key, yes=yes, verbosity=verbosity)


# ============================================================
# core 子命令注册
# ============================================================


@core_app.command(name="configure")
def configure(
    ctx: typer.Context,
    ism_advanced: bool = typer.Option(
        False,
        "--ismAdvanced",
        help="Create an advanced ISM & hook configuration",
    ),
    config: str = output_file_option(
        DEFAULT_CORE_CONFIG_PATH,
        "The path to output a Core Config JSON or YAML file.",
    ),
) -> None:
    """Create a core configuration, including ISMs and hooks."""
    from hyperlane_cli.cli.cmd_configure import configure_command
    configure_command(get_global_options(ctx), ism_advanced=ism_advanced, config=config)


@core_app.command(name="deploy")
def deploy(
    ctx: typer.Context,
    chain: str | None = chain_option(),
    config: str = output_file_option(
        DEFAULT_CORE_CONFIG_PATH,
        "The path to a JSON or YAML file with a core deployment config.",
    ),
    dry_run: str | None = dry_run_option(),
    from_address: str | None = from_address_option(),
) -> None:
    """Deploy Hyperlane contracts."""
    from hyperlane_cli.cli.cmd_deploy import deploy_command
    deploy_command(
        get_global_options(ctx),
        chain=chain,
        config=config,
        dry_run=dry_run,
        from_address=from_address,
    )


@core_app.command(name="read")
def read(
    ctx: typer.Context,
    chain: str = chain_option(required=True),
    mailbox: str = typer.Option(
        ...,
        "--mailbox",
        help="Mailbox address used to derive the core config",
    ),
    config: str = output_file_option(
        DEFAULT_CORE_CONFIG_PATH,
        "The path to output a Core Config JSON or YAML file.",
    ),
) -> None:
    """Reads onchain ISM & Hook configurations for given addresses."""
    from hyperlane_cli.cli.cmd_read import read_command
    read_command(get_global_options(ctx), chain=chain, mailbox=mailbox, config=config)


@app.command(name="version")
def version() -> None:
    """显示版本信息。"""
    from hyperlane_cli import __version__
    console.print(f"Hyperlane CLI v{__version__}")


# ============================================================
# CLI 入口点
# ============================================================

def main() -> None:
    """CLI 入口点。"""
    app()


if __name__ == "__main__":
    main()
