"""openat CLI entrypoint.

Command-line interface for resolving 'PATH[:LINE[:COLUMN]]' arguments and
forwarding them to an already-running instance.
"""

from __future__ import annotations

import functools
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from openat.domain.config import OpenAtConfig
    from openat.domain.location import Location, OpenPaths

from openat.core.arguments import collect_locations
from openat.core.errors import (
    OpenAtCliError,
    instance_unreachable_error,
    no_socket_address_error,
)
from openat.domain.exceptions import OpenAtDomainError
from openat.ports.instance import InstanceUnreachableError, SocketInUseError
from openat.version import __version__

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def handle_cli_errors(command_name: str):
    """Decorator to handle common CLI errors.

    Click exceptions (including OpenAtCliError) propagate unchanged so they
    keep their own formatting. Domain errors, instance errors and a taken
    listen address are converted to OpenAtCliError. Anything else becomes a
    generic error, with a traceback in verbose mode.

    Args:
        command_name: Name of the command for error messages.

    Returns:
        Decorated function with error handling.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except click.ClickException:
                raise
            except (OpenAtDomainError, SocketInUseError) as e:
                raise OpenAtCliError(e.message, hint=e.hint) from e
            except InstanceUnreachableError as e:
                instance_unreachable_error(e)
            except Exception as e:
                ctx = click.get_current_context()
                if ctx.obj.get("verbose", False):
                    import traceback

                    traceback.print_exc()
                raise OpenAtCliError(
                    f"Unexpected error in {command_name}: {e}",
                    hint="Run with --verbose for more details",
                ) from e

        return wrapper

    return decorator


def _configure_logging(verbose: bool) -> None:
    """Send log records to stderr; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _load_config(ctx: click.Context) -> OpenAtConfig:
    """Load configuration once per invocation.

    Args:
        ctx: Click context holding the --config path.

    Returns:
        OpenAtConfig with merged global and explicit settings.
    """
    if "config" not in ctx.obj:
        from openat.adapters.factory import ConfigFactory

        provider = ConfigFactory().create_config_provider()
        ctx.obj["config"] = provider.load(ctx.obj.get("config_path"))
    return ctx.obj["config"]


def _echo_locations(locations: list[Location], as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps([loc.to_dict() for loc in locations], indent=2))
        return
    for location in locations:
        click.echo(str(location))


def _report_sent(open_paths: OpenPaths, dropped: int) -> None:
    click.echo(
        f"✓ Sent {len(open_paths.folders)} folder(s) and "
        f"{len(open_paths.files)} file(s) to the running instance"
    )
    if dropped:
        click.echo(f"  • Skipped {dropped} path(s) that do not exist", err=True)


@click.group()
@click.version_option(version=__version__, prog_name="openat")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Suppress non-essential output.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file overriding the global config.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, config_path: Path | None) -> None:
    """openat - open PATH[:LINE[:COLUMN]] arguments.

    Resolves file:line:column arguments against the filesystem and forwards
    them to an already-running instance.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = config_path
    _configure_logging(verbose)


@cli.command()
@click.argument("arguments", nargs=-1, required=True)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    help="Print locations as a JSON array.",
)
@click.pass_context
@handle_cli_errors("resolve")
def resolve(ctx: click.Context, arguments: tuple[str, ...], as_json: bool) -> None:
    """Resolve PATH[:LINE[:COLUMN]] arguments and print them.

    A '+LINE' argument applies to the path that follows it.
    """
    config = _load_config(ctx)
    locations = collect_locations(arguments)
    _echo_locations(locations, as_json or config.output.format == "json")


@cli.command(name="open")
@click.argument("arguments", nargs=-1, required=True)
@click.option(
    "--no-instance",
    is_flag=True,
    help="Do not forward to a running instance; only print locations.",
)
@click.pass_context
@handle_cli_errors("open")
def open_paths(ctx: click.Context, arguments: tuple[str, ...], no_instance: bool) -> None:
    """Open paths in an already-running instance.

    Fails with a non-zero exit code when no instance can be reached.
    """
    from openat.adapters.factory import InstanceFactory

    config = _load_config(ctx)
    locations = collect_locations(arguments)

    if no_instance or not config.instance.enabled:
        _echo_locations(locations, config.output.format == "json")
        return

    notifier = InstanceFactory(config).create_notifier()
    sent = notifier.notify(locations)

    if not ctx.obj.get("quiet", False):
        _report_sent(sent, dropped=len(locations) - sent.total)


@cli.command()
@click.option(
    "--count",
    type=click.IntRange(min=1),
    default=None,
    help="Exit after receiving this many notifications.",
)
@click.pass_context
@handle_cli_errors("listen")
def listen(ctx: click.Context, count: int | None) -> None:
    """Receive paths sent by 'openat open' and print them."""
    from openat.adapters.factory import InstanceFactory

    config = _load_config(ctx)
    factory = InstanceFactory(config)
    socket_path = factory.create_socket_locator().local_socket()
    if socket_path is None:
        no_socket_address_error()

    def print_open_paths(received: OpenPaths) -> None:
        for folder in received.folders:
            click.echo(f"folder\t{folder}")
        for file in received.files:
            click.echo(f"file\t{file}")

    listener = factory.create_listener(socket_path, print_open_paths, max_messages=count)
    if not ctx.obj.get("quiet", False):
        click.echo(f"Listening on {socket_path}", err=True)
    listener.run()


@cli.command(name="socket")
@click.pass_context
@handle_cli_errors("socket")
def show_socket(ctx: click.Context) -> None:
    """Print the local socket path."""
    from openat.adapters.factory import InstanceFactory

    config = _load_config(ctx)
    path = InstanceFactory(config).create_socket_locator().local_socket()
    if path is None:
        no_socket_address_error()
    click.echo(str(path))


@cli.group(name="config")
def config_group() -> None:
    """Manage configuration."""
    pass


@config_group.command(name="show")
@click.pass_context
@handle_cli_errors("config show")
def config_show(ctx: click.Context) -> None:
    """Show config file locations and effective settings."""
    from openat.shared.config_io import get_global_config_path

    global_path = get_global_config_path()
    status = "exists" if global_path.exists() else "not found"
    click.echo(f"Global config: {global_path} ({status})")

    config_path = ctx.obj.get("config_path")
    if config_path is not None:
        status = "exists" if config_path.exists() else "not found"
        click.echo(f"Config: {config_path} ({status})")

    effective = _load_config(ctx)
    click.echo("\nEffective settings:")
    click.echo(f"  instance.enabled = {str(effective.instance.enabled).lower()}")
    click.echo(f"  instance.socket_path = {effective.instance.socket_path or '(default)'}")
    click.echo(f"  output.format = {effective.output.format}")


@config_group.command(name="init")
@click.option("--force", is_flag=True, help="Overwrite an existing config file.")
@click.pass_context
@handle_cli_errors("config init")
def config_init(ctx: click.Context, force: bool) -> None:
    """Write a config file with default settings."""
    from openat.domain.config import OpenAtConfig
    from openat.shared.config_io import get_global_config_path, save_config

    path = ctx.obj.get("config_path") or get_global_config_path()
    if path.exists() and not force:
        raise OpenAtCliError(
            f"Config file already exists: {path}",
            hint="Use --force to overwrite it",
        )

    save_config(OpenAtConfig.default(), path)
    click.echo(f"Created config at {path}")


def main() -> int:
    """Main entrypoint for the CLI."""
    try:
        cli(obj={})
        return 0
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
