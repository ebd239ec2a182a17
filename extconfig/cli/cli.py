"""extconfig CLI - inspect extension discovery and load order.

Usage:
    extconfig available          - List every discovered extension
    extconfig enabled            - List enabled extensions in load order
    extconfig locate NAME        - Show where an extension lives
    extconfig paths              - Show the extension search paths
"""

import sys
from pathlib import Path

import click

from extconfig.config import Settings, PathSettings, EnvironmentSettings
from extconfig.core.configuration import ExtensionConfiguration
from extconfig.core.errors import ConfigError, ExtConfigError, format_exception_chain
from extconfig.core.logging import setup_logging


def _build_configuration(ctx: click.Context) -> ExtensionConfiguration:
    """Create the configuration lazily so --help never scans anything."""
    opts = ctx.obj
    if "configuration" not in opts:
        settings = Settings(
            paths=PathSettings(app_root=opts["app_root"], install_root=opts["install_root"]),
            environment=EnvironmentSettings(name=opts["env"] or ""),
        )
        if opts["extensions"] is not None:
            settings.extensions.requested = [
                name.strip() for name in opts["extensions"].split(",") if name.strip()
            ]
        if opts["ignore"]:
            settings.extensions.ignored = list(settings.extensions.ignored) + list(opts["ignore"])
        if opts["no_packages"]:
            settings.extensions.scan_packages = False
        if opts["log_level"]:
            settings.log.level = opts["log_level"].upper()

        try:
            settings.check()
        except ConfigError as e:
            click.echo(format_exception_chain(e), err=True)
            sys.exit(2)

        setup_logging(
            level=settings.log.level,
            format_type=settings.log.format,
            log_dir=settings.log.log_dir,
            file_enabled=settings.log.file_enabled,
            console_enabled=settings.log.console_enabled,
        )

        opts["configuration"] = ExtensionConfiguration.from_settings(
            settings,
            extension_paths=opts["paths"] or None,
        )
    return opts["configuration"]


@click.group()
@click.version_option(version="1.0.0", prog_name="extconfig")
@click.option("--env", help="Environment name (default: EXTCONFIG_ENV or APP_ENV)")
@click.option("--app-root", type=click.Path(path_type=Path), help="Application root directory")
@click.option("--install-root", type=click.Path(path_type=Path), help="CMS installation root directory")
@click.option("--extensions", "-e", help="Comma separated load order, may include 'all'")
@click.option("--ignore", "-i", multiple=True, help="Extension to ignore (repeatable)")
@click.option("--path", "-p", "paths", multiple=True, type=click.Path(path_type=Path),
              help="Extension search path (repeatable, replaces the defaults)")
@click.option("--no-packages", is_flag=True, help="Do not scan installed packages")
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
@click.pass_context
def cli(ctx, env, app_root, install_root, extensions, ignore, paths, no_packages, log_level):
    """extconfig - Extension discovery and load order.

    Finds vendored and packaged extensions and shows which ones the
    application is configured to load, and in what order.
    """
    ctx.ensure_object(dict)
    ctx.obj.update(
        env=env,
        app_root=app_root,
        install_root=install_root,
        extensions=extensions,
        ignore=ignore,
        paths=list(paths),
        no_packages=no_packages,
        log_level=log_level,
    )


@cli.command()
@click.pass_context
def available(ctx):
    """List every discovered extension, alphabetically."""
    config = _build_configuration(ctx)
    for name in config.available_extensions:
        click.echo(name)


@cli.command()
@click.option("--locations", "-l", is_flag=True, help="Show each extension's root directory")
@click.pass_context
def enabled(ctx, locations: bool):
    """List enabled extensions in load order."""
    config = _build_configuration(ctx)

    try:
        resolved = config.resolve()
    except ExtConfigError as e:
        click.echo(format_exception_chain(e), err=True)
        sys.exit(1)

    for name in resolved.enabled:
        location = resolved.location_for(name)
        if locations and location:
            click.echo(location.to_display_string())
        else:
            click.echo(name)


@cli.command()
@click.argument("name")
@click.pass_context
def locate(ctx, name: str):
    """Show where an extension was found."""
    config = _build_configuration(ctx)
    location = config.location_for(name)

    if location is None:
        click.echo(f"Extension not found: {name}", err=True)
        sys.exit(1)

    click.echo(f"Path:   {location.path}")
    click.echo(f"Source: {location.source.value}")

    history = config.locator.history(name)
    if len(history) > 1:
        click.echo("Also found at:")
        for earlier in history[:-1]:
            click.echo(f"  {earlier.path} ({earlier.source.value})")


@cli.command()
@click.pass_context
def paths(ctx):
    """Show extension search paths in scan order."""
    config = _build_configuration(ctx)
    for path in config.extension_paths:
        marker = "" if path.is_dir() else "  (missing)"
        click.echo(f"{path}{marker}")


def main():
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
