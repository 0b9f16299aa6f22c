"""
protogen — CLI entrypoint.

Usage:
    protogen --help
    protogen generate schemas/foo.proto
    protogen kinds
    protogen config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from protogen import __version__
from protogen.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="protogen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to protogen.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """protogen — generate protocol-buffer code into your project."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("PROTOGEN_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("PROTOGEN_LOG_FILE"),
        log_file_level=os.environ.get("PROTOGEN_LOG_FILE_LEVEL"),
    )


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option("--kind", "-k", default=None, help="Output kind (default: from project language).")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds per compiler run.",
)
@click.option("--mock", is_flag=True, help="Use the mock generator (no compiler needed).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    files: tuple[Path, ...],
    kind: str | None,
    timeout: float | None,
    mock: bool,
    as_json: bool,
) -> None:
    """Run the compiler on FILES and import the generated sources."""
    from protogen.core.use_cases.generate import run_generate

    result = run_generate(
        list(files),
        config_path=ctx.obj.get("config_path"),
        kind=kind,
        timeout=timeout,
        mock=mock,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.all_ok else 1)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    quiet = ctx.obj.get("quiet", False)
    for item in result.results:
        name = Path(item.source_path).name
        if item.ok:
            if not quiet:
                click.secho(f"✅ {name}", fg="green")
                for f in item.files:
                    click.echo(f"   → {f}")
        elif item.status == "skipped":
            click.secho(f"⏭️  {name}: {item.message}", fg="yellow")
        else:
            click.secho(f"❌ {name}: {item.reason}", fg="red")
            if item.message:
                click.echo(f"   {item.message}")

    if not quiet:
        click.echo()
        click.echo(
            f"   {result.generated} generated, {result.failed} failed, {result.skipped} skipped"
        )

    if not result.all_ok:
        sys.exit(1)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def kinds(as_json: bool) -> None:
    """List supported output kinds and project languages."""
    from protogen.core.config.kinds import BUILTIN_KINDS, LANGUAGE_KINDS

    if as_json:
        data = {
            name: {
                **kind.model_dump(mode="json"),
                "multi_file": kind.multi_file,
                "languages": sorted(lang for lang, k in LANGUAGE_KINDS.items() if k == name),
            }
            for name, kind in BUILTIN_KINDS.items()
        }
        click.echo(json.dumps(data, indent=2))
        return

    for name, kind in BUILTIN_KINDS.items():
        langs = ", ".join(sorted(lang for lang, k in LANGUAGE_KINDS.items() if k == name))
        click.secho(f"• {name}", fg="cyan", bold=True, nl=False)
        layout = "multi-file" if kind.multi_file else "single-file"
        click.echo(f"  --{kind.flag}  ({layout}, {kind.expected_count} file(s))")
        click.echo(f"    {kind.description}")
        click.echo(f"    languages: {langs}")


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show generated files recorded for this project."""
    from protogen.core.use_cases.status import get_status

    result = get_status(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    assert result.config is not None and result.state is not None
    title = result.config.name or (result.project_root.name if result.project_root else "")
    click.secho(f"\n📋 {title}", fg="cyan", bold=True)
    click.echo(f"   Language: {result.config.language or '-'}")
    click.echo(f"   Schemas: {result.item_count}   Generated files: {result.generated_count}")

    for key, item in sorted(result.state.items.items()):
        color = {"ok": "green", "failed": "red", "skipped": "yellow"}.get(item.last_status or "", "white")
        click.echo(f"     • {key} ", nl=False)
        click.secho(item.last_status or "-", fg=color)
        for gen in item.generated:
            click.echo(f"         → {gen}")
    click.echo()


@cli.group()
def config() -> None:
    """Project configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate protogen.yml configuration."""
    from protogen.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.config is not None
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Project: {result.config.name or '-'}")
        click.echo(f"   Language: {result.config.language or '-'}")
        click.echo(f"   Generator: {result.generator_path}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
