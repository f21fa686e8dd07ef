"""Configuration management CLI commands."""

import sys

import click
import yaml
from pathlib import Path
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from ..utils.config import Config, init_config
from ..utils.exceptions import ConfigError

console = Console()


@click.group()
def config():
    """Manage LeakGuard configuration."""
    pass


@config.command()
@click.pass_context
def show(ctx):
    """Show current configuration."""
    cfg = (ctx.obj or {}).get("config") or Config()

    console.print("\n[bold cyan]📋 Current Configuration[/bold cyan]\n")

    console.print("[bold]Scan Settings:[/bold]")
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="yellow")

    table.add_row("Excluded Directories", escape(", ".join(cfg.scan.excluded_dirs)))
    table.add_row("Excluded Files", escape(", ".join(cfg.scan.excluded_files)))
    table.add_row("Max Workers", str(cfg.scan.max_workers))

    console.print(table)
    console.print()

    console.print("[bold]Output Settings:[/bold]")
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="yellow")

    table.add_row("Format", cfg.output.format)
    table.add_row("Verbose", "✅" if cfg.output.verbose else "❌")
    table.add_row("Max Content Chars", str(cfg.output.max_content_chars))
    table.add_row("Remediation Guidance", "✅" if cfg.output.show_remediation else "❌")

    console.print(table)
    console.print()


@config.command()
@click.option("--overwrite", is_flag=True, help="Overwrite existing config")
def init(overwrite):
    """Initialize user configuration file."""
    try:
        config_file = Config.create_user_config(overwrite=overwrite)
    except ConfigError as e:
        console.print(f"\n[red]❌ Error:[/red] {escape(str(e))}\n")
        sys.exit(1)

    console.print(f"\n[green]✅ Created configuration file:[/green] {config_file}")
    console.print("\n[dim]Edit this file to customize your settings.[/dim]\n")


@config.command()
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
def validate(config_file):
    """Validate configuration file."""
    console.print(f"\n[bold]🔍 Validating:[/bold] {escape(config_file)}\n")

    try:
        cfg = init_config(Path(config_file))
    except ConfigError as e:
        console.print(f"[red]❌ Validation failed:[/red]\n{escape(str(e))}\n")
        sys.exit(1)

    console.print("[green]✅ Configuration is valid![/green]\n")

    console.print("[bold]Loaded configuration:[/bold]")
    config_yaml = yaml.dump(cfg.to_dict(), default_flow_style=False, sort_keys=False)
    console.print(Syntax(config_yaml, "yaml", theme="monokai", line_numbers=True))


@config.command()
@click.argument("key")
@click.pass_context
def get(ctx, key):
    """Get configuration value."""
    cfg = (ctx.obj or {}).get("config") or Config()

    try:
        value = cfg.get(key)
    except ConfigError as e:
        console.print(f"\n[red]❌ Error:[/red] {escape(str(e))}\n")
        sys.exit(1)

    if value is None:
        console.print(f"\n[yellow]⚠️  Key not found:[/yellow] {escape(key)}\n")
    else:
        console.print(f"\n[cyan]{escape(key)}:[/cyan] [yellow]{escape(str(value))}[/yellow]\n")
