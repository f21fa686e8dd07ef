"""CLI entry point for LeakGuard."""

import click
import json
import sys
from pathlib import Path
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from .config_cmd import config
from .output import display_banner, display_report, display_rules
from ..core.models import Report
from ..core.scanner import Engine
from ..github.sarif_generator import SARIFGenerator
from ..utils.config import Config, OUTPUT_FORMATS, init_config
from ..utils.env_loader import load_env
from ..utils.exceptions import LeakGuardError, ConfigError, ReportError
from ..utils.logger import get_logger, setup_logging
from ..version import VERSION

console = Console()
logger = get_logger(__name__)

EXIT_PASSED = 0
EXIT_FINDINGS = 1
EXIT_ERROR = 3
EXIT_INTERRUPTED = 130


@click.group()
@click.version_option(version=VERSION, prog_name="LeakGuard")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Configuration file path")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--log-file", type=click.Path(), help="Write logs to file")
@click.pass_context
def cli(ctx, config_path, verbose, log_file):
    """
    LeakGuard - hardcoded credential leak scanner

    Walks a source tree, flags hardcoded passwords, known insecure default
    credentials and embedded bcrypt hashes, and fails on any finding.

    \b
    Examples:
        # Scan the current project
        leakguard scan .

        # Machine-readable output
        leakguard scan . --output json --output-file results.json

        # Show the rule set
        leakguard rules
    """
    load_env()

    try:
        if config_path:
            cfg = init_config(Path(config_path))
        else:
            cfg = Config()
            cfg.validate()
    except ConfigError as e:
        console.print(f"[red]❌ Configuration Error:[/red]\n{escape(str(e))}")
        sys.exit(EXIT_ERROR)

    verbose = verbose or cfg.output.verbose
    setup_logging(
        level="DEBUG" if verbose else "INFO",
        log_file=Path(log_file) if log_file else None,
        verbose=verbose,
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg
    ctx.obj["verbose"] = verbose
    logger.debug("Configuration loaded successfully")


@cli.command()
@click.argument("target", type=click.Path(path_type=Path), required=True)
@click.option("--output", "-o", type=click.Choice(OUTPUT_FORMATS, case_sensitive=False), help="Output format")
@click.option("--output-file", "-f", type=click.Path(), help="Write JSON/SARIF output to file")
@click.option("--exclude-dir", multiple=True, help="Additional directory name to prune")
@click.option("--exclude-file", multiple=True, help="Additional file name to skip")
@click.option("--workers", "-w", type=click.IntRange(min=1), help="Scan files with N threads")
@click.pass_context
def scan(ctx, target, output, output_file, exclude_dir, exclude_file, workers):
    """
    Scan a source tree for hardcoded credentials.

    \b
    Exit Codes:
        0 - Audit passed (no findings)
        1 - Audit failed (findings at any severity)
        3 - Scan error (unreadable directory, bad target or config)
    """
    cfg = ctx.obj.get("config") or Config()
    verbose = ctx.obj.get("verbose", False)
    output = (output or cfg.output.format).lower()
    if output == "console" and output_file:
        raise click.UsageError("--output-file requires --output json or --output sarif")

    cfg.scan.excluded_dirs = cfg.scan.excluded_dirs + list(exclude_dir)
    cfg.scan.excluded_files = cfg.scan.excluded_files + list(exclude_file)
    if workers:
        cfg.scan.max_workers = workers

    target_path = target.resolve()

    try:
        engine = Engine(config=cfg)

        if output == "console":
            display_banner(VERSION, target_path)
            with Progress(SpinnerColumn(), TextColumn("[progress.description]{task.description}"),
                          TimeElapsedColumn(), console=console, transient=True) as progress:
                progress.add_task("🔍 Scanning...", total=None)
                report = engine.scan(target_path)
            display_report(
                report,
                max_content_chars=cfg.output.max_content_chars,
                show_remediation=cfg.output.show_remediation,
            )
        else:
            report = engine.scan(target_path)
            if output == "json":
                _output_json(report, output_file)
            else:
                _output_sarif(engine, report, output_file)

    except LeakGuardError as e:
        console.print(f"\n[bold red]❌ Error:[/bold red]\n{escape(str(e))}")
        logger.error(f"Scan aborted: {e.message}", exc_info=verbose)
        sys.exit(EXIT_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]⚠️  Scan interrupted[/yellow]")
        sys.exit(EXIT_INTERRUPTED)

    exit_code = _determine_exit_code(report)
    if exit_code != EXIT_PASSED:
        logger.warning(f"Audit failed with {report.total_findings} findings")
    sys.exit(exit_code)


def _determine_exit_code(report: Report) -> int:
    """Zero tolerance: any finding fails the audit."""
    return EXIT_PASSED if report.passed else EXIT_FINDINGS


def _output_json(report: Report, output_file: str = None):
    """Output as JSON."""
    json_str = json.dumps(report.to_dict(), indent=2)
    if output_file:
        try:
            Path(output_file).write_text(json_str)
        except OSError as e:
            raise ReportError(
                f"Failed to write JSON report: {output_file}",
                details={"error": str(e)}
            ) from e
        console.print(f"[green]✅ Results written to {output_file}[/green]", highlight=False)
    else:
        click.echo(json_str)


def _output_sarif(engine: Engine, report: Report, output_file: str = None):
    """Output as SARIF."""
    generator = SARIFGenerator(engine.rule_set)
    if output_file:
        generator.generate(report, output_file)
        console.print(f"[green]✅ SARIF written to {output_file}[/green]", highlight=False)
    else:
        click.echo(json.dumps(generator.build(report), indent=2))


@cli.command()
def rules():
    """List detection and suppression rules in evaluation order."""
    display_rules(Engine().rule_set)


@cli.command()
def version():
    """Show version information."""
    console.print(f"\n[bold cyan]LeakGuard[/bold cyan] v[yellow]{VERSION}[/yellow]\n")


cli.add_command(config)


if __name__ == "__main__":
    cli(obj={})
