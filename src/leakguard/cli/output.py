"""Console rendering of scan reports."""

from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..core.models import Report, Severity
from ..core.rules import RuleSet

console = Console()


SEVERITY_HEADINGS = {
    Severity.CRITICAL: "🚨 CRITICAL ISSUES (Fix Immediately):",
    Severity.HIGH: "⚠️  HIGH PRIORITY ISSUES:",
    Severity.MEDIUM: "ℹ️  MEDIUM PRIORITY (Review):",
    Severity.LOW: "🔵 LOW PRIORITY:",
}

SEVERITY_COLORS = {
    Severity.CRITICAL: "bold red",
    Severity.HIGH: "red",
    Severity.MEDIUM: "yellow",
    Severity.LOW: "blue",
}

REMEDIATION_STEPS = [
    "Remove all hardcoded passwords from source code",
    "Read credentials from the environment at runtime (process.env.PASSWORD, os.environ)",
    "Create users through a secure setup script that prompts for passwords",
    "Store passwords in a secure password manager or secrets vault",
    "Never commit credentials to version control",
]


def truncate(text: str, limit: int) -> str:
    """Shorten ``text`` to ``limit`` characters, marking the cut."""
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def display_banner(version: str, target: Path, out: Optional[Console] = None):
    """Display scan header."""
    out = out or console
    out.print()
    out.print(Panel.fit(
        f"[bold cyan]LeakGuard v{version}[/bold cyan]\n"
        f"🔒 Scanning for hardcoded passwords and credentials\n"
        f"Target: [yellow]{escape(str(target))}[/yellow]",
        border_style="cyan",
    ))
    out.print()


def display_report(
    report: Report,
    max_content_chars: int = 100,
    show_remediation: bool = True,
    out: Optional[Console] = None,
):
    """Render a report grouped by severity with a PASSED/FAILED verdict."""
    out = out or console

    if report.passed:
        out.print(Panel(
            "[bold green]✅ SECURITY AUDIT PASSED[/bold green]\n"
            "✅ No hardcoded passwords found in codebase\n"
            f"[dim]{report.files_scanned} files scanned, {report.files_skipped} skipped "
            f"in {report.duration_seconds:.2f}s[/dim]",
            border_style="green",
        ))
        return

    out.print(Panel(
        f"[bold red]❌ SECURITY AUDIT FAILED[/bold red] - "
        f"Found {report.total_findings} potential issues\n"
        f"[dim]{report.files_scanned} files scanned, {report.files_skipped} skipped "
        f"in {report.duration_seconds:.2f}s[/dim]",
        border_style="red",
    ))
    out.print()

    display_severity_table(report, out=out)

    for severity, findings in report.by_severity().items():
        if not findings:
            continue

        color = SEVERITY_COLORS[severity]
        out.print(f"[{color}]{SEVERITY_HEADINGS[severity]}[/{color}]")
        for finding in findings:
            out.print(
                f"  {escape(finding.file_path)}:{finding.line_number} - "
                f"[{color}]{escape(finding.matched_text)}[/{color}]"
            )
            # Medium findings are hashes; the location is enough for review
            if severity is not Severity.MEDIUM:
                content = truncate(finding.line_content, max_content_chars)
                out.print(f"    [dim]Content:[/dim] {escape(content)}")
        out.print()

    if show_remediation:
        display_remediation(out=out)


def display_severity_table(report: Report, out: Optional[Console] = None):
    """Show finding counts per severity."""
    out = out or console
    table = Table(title="Findings by Severity")
    table.add_column("Severity", style="bold")
    table.add_column("Count", justify="right")

    for severity, findings in report.by_severity().items():
        if findings:
            color = SEVERITY_COLORS[severity]
            table.add_row(f"[{color}]{severity.value}[/{color}]", f"[{color}]{len(findings)}[/{color}]")

    out.print(table)
    out.print()


def display_remediation(out: Optional[Console] = None):
    """Print the static remediation guidance."""
    out = out or console
    out.print("[bold]🔧 Remediation Steps:[/bold]")
    for i, step in enumerate(REMEDIATION_STEPS, 1):
        out.print(f"{i}. {escape(step)}")
    out.print()


def display_rules(rule_set: RuleSet, out: Optional[Console] = None):
    """Show detection and suppression rules in evaluation order."""
    out = out or console

    suppressions = Table(title="Suppression Rules (evaluated first)")
    suppressions.add_column("#", justify="right")
    suppressions.add_column("Name", style="cyan", no_wrap=True)
    suppressions.add_column("Description")
    for i, suppression in enumerate(rule_set.suppressions, 1):
        suppressions.add_row(str(i), suppression.name, escape(suppression.description))

    rules = Table(title="Detection Rules")
    rules.add_column("#", justify="right")
    rules.add_column("Rule", style="cyan", no_wrap=True)
    rules.add_column("Severity")
    rules.add_column("Case")
    rules.add_column("Description")
    for i, rule in enumerate(rule_set.rules, 1):
        color = SEVERITY_COLORS[rule.severity]
        rules.add_row(
            str(i),
            rule.rule_id,
            f"[{color}]{rule.severity.value}[/{color}]",
            "insensitive" if rule.case_insensitive else "sensitive",
            escape(rule.description),
        )

    out.print(suppressions)
    out.print()
    out.print(rules)
