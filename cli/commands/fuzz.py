"""
Fuzz command: sample random cases per layout mode and report divergences
"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from oracle.core.codec import case_id, case_to_dict, dumps_case
from oracle.generation import sample

from ..modes import ALL_MODES, resolve_modes

console = Console()


def fuzz_command(
    mode: str = typer.Option(ALL_MODES, "--mode", "-m", help="Layout mode (compact, prefixed, all)"),
    samples: Optional[int] = typer.Option(None, "--samples", "-n", help="Cases per mode"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed for reproducible draws"),
    max_actions: Optional[int] = typer.Option(None, "--max-actions", help="Longest action sequence"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Write the minimal diverging case here"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Run random cases against every selected layout mode.

    Exits 1 if any mode diverged.

    Examples:
        sso-oracle fuzz
        sso-oracle fuzz --mode prefixed --samples 2000 --seed 7
        sso-oracle fuzz --out divergence.json
    """
    reports = [sample(t, samples=samples, seed=seed, max_actions=max_actions) for t in resolve_modes(mode)]
    failed = [r for r in reports if not r.passed]

    if out is not None and failed:
        first = failed[0]
        out.write_text(dumps_case(first.case, mode=first.mode) + "\n", encoding="utf-8")

    if json_output:
        output = {
            "success": not failed,
            "modes": [
                {
                    "mode": r.mode,
                    "executed": r.executed,
                    "passed": r.passed,
                    **(
                        {}
                        if r.passed
                        else {
                            "case_id": case_id(r.case),
                            "check": r.failure.check.value,
                            "step": r.failure.step,
                            "case": case_to_dict(r.case, mode=r.mode),
                        }
                    ),
                }
                for r in reports
            ],
        }
        print(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        table = Table(title="Fuzz Results")
        table.add_column("Mode", style="green")
        table.add_column("Executed", style="cyan", justify="right")
        table.add_column("Result")
        for r in reports:
            result = "[green]✓ no divergence[/green]" if r.passed else f"[red]✗ {r.failure.check.value}[/red]"
            table.add_row(r.mode, str(r.executed), result)
        console.print(table)

        for r in failed:
            console.print(f"\n[bold red]{r.mode}[/bold red] minimal case [yellow]{case_id(r.case)}[/yellow]:")
            console.print(str(r.failure), markup=False, highlight=False)
        if out is not None and failed:
            console.print(f"\nMinimal case written to [cyan]{out}[/cyan]")

    raise typer.Exit(1 if failed else 0)
