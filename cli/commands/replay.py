"""
Replay command: re-run a recorded case and report whether it diverges
"""

import json
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

from oracle.core.codec import case_id, loads_case
from oracle.core.errors import CaseFormatError, DivergenceError, UnimplementedActionError
from oracle.replay import run_case

from ..modes import ALL_MODES, resolve_modes

console = Console()


def _fail(message: str, json_output: bool, **details) -> NoReturn:
    if json_output:
        print(json.dumps({"error": message, **details}, ensure_ascii=False))
    else:
        console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(2)


def replay_command(
    case_file: Path = typer.Argument(..., help="Case document (as written by fuzz --out)"),
    mode: Optional[str] = typer.Option(
        None, "--mode", "-m", help="Layout mode (default: the case's recorded mode, else all)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Replay a recorded case against reference and subject.

    Exits 0 if it runs clean, 1 if it diverges, 2 if the file cannot be used.

    Examples:
        sso-oracle replay divergence.json
        sso-oracle replay divergence.json --mode compact --json
    """
    try:
        case, recorded_mode = loads_case(case_file.read_text(encoding="utf-8"))
    except FileNotFoundError:
        _fail("Case file not found", json_output, path=str(case_file))
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Cannot read case file: {e}", json_output, path=str(case_file))
    except CaseFormatError as e:
        _fail(f"Malformed case file: {e}", json_output, path=str(case_file))

    results = []
    for subject_type in resolve_modes(mode or recorded_mode or ALL_MODES):
        try:
            outcome = run_case(subject_type, case)
            results.append((subject_type.MODE.name, None, outcome.applied))
        except DivergenceError as e:
            results.append((subject_type.MODE.name, e, e.step))
        except UnimplementedActionError as e:
            _fail(str(e), json_output, path=str(case_file))

    diverged = [r for r in results if r[1] is not None]

    if json_output:
        output = {
            "success": not diverged,
            "case_id": case_id(case),
            "actions": len(case.actions),
            "modes": [
                {
                    "mode": name,
                    "passed": error is None,
                    "step": step,
                    **({} if error is None else {"check": error.check.value, "detail": error.detail}),
                }
                for name, error, step in results
            ],
        }
        print(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        console.print(f"[bold]Replaying case[/bold] [yellow]{case_id(case)}[/yellow] ({len(case.actions)} actions)")
        table = Table(title="Replay Results")
        table.add_column("Mode", style="green")
        table.add_column("Result")
        for name, error, step in results:
            if error is None:
                table.add_row(name, f"[green]✓ {step} actions applied[/green]")
            else:
                table.add_row(name, f"[red]✗ {error.check.value} at step {step}[/red]")
        console.print(table)
        for name, error, _ in diverged:
            console.print(f"\n[bold red]{name}[/bold red]:")
            console.print(str(error), markup=False, highlight=False)

    raise typer.Exit(1 if diverged else 0)
