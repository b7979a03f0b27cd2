"""
Command-line interface for updating programs.

Provides an interactive update session over stored programs, one-shot
conflict detection for program files, and a listing of stored programs.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import click

from aspupdate.config import config
from aspupdate.contradiction import Conflict, Solution
from aspupdate.core import DetectionResult, UpdateSequenceController
from aspupdate.logging import initialize_logging
from aspupdate.persistence import ProgramStore
from aspupdate.solver import ClingoSolver
from aspupdate.symbolic import ParseError, parse_program


@click.group()
@click.option("--log-level", default=None, help="Override the configured log level")
def cli(log_level: Optional[str]):
    """Interactive updates of extended logic programs."""
    settings = config.logging
    initialize_logging(
        log_dir=Path(settings.log_dir),
        level=log_level or settings.level,
        format_string=settings.format,
        rotation=settings.rotation,
        retention=settings.retention,
        enable_file_logging=settings.enable_file_logging,
        enable_console_logging=settings.enable_console_logging,
    )


def _echo_conflict(index: int, conflict: Conflict) -> None:
    click.echo(f"\n[{index}] {conflict.older.to_asp()}")
    click.echo(f"    {conflict.newer.to_asp()}")
    for answer_set in conflict.answer_sets:
        click.echo(f"    witness: {answer_set}")


def _echo_solution(index: int, solution: Solution) -> None:
    measures = ", ".join(
        f"{name}={value if value is not None else '-'}"
        for name, value in solution.measures.items()
    )
    click.echo(f"  ({index}) [{solution.strategy}] {solution}")
    if measures:
        click.echo(f"      {measures}")
    for rule_id, variants in solution.variants.items():
        click.echo(f"      {len(variants)} variant(s) for rule {rule_id}")


def _choose_variants(solution: Solution) -> None:
    for rule_id, variants in list(solution.variants.items()):
        chosen = solution.get_chosen(rule_id)
        click.echo(f"\nChosen: {chosen.to_asp() if chosen else '-'}")
        for number, variant in enumerate(variants, start=1):
            click.echo(f"  ({number}) {variant.to_asp()}")
        pick = click.prompt(
            "Variant to use (0 keeps the chosen rule)",
            type=click.IntRange(0, len(variants)),
            default=0,
        )
        if pick:
            solution.choose_variant(variants[pick - 1])


def _resolve_interactively(controller: UpdateSequenceController) -> DetectionResult:
    result = controller.detect_conflicts()
    while result.has_conflicts:
        click.echo("\n" + "=" * 50)
        click.echo(f"{len(result.conflicts)} conflict(s) detected")
        for index, conflict in enumerate(result.conflicts, start=1):
            _echo_conflict(index, conflict)

        solvable = [conflict for conflict in result.conflicts if conflict.solutions]
        if not solvable:
            click.echo("\nNo candidate solutions left; remaining conflicts stay unresolved.")
            return result

        number = click.prompt(
            "\nConflict to resolve", type=click.IntRange(1, len(result.conflicts))
        )
        conflict = result.conflicts[number - 1]
        if not conflict.solutions:
            click.echo("This conflict has no candidate solutions.")
            continue

        for index, solution in enumerate(conflict.solutions, start=1):
            _echo_solution(index, solution)
        number = click.prompt("Solution to apply", type=click.IntRange(1, len(conflict.solutions)))
        solution = conflict.solutions[number - 1]
        if solution.variants and click.confirm("Choose among variants?", default=False):
            _choose_variants(solution)

        result = controller.accept_solution(solution)
    return result


@cli.command()
@click.argument("old_name")
@click.argument("new_name")
@click.option("--programs-dir", default=None, help="Directory with stored programs")
@click.option("--output", default=None, help="Name for the merged program")
@click.option("--yes", is_flag=True, help="Persist without asking")
def update(
    old_name: str,
    new_name: str,
    programs_dir: Optional[str],
    output: Optional[str],
    yes: bool,
):
    """
    Update stored program OLD_NAME with stored program NEW_NAME.

    Example:
        aspupdate update birds penguins --output birds_updated
    """
    store = ProgramStore(Path(programs_dir) if programs_dir else None)
    controller = UpdateSequenceController(ClingoSolver(), store=store)

    for name in (old_name, new_name):
        if not controller.add_program_by_name(name):
            raise click.ClickException(f"Could not load program '{name}'")

    result = _resolve_interactively(controller)
    if not result.ok:
        raise click.ClickException(f"Conflict detection failed: {result.message}")
    if not result.consistent:
        click.echo("Warning: the updated sequence has no answer set.")

    merged = controller.merge_sequence(output or old_name)
    click.echo("\n" + "=" * 50)
    click.echo("Merged program:")
    click.echo(merged.to_asp())

    if not yes and not click.confirm("\nPersist the merged program?", default=True):
        return

    name = output or old_name
    if not yes and store.load(name) and not click.confirm(
        f"Overwrite stored program '{name}'?", default=False
    ):
        name = f"{name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"

    if controller.persist_merged(name):
        click.echo(f"Saved as '{name}'")
    else:
        raise click.ClickException(f"Could not save '{name}'")


@cli.command()
@click.argument("old_file", type=click.Path(exists=True, dir_okay=False))
@click.argument("new_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def detect(old_file: str, new_file: str, as_json: bool):
    """Detect conflicts between two program files and list candidate solutions."""
    programs = []
    for path in (Path(old_file), Path(new_file)):
        try:
            programs.append(parse_program(path.read_text(encoding="utf-8"), path.stem))
        except ParseError as e:
            raise click.ClickException(f"{path.name}: {e}")

    controller = UpdateSequenceController(ClingoSolver())
    for program in programs:
        controller.add_program(program)
    result = controller.detect_conflicts()

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return
    if not result.ok:
        raise click.ClickException(f"Conflict detection failed: {result.message}")

    click.echo(f"\n{len(result.conflicts)} conflict(s)")
    click.echo("=" * 50)
    for index, conflict in enumerate(result.conflicts, start=1):
        _echo_conflict(index, conflict)
        for number, solution in enumerate(conflict.solutions, start=1):
            _echo_solution(number, solution)


@cli.command(name="list")
@click.option("--programs-dir", default=None, help="Directory with stored programs")
def list_programs(programs_dir: Optional[str]):
    """List stored programs."""
    store = ProgramStore(Path(programs_dir) if programs_dir else None)
    available = store.list_available()
    if not available:
        click.echo("No stored programs.")
        return
    for name, text in available.items():
        rules: List[str] = [line for line in text.splitlines() if line.strip()]
        click.echo(f"{name}: {len(rules)} rule line(s)")


if __name__ == "__main__":
    cli()
