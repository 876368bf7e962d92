"""
Layout mode selection shared by the commands.
"""

from typing import List, Type

import typer

from smartstr import SUBJECT_TYPES, SmartString

ALL_MODES = "all"


def resolve_modes(mode: str) -> List[Type[SmartString]]:
    """
    Map a --mode value to subject classes.

    Raises:
        typer.BadParameter: If mode is neither a layout mode name nor "all"
    """
    if mode == ALL_MODES:
        return [SUBJECT_TYPES[name] for name in sorted(SUBJECT_TYPES)]
    if mode not in SUBJECT_TYPES:
        choices = ", ".join(sorted(SUBJECT_TYPES) + [ALL_MODES])
        raise typer.BadParameter(f"unknown mode {mode!r} (choose from {choices})")
    return [SUBJECT_TYPES[mode]]
