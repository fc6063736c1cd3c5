"""CLI command listing the named constants of a DE file."""

from typing import Tuple

import click

from .common import ephemeris_file_option, open_ephemeris


@click.command()
@ephemeris_file_option
@click.argument("names", nargs=-1)
def constants(file_path: str, names: Tuple[str, ...]) -> None:
    """Print the constants stored in a DE file, or only NAMES."""
    eph = open_ephemeris(file_path)

    # Names are stored upper-case in DE headers
    selected = tuple(name.upper() for name in names) or tuple(eph.constants)
    missing = [name for name in selected if name not in eph.constants]
    if missing:
        raise click.ClickException(f"Unknown constant(s): {', '.join(missing)}")

    for name in selected:
        click.echo(f"{name:<8}{eph.constants[name]!r}")
