"""CLI command evaluating a body position."""

import json

import click

from ..body import Body, QUERYABLE_BODIES
from ..errors import EphemerisError
from ..julian import parse_date_input
from .common import ephemeris_file_option, open_ephemeris


@click.command()
@ephemeris_file_option
@click.argument("body")
@click.argument("date")
@click.option(
    "--unit",
    type=click.Choice(["km", "au"]),
    default="km",
    help="Distance unit of the output",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
def position(
    file_path: str, body: str, date: str, unit: str, output_format: str
) -> None:
    """Print the position of BODY at DATE.

    BODY is a name such as mars, moon, earth, emb or ssb. DATE is a Julian
    date, an ISO datetime (UTC if no offset is given) or "now".
    """
    try:
        target = Body.from_name(body)
    except ValueError:
        names = ", ".join(b.value for b in QUERYABLE_BODIES)
        raise click.BadParameter(f"Unknown body {body!r}. Choose from: {names}", param_hint="BODY")

    try:
        julian_date = parse_date_input(date)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="DATE")

    eph = open_ephemeris(file_path)
    try:
        x, y, z = eph.position(target, julian_date)
    except EphemerisError as e:
        raise click.ClickException(str(e))

    if unit == "au":
        x, y, z = x / eph.au, y / eph.au, z / eph.au

    if output_format == "json":
        click.echo(
            json.dumps(
                {
                    "body": target.value,
                    "julian_date": julian_date,
                    "unit": unit,
                    "x": float(x),
                    "y": float(y),
                    "z": float(z),
                }
            )
        )
    else:
        click.echo(f"{target.value} at JD {julian_date} ({unit})")
        click.echo(f"x: {x:.9f}")
        click.echo(f"y: {y:.9f}")
        click.echo(f"z: {z:.9f}")
