"""CLI command describing a DE file."""

import click

from .common import ephemeris_file_option, open_ephemeris


@click.command()
@ephemeris_file_option
def info(file_path: str) -> None:
    """Show header information for a DE file."""
    eph = open_ephemeris(file_path)

    for label in eph.labels:
        if label:
            click.echo(label)
    click.echo(f"DE number:         {eph.de_number}")
    click.echo(f"Date range (JD):   {eph.start_date} - {eph.end_date}")
    click.echo(f"Days per interval: {eph.days_per_interval}")
    click.echo(f"Records:           {eph.record_count}")
    click.echo(f"Words per record:  {eph.record_word_count}")
    click.echo(
        f"Byte order:        {eph.byte_order.value}-endian"
        f"{' (swapped)' if eph.byte_order_swapped else ''}"
    )
    click.echo(f"AU (km):           {eph.au}")
    click.echo(f"Earth/Moon mass:   {eph.earth_moon_mass_ratio}")

    click.echo("")
    click.echo(f"{'item':<24}{'offset':>8}{'coeffs':>8}{'granules':>10}")
    for body, layout in eph.layouts.items():
        if not layout.is_present:
            continue
        click.echo(
            f"{body.value:<24}{layout.offset:>8}"
            f"{layout.coefficient_count:>8}{layout.granule_count:>10}"
        )
