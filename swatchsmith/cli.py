"""
Swatchsmith CLI - Command-line interface for resolving and bleeding atlas tiles
"""

import logging
import sys
from pathlib import Path

import click
from PIL import Image

from swatchsmith import __version__
from swatchsmith.catalog import NameResolver, load_tile_table
from swatchsmith.engine import TileEngine
from swatchsmith.exceptions import CatalogError, DimensionMismatchError, TileNotFoundError
from swatchsmith.texturing.derived import DerivedInputs


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Log resolution and pipeline details')
def cli(verbose):
    """
    Swatchsmith - Map texture names onto atlas slots and synthesize seam-safe borders.

    Examples:
        swatchsmith resolve grass_top Stationary_Water
        swatchsmith bleed stone.png stone_bled.png
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )


@cli.command()
@click.argument('names', nargs=-1, required=True)
def resolve(names):
    """
    Resolve texture names or file paths to atlas slots.

    Exits with status 1 if any name does not resolve.

    Examples:
        swatchsmith resolve grass_top
        swatchsmith resolve textures/block/Oak_Planks.png MW_shulker_side
    """
    try:
        engine = TileEngine()
    except CatalogError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)

    failed = 0
    for name in names:
        tile = engine.resolve(name)
        if tile is None:
            click.secho(f"{name}: not found", fg='yellow')
            failed += 1
        else:
            click.echo(f"{name}: {tile.name} ({tile.column}, {tile.row})")

    if failed:
        sys.exit(1)


@cli.command()
@click.argument('name')
def info(name):
    """
    Show a slot's coordinate, ids, flags and edge policies.

    Example:
        swatchsmith info water_still
    """
    try:
        tile = TileEngine().require(name)
    except (CatalogError, TileNotFoundError) as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)

    click.echo(f"Name:       {tile.name}")
    if tile.legacy_name:
        click.echo(f"Legacy:     {tile.legacy_name}")
    click.echo(f"Coordinate: ({tile.column}, {tile.row})")
    click.echo(f"Type id:    {tile.type_id}:{tile.data_value}")
    click.echo(f"Flags:      {', '.join(tile.flags.capabilities()) or '(none)'}")
    click.echo("Edges:")
    for edge, policy in tile.edge_policies.items():
        click.echo(f"  {edge.value:<7} {policy.value}")


@cli.command()
@click.argument('input_path')
@click.argument('output_path')
@click.option('--name', default=None, help='Texture name (default: input file name)')
@click.option('--tint', default=None, help='Tint for synthesized tiles, as #rrggbb')
@click.option('--frame', default=None, type=int, help='Frame index for animated strips')
@click.option('--tile-size', default=16, show_default=True, type=int, help='Expected tile edge length')
def bleed(input_path, output_path, name, tint, frame, tile_size):
    """
    Run one image through the tile pipeline and save the bordered result.

    Examples:
        swatchsmith bleed stone.png stone_bled.png
        swatchsmith bleed grass.png grass_y.png --name grass_top --tint "#7cbd6b"
    """
    try:
        if not Path(input_path).exists():
            raise FileNotFoundError(f"Input file not found: {input_path}")

        engine = TileEngine(tile_size=tile_size)
        texture_name = name or input_path
        descriptor = engine.require(texture_name)

        aux = DerivedInputs(tint=tint, frame=frame)
        with Image.open(input_path) as image:
            tile = engine.prepare(descriptor, image, aux, source_name=texture_name)

        tile.save(output_path)
        click.secho(f"✓ Success! {tile.name} ({descriptor.column}, {descriptor.row}) saved to {output_path}", fg='green')

    except (FileNotFoundError, TileNotFoundError, CatalogError) as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except OSError as e:
        click.secho(f"Image I/O failed: {e}", fg='red', err=True)
        sys.exit(1)
    except DimensionMismatchError as e:
        click.secho(f"Bad tile dimensions: {e}", fg='red', err=True)
        sys.exit(1)
    except ValueError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)


@cli.command()
@click.option('--table', 'table_path', default=None, help='Tile table JSON (default: bundled table)')
def check(table_path):
    """
    Validate a tile table and print its counts.

    Example:
        swatchsmith check --table my_tiles.json
    """
    try:
        table = load_tile_table(table_path)
        resolver = NameResolver.from_table(table)
    except CatalogError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)

    catalog = resolver.catalog
    placeholders = sum(1 for _ in catalog.placeholders())
    click.echo(f"Grid:        {catalog.grid.columns}x{catalog.grid.rows}")
    click.echo(f"Slots:       {len(catalog)} ({placeholders} unused)")
    click.echo(f"Aliases:     {len(resolver)}")
    click.echo(f"Excluded:    {len(table.excluded)}")
    click.secho("✓ Table is valid", fg='green')


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
