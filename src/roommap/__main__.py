"""CLI entry point for roommap."""

from __future__ import annotations

import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import NoReturn

import click

from roommap import generate_map
from roommap.config import THEMES, GroupSettings, RenderConfig, group_settings_from_dict
from roommap.export import export_coordinates, image_coordinates, import_coordinates, read_json, write_json
from roommap.parsers.mapdb import extract_locations, load_mapdb, map_identifier, select_rooms
from roommap.types import RoomShape

logger = logging.getLogger("roommap")


def _fail(message: str) -> NoReturn:
    click.echo(f"error: {message}", err=True)
    sys.exit(1)


@click.command()
@click.argument("mapdb", type=click.Path(exists=True, dir_okay=False))
@click.option("--location", "-l", "locations", multiple=True, help="Select rooms by location (repeatable)")
@click.option("--rooms", "-r", "ranges", type=str, default=None, help="Room id ranges, e.g. '100-120, 135'")
@click.option("--uid", "use_uid", is_flag=True, help="Match --rooms against alternate ids (uids)")
@click.option("--exclude", "-x", "exclude", type=str, default=None, help="Room id ranges to leave out")
@click.option("--exclude-uid", "exclude_uid", is_flag=True, help="Match --exclude against uids")
@click.option(
    "--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), help="Map configuration JSON"
)
@click.option("--coords", "coords_path", type=click.Path(exists=True, dir_okay=False), help="Coordinate file to apply")
@click.option("--theme", "-t", type=click.Choice(sorted(THEMES)), default=None, help="Colour theme preset")
@click.option("--shape", "-s", type=click.Choice([s.value for s in RoomShape]), default=None, help="Room shape")
@click.option("--output", "-o", "output", type=str, default=None, help="Write the SVG to this file instead of stdout")
@click.option("--export-coords", "export_path", type=str, default=None, help="Write a coordinate file here")
@click.option("--image-coords", "image_coords_path", type=str, default=None, help="Write room pixel boxes here")
@click.option("--list-locations", is_flag=True, help="Print the locations found in MAPDB and exit")
@click.option("--verbose", "-v", is_flag=True, help="Log progress to stderr")
def main(
    mapdb: str,
    locations: tuple[str, ...],
    ranges: str | None,
    use_uid: bool,
    exclude: str | None,
    exclude_uid: bool,
    config_path: str | None,
    coords_path: str | None,
    theme: str | None,
    shape: str | None,
    output: str | None,
    export_path: str | None,
    image_coords_path: str | None,
    list_locations: bool,
    verbose: bool,
) -> None:
    """Draw MapDB rooms as an SVG map."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(name)s: %(message)s")

    try:
        all_rooms = load_mapdb(mapdb)
    except (OSError, ValueError) as e:
        _fail(f"cannot read '{mapdb}': {e}")

    if list_locations:
        for location in extract_locations(all_rooms):
            click.echo(location)
        return

    try:
        rooms = select_rooms(all_rooms, locations, ranges, use_uid, exclude, exclude_uid)
    except ValueError as e:
        _fail(str(e))
    logger.info("selected %d rooms", len(rooms))

    config = RenderConfig()
    settings: dict[int, GroupSettings] = {}
    try:
        if config_path:
            data = read_json(config_path)
            config = RenderConfig.from_dict(data, config)
            settings = group_settings_from_dict(data.get("groupPositioning", {}))
        if coords_path:
            settings, config = import_coordinates(read_json(coords_path), config)
        if theme:
            config = config.with_theme(theme)
        if shape:
            config = replace(config, room_shape=RoomShape(shape))
    except (OSError, ValueError, KeyError, TypeError) as e:
        _fail(f"bad configuration: {e}")

    try:
        result = generate_map(rooms, config, settings)
    except ValueError as e:
        _fail(str(e))
    logger.info("mapped %d rooms in %d groups", len(result.positions), len(result.groups))

    stem = Path(output).stem if output else "map"
    try:
        if output:
            Path(output).write_text(result.svg)
        else:
            click.echo(result.svg)
        if export_path:
            map_id = map_identifier(locations, ranges, use_uid, exclude)
            write_json(export_path, export_coordinates(result.groups, config, map_name=stem, map_id=map_id))
        if image_coords_path:
            write_json(image_coords_path, image_coordinates(result.positions, config, image=f"{stem}.png"))
    except OSError as e:
        _fail(f"cannot write output: {e}")


if __name__ == "__main__":
    main()
