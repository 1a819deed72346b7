from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import typer

from catalog import get_mineral_data, known_minerals, minerals_by_rarity
from collection import (
    Aggregator,
    CollectionSummary,
    MalformedInputError,
    ranked_focus_areas,
    summary_to_geojson,
)
from config import ConfigError, PipelineConfig, build_config
from geocode import GeocodeCache, create_resolver
from io_utils.logs import setup_logging
from io_utils.read import read_collection, read_json
from io_utils.write import write_frontend_config, write_json, write_manifest, write_summary


def _cli_overrides(
    strategy: Optional[str],
    intensity_scale: Optional[float],
    delay_ms: Optional[int],
    cache_file: Optional[Path],
) -> Dict[str, Any]:
    resolver: Dict[str, Any] = {}
    if strategy is not None:
        resolver["strategy"] = strategy
    if delay_ms is not None:
        resolver["rate_limit_delay_ms"] = delay_ms
    if cache_file is not None:
        resolver["cache_file"] = str(cache_file)
    overrides: Dict[str, Any] = {}
    if resolver:
        overrides["resolver"] = resolver
    if intensity_scale is not None:
        overrides["pipeline"] = {"intensity_scale": intensity_scale}
    return overrides


def format_report(summary: CollectionSummary) -> str:
    """Return the totals and the countries ranked by specimen count."""
    lines = [
        "=== COLLECTION SUMMARY ===",
        f"Total Specimens: {summary.total_specimens}",
        f"Total Species: {summary.total_species}",
        f"Total Countries: {summary.total_countries}",
        "",
        "=== COUNTRIES WITH SPECIMENS ===",
    ]
    for area in ranked_focus_areas(summary):
        coords = area.coordinates
        coords_str = (
            f"({coords.latitude:.2f}, {coords.longitude:.2f})" if coords else "(no coords)"
        )
        lines.append(
            f"{area.name}: {area.specimen_count} specimens, "
            f"{area.species_count} species {coords_str}"
        )
    return "\n".join(lines)


def summarize_cli(input_path: Path, output: Path, cfg: PipelineConfig) -> CollectionSummary:
    """Core summarize logic used by the command line interface.

    Loads the export, aggregates it with the configured resolver, and
    writes the summary, the manifest and (for the external strategy) the
    geocode cache into ``output``.
    """
    setup_logging(output)
    run_id = datetime.now(timezone.utc).isoformat()

    collection = read_collection(input_path)

    cache: Optional[GeocodeCache] = None
    if cfg.resolver.strategy == "external":
        cache = GeocodeCache(cfg.cache_path(output))
    resolver = create_resolver(cfg, cache)
    logging.info(
        "Resolver strategy: %s | intensity scale K=%g",
        cfg.resolver.strategy,
        cfg.intensity_scale,
    )

    aggregator = Aggregator(
        intensity_scale=cfg.intensity_scale,
        resolver=resolver,
        collector_name=cfg.pipeline.collector_name,
    )
    summary = aggregator.aggregate(collection)

    summary_path = output / cfg.output.summary_file
    write_summary(summary_path, summary)
    logging.info("Processed data saved to %s", summary_path)

    meta: Dict[str, Any] = {
        "run_id": run_id,
        "input": str(input_path),
        "config": cfg.model_dump(),
        "intensity_scale": cfg.intensity_scale,
        "totals": {
            "specimens": summary.total_specimens,
            "species": summary.total_species,
            "countries": summary.total_countries,
        },
    }
    if cache is not None:
        cache.save()
        meta["geocode_cache"] = {
            "path": str(cache.cache_file),
            "lookups": resolver.lookups,
            **cache.get_stats(),
        }
        logging.info(
            "Geocode lookups: %d | cache: %s",
            resolver.lookups,
            cache.get_stats(),
        )
    write_manifest(output, meta)
    return summary


app = typer.Typer(help="Mineral collection summary tools for the globe viewer")


@app.command()
def summarize(
    input: Path = typer.Option(
        ...,
        "--input",
        "-i",
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="Raw collection export (JSON)",
    ),
    output: Path = typer.Option(
        ...,
        "--output",
        "-o",
        file_okay=False,
        dir_okay=True,
        help="Output directory",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        file_okay=True,
        help="Optional config file",
    ),
    strategy: Optional[str] = typer.Option(
        None,
        "--strategy",
        "-s",
        help="Location resolver: 'static' or 'external'",
    ),
    intensity_scale: Optional[float] = typer.Option(
        None,
        "--intensity-scale",
        "-k",
        help="Divisor K for intensity = min(specimenCount / K, 1.0)",
    ),
    delay_ms: Optional[int] = typer.Option(
        None,
        "--delay-ms",
        help="Delay between external geocoding lookups in milliseconds",
    ),
    cache_file: Optional[Path] = typer.Option(
        None,
        "--cache-file",
        dir_okay=False,
        help="Geocode cache file (relative paths resolve against --output)",
    ),
) -> None:
    """Group a collection export by country and write the summary JSON."""
    try:
        cfg = build_config(config, _cli_overrides(strategy, intensity_scale, delay_ms, cache_file))
    except ConfigError as e:
        typer.echo(f"❌ Invalid configuration: {e.message}", err=True)
        raise typer.Exit(1)

    try:
        summary = summarize_cli(input, output, cfg)
    except MalformedInputError as e:
        typer.echo(f"❌ Malformed input: {e.message}", err=True)
        raise typer.Exit(1)

    typer.echo(format_report(summary))
    typer.echo(f"\n✅ Processed data saved to {output / cfg.output.summary_file}")


@app.command()
def geojson(
    summary: Path = typer.Option(
        ...,
        "--summary",
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="Summary JSON written by 'summarize'",
    ),
    output: Path = typer.Option(
        ...,
        "--output",
        "-o",
        dir_okay=False,
        help="GeoJSON file to write",
    ),
) -> None:
    """Export placed focus areas as a GeoJSON FeatureCollection."""
    try:
        data = read_json(summary)
    except MalformedInputError as e:
        typer.echo(f"❌ {e.message}", err=True)
        raise typer.Exit(1)
    if not isinstance(data, dict) or not isinstance(data.get("focusAreas"), list):
        typer.echo("❌ Summary file has no 'focusAreas' array", err=True)
        raise typer.Exit(1)

    collection = summary_to_geojson(data)
    write_json(output, collection)
    typer.echo(f"✅ Wrote {len(collection['features'])} features to {output}")


@app.command()
def mineral(
    name: Optional[str] = typer.Argument(None, help="Mineral name, e.g. 'Rhodochrosite'"),
    rarity: Optional[str] = typer.Option(
        None,
        "--rarity",
        "-r",
        help="List minerals of one rarity: common, uncommon, rare or very-rare",
    ),
) -> None:
    """Show reference data for a mineral, or list the known minerals."""
    if rarity is not None:
        try:
            names = minerals_by_rarity(rarity)
        except ValueError as e:
            typer.echo(f"❌ {e}", err=True)
            raise typer.Exit(1)
        for known in names:
            typer.echo(known)
        return
    if name is None:
        for known in known_minerals():
            typer.echo(known)
        return
    info = get_mineral_data(name)
    typer.echo(f"{info.icon} {name}")
    typer.echo(f"  Formula:  {info.formula}")
    typer.echo(f"  System:   {info.system}")
    typer.echo(f"  Hardness: {info.hardness}")
    typer.echo(f"  Color:    {info.color}")
    typer.echo(f"  Rarity:   {info.rarity}")


@app.command("build-config")
def build_frontend_config(
    output: Path = typer.Option(
        Path("config.js"),
        "--output",
        "-o",
        dir_okay=False,
        help="Path of the generated config.js",
    ),
) -> None:
    """Write the viewer's config.js from MAPBOX_ACCESS_TOKEN and DEFAULT_THEME."""
    token = os.environ.get("MAPBOX_ACCESS_TOKEN", "MISSING_MAPBOX_TOKEN")
    theme = os.environ.get("DEFAULT_THEME", "dark")
    write_frontend_config(output, token, theme)
    typer.echo(f"✅ Environment variables injected into {output}")
    typer.echo(f"   MAPBOX_ACCESS_TOKEN: {token[:20]}...")
    typer.echo(f"   DEFAULT_THEME: {theme}")


if __name__ == "__main__":
    app()
