from pathlib import Path
from typing import Any, Dict
import json

from collection.models import CollectionSummary

FRONTEND_CONFIG_TEMPLATE = """// Configuration file for environment variables
// Generated by the build-config command; do not edit by hand.

const config = {{
    MAPBOX_ACCESS_TOKEN: {token},
    DEFAULT_THEME: {theme}
}};

window.CONFIG = config;
"""


def write_manifest(output_dir: Path, meta: Dict[str, Any]) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    manifest_path = output_dir / "manifest.json"
    manifest_path.write_text(json.dumps(meta, indent=2))


def write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


def write_summary(path: Path, summary: CollectionSummary) -> None:
    write_json(path, summary.to_dict())


def write_frontend_config(path: Path, token: str, theme: str) -> None:
    """Write the ``window.CONFIG`` script loaded by the globe page."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        FRONTEND_CONFIG_TEMPLATE.format(token=json.dumps(token), theme=json.dumps(theme)),
        encoding="utf-8",
    )
