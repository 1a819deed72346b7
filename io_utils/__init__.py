from .logs import setup_logging
from .read import read_collection, read_json
from .write import write_frontend_config, write_json, write_manifest, write_summary

__all__ = [
    "read_collection",
    "read_json",
    "setup_logging",
    "write_frontend_config",
    "write_json",
    "write_manifest",
    "write_summary",
]
