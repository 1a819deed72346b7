from pathlib import Path
from typing import Any
import json

from collection.errors import MalformedInputError
from collection.loader import load_collection
from collection.models import RawCollection


def read_json(path: Path) -> Any:
    """Decode a JSON document from ``path``.

    Args:
        path: File to read

    Returns:
        The decoded document

    Raises:
        MalformedInputError: If the file is not valid UTF-8 JSON
    """
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f)
    except UnicodeDecodeError as exc:
        raise MalformedInputError("invalid_encoding", f"{path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise MalformedInputError("invalid_json", f"{path}: {exc}") from exc


def read_collection(path: Path) -> RawCollection:
    """Read and validate a raw collection export.

    Args:
        path: JSON file holding ``collector`` and ``specimens``

    Returns:
        Loaded specimens and collector metadata
    """
    return load_collection(read_json(path))
