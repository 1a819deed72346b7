import logging
from pathlib import Path
from typing import Optional


def setup_logging(output_dir: Optional[Path] = None, level: str = "INFO") -> None:
    """Configure console logging, plus ``run.log`` when ``output_dir`` is given."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(output_dir / "run.log", mode="w"))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )
