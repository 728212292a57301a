from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union


LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def setup_logging(
    level: Union[int, str] = logging.INFO,
    *,
    logs_dir: Optional[Path] = None,
) -> None:
    """Configure root logging. A file handler is added when logs_dir is given."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if logs_dir is not None:
        logs_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(logs_dir / "inbox_tasks.log", encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
