from pathlib import Path
from typing import Union

from profiler.util.log_config import setup_logger

logger = setup_logger(__name__)


class ReportWriter:
    """Persist a formatted report to disk"""

    def write(self, path: Union[str, Path], text: str) -> Path:
        """
        Write ``text`` to ``path`` (UTF-8), creating parent directories.

        Returns:
            The path written
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        logger.debug(f"Wrote {len(text)} characters to {path}")
        return path
