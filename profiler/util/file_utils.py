import os
from pathlib import Path
from typing import Optional, Union

from profiler.exceptions import ConfigurationError

DEFAULT_REPORT_FILE_NAME = "profile.log"


def resolve_output_path(path: Union[str, Path], home: Optional[Path] = None) -> Path:
    """
    Resolve the report location.

    A bare default file name (``profile.log``) is placed in the user's home
    directory; any other value is used as given, relative to the working
    directory.

    Args:
        path: Output path from configuration or command line
        home: Home directory override (defaults to Path.home())

    Returns:
        Absolute path of the report file

    Raises:
        ConfigurationError: If the path is empty
    """
    text = str(path).strip() if path is not None else ""
    if not text:
        raise ConfigurationError("Log path cannot be empty")

    if text.lower() == DEFAULT_REPORT_FILE_NAME:
        return (home or Path.home()) / DEFAULT_REPORT_FILE_NAME

    return Path(text).expanduser().resolve()


def ensure_writable_parent(path: Path) -> Path:
    """
    Create the parent directory of ``path`` and check that it can be written.

    Raises:
        ConfigurationError: If the directory cannot be created or written to,
            or if ``path`` points at a directory
    """
    directory = path.parent

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigurationError(f"Could not create directory '{directory}': {e}") from e

    if path.is_dir():
        raise ConfigurationError(f"Output path is a directory: {path}")

    if not os.access(directory, os.W_OK):
        raise ConfigurationError(f"Directory is not writable: {directory}")

    if path.exists() and not os.access(path, os.W_OK):
        raise ConfigurationError(f"Output file is not writable: {path}")

    return path
