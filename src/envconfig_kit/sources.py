"""Dotenv parsing and layered source loading."""

import io
import logging
import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

BASE_FILE = ".env"
LOCAL_FILE = ".env.local"


def _as_strings(values: Mapping[str, Optional[str]]) -> Dict[str, str]:
    # python-dotenv maps bare keys (no "=") to None
    return {key: value for key, value in values.items() if value is not None}


def parse_dotenv(content: str) -> Dict[str, str]:
    """Parse dotenv text into a mapping.

    Blank lines and ``#`` comments are skipped, whitespace around keys and
    unquoted values is trimmed and surrounding quotes are removed. Values are
    taken literally: ``${VAR}`` references are not expanded.
    """
    return _as_strings(dotenv_values(stream=io.StringIO(content), interpolate=False))


def load_dotenv(path: Union[str, Path]) -> Dict[str, str]:
    """Read and parse a dotenv file; missing or unreadable files yield ``{}``."""
    dotenv_path = Path(path)
    if not dotenv_path.is_file():
        logger.debug(f"Dotenv file not found: {dotenv_path}")
        return {}

    try:
        values = dotenv_values(dotenv_path, interpolate=False, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read dotenv file {dotenv_path}: {e}")
        return {}

    loaded = _as_strings(values)
    logger.debug(f"Loaded {len(loaded)} value(s) from {dotenv_path}")
    return loaded


class EnvSourceLoader:
    """Merges dotenv files and the process environment with priority.

    Sources, lowest priority first:

    1. ``.env``
    2. ``.env.<environment>`` (skipped when no environment name is set)
    3. ``.env.local``
    4. the process environment
    """

    def __init__(self, base_dir: Optional[Path] = None, environment: Optional[str] = None) -> None:
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
        self.environment = environment or None

    def source_paths(self) -> List[Path]:
        """Dotenv files in merge order."""
        paths = [self.base_dir / BASE_FILE]
        if self.environment:
            paths.append(self.base_dir / f".env.{self.environment}")
        paths.append(self.base_dir / LOCAL_FILE)
        return paths

    def load_files(self) -> Dict[str, str]:
        """Merge only the dotenv files."""
        merged: Dict[str, str] = {}
        for path in self.source_paths():
            merged.update(load_dotenv(path))
        return merged

    def load(self, environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """Merge all sources into a fresh mapping.

        Args:
            environ: Process environment to apply last (defaults to ``os.environ``)

        Returns:
            Flat mapping of variable name to raw string value
        """
        merged = self.load_files()
        merged.update(os.environ if environ is None else environ)
        return merged
