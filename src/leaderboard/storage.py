"""JSON artifact persistence."""

import json
import logging
import os
import stat
import tempfile
from collections.abc import Iterable
from pathlib import Path

from leaderboard.adapters.base import BenchmarkRecord

logger = logging.getLogger(__name__)


def _artifact_mode(path: Path) -> int:
    """Permission bits for a published artifact: the old file's, else 0666 minus umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _replace_file(path: Path, content: str) -> None:
    """
    Write content to path atomically.

    The text goes to a temporary file in the destination directory and is
    then renamed over the target, so readers see either the old file or
    the complete new one. The result keeps the permissions a plain write
    would give it, not the private mode of the temporary file.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = _artifact_mode(path)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def write_artifact(path: Path | str, records: Iterable[BenchmarkRecord]) -> int:
    """
    Replace the artifact at path with the given records.

    Args:
        path: Destination JSON file
        records: Records to serialize, in order

    Returns:
        Number of records written
    """
    path = Path(path)
    rows = [record.to_dict() for record in records]
    content = json.dumps(rows, indent=2, ensure_ascii=False, allow_nan=False)
    _replace_file(path, content)
    logger.info(f"Wrote {path} with {len(rows)} rows.")
    return len(rows)


def write_empty_artifact(path: Path | str) -> None:
    """Replace the artifact at path with an empty JSON array."""
    path = Path(path)
    _replace_file(path, "[]")
    logger.info(f"Wrote empty artifact to {path}")
