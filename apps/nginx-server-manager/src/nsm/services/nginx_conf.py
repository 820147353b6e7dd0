"""Read, back up and rewrite the target nginx.conf."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
import time
from pathlib import Path

from nsm_common import BACKUP_SUFFIX, ServerConfig, ServerType
from nsm.errors import FileIOError
from nsm.services.block_renderer import parse_server_type, render_server_block
from nsm.services.http_section import MatchStrategy, apply_server_block

log = logging.getLogger(__name__)

# Keep the file's bytes as-is: no newline translation, undecodable bytes survive.
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def read_document(path: Path) -> str:
    try:
        with open(path, encoding=_ENCODING, errors=_ERRORS, newline="") as f:
            return f.read()
    except OSError as exc:
        raise FileIOError(f"Failed to read nginx config {path}: {exc}") from exc


def _atomic_write(path: Path, content: str) -> None:
    """Write to a temp file next to ``path`` and rename it into place.

    An existing file keeps its permission bits.
    """
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.tmp_")
    try:
        with os.fdopen(fd, "w", encoding=_ENCODING, errors=_ERRORS, newline="") as f:
            f.write(content)
        if path.exists():
            shutil.copymode(path, tmp)
        os.replace(tmp, path)
    except BaseException:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def write_document(path: Path, content: str) -> None:
    """Replace ``path`` with ``content``; on failure the old file is left intact."""
    path = Path(path)
    try:
        _atomic_write(path, content)
    except OSError as exc:
        raise FileIOError(f"Failed to write nginx config {path}: {exc}") from exc


def backup_path_for(path: Path, timestamp: int) -> Path:
    return path.with_name(f"{path.name}{BACKUP_SUFFIX}.{timestamp}")


def create_backup(path: Path, document: str, *, now: float | None = None) -> Path:
    """Write ``document`` (as read from ``path``) to ``<path>.backup.<unix-ts>``.

    ``document`` must come from ``read_document`` so the bytes round-trip
    unchanged.
    """
    path = Path(path)
    timestamp = int(time.time() if now is None else now)
    dst = backup_path_for(path, timestamp)
    try:
        _atomic_write(dst, document)
    except OSError as exc:
        raise FileIOError(f"Failed to create backup of {path}: {exc}") from exc
    log.info("Backup created: %s", dst)
    return dst


def add_server_to_nginx(
    server: ServerConfig,
    path: Path,
    server_type: str | ServerType,
    *,
    backup: bool = True,
    strategy: MatchStrategy = MatchStrategy.BALANCED,
    document: str | None = None,
) -> Path | None:
    """Append a rendered server block to the http section of ``path``.

    Pass ``document`` when the file has already been read (e.g. for a
    preview) so the confirmed text is the one that gets changed.
    The new text is built in memory first, so an unknown server type or a
    document without an http section leaves no backup and no partial write.
    Returns the backup path, or None when no backup was requested.
    """
    path = Path(path)
    kind = parse_server_type(server_type)
    block = render_server_block(server, kind)
    if document is None:
        document = read_document(path)
    updated = apply_server_block(document, block, strategy=strategy)

    backup_file = create_backup(path, document) if backup else None
    write_document(path, updated)
    log.info("Added %s server block for %r to %s", kind.value, server.server_name, path)
    return backup_file
