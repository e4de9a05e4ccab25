"""Enumeration of document files under a document root."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator, Union

import pathspec

from veisku.data_models import DocumentRoot
from veisku.errors import DocumentReadError

logger = logging.getLogger(__name__)


def build_file_spec(patterns: tuple[str, ...]) -> pathspec.PathSpec:
    """Compile gitignore-style ``files`` patterns; ``!`` excludes."""
    return pathspec.PathSpec.from_lines("gitignore", patterns)


def _is_excluded(spec: pathspec.PathSpec, relative: str) -> bool:
    # Only an explicit negation excludes; a path no pattern mentions is kept.
    return spec.check_file(relative).include is False


def _walk(
    directory: Path,
    root: Path,
    spec: pathspec.PathSpec,
    visited: frozenset,
) -> Iterator[Union[Path, DocumentReadError]]:
    try:
        stat = directory.stat()
    except OSError as exc:
        yield DocumentReadError(f"Failed to stat {directory}: {exc}", directory)
        return
    key = (stat.st_dev, stat.st_ino)
    if key in visited:
        yield DocumentReadError(f"Filesystem loop detected at {directory}", directory)
        return
    visited = visited | {key}

    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        yield DocumentReadError(f"Failed to list directory {directory}: {exc}", directory)
        return

    for entry in entries:
        path = Path(entry.path)
        relative = path.relative_to(root).as_posix()
        try:
            is_dir = entry.is_dir(follow_symlinks=True)
        except OSError as exc:
            if not _is_excluded(spec, relative):
                yield DocumentReadError(f"Failed to stat {path}: {exc}", path)
            continue
        if is_dir:
            if _is_excluded(spec, relative + "/"):
                logger.debug("Skipping excluded directory %s", path)
                continue
            yield from _walk(path, root, spec, visited)
        else:
            yield path


def iter_document_paths(root: DocumentRoot) -> Iterator[Union[Path, DocumentReadError]]:
    """Yield every document file under ``root`` selected by its patterns.

    Directories are walked depth-first in name order, following symlinks.
    Directories the patterns exclude (``!.git/``) are not entered, so nothing
    beneath them is read or reported. A directory that cannot be listed yields
    a :class:`DocumentReadError` in place and the walk carries on.
    """
    spec = build_file_spec(root.files)
    for item in _walk(root.path, root.path, spec, frozenset()):
        if isinstance(item, DocumentReadError):
            logger.debug("Enumeration error under %s: %s", root.path, item)
            yield item
            continue
        relative = item.relative_to(root.path).as_posix()
        if spec.match_file(relative):
            yield item
