"""Helpers shared by the JSON-file repositories.

Writes go to a temporary file in the same directory which then
replaces the target with ``os.replace``. Readers therefore see either
the old document or the new one, never a half-written file.

Every read-modify-write runs under ``locked(path)``, an exclusive
inter-process lock on a sibling ``.lock`` file, so two writers never
start from the same version of a document.
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from decimal import InvalidOperation
from pathlib import Path
from typing import Any

from filelock import FileLock, Timeout

from storefront.domain.exceptions import StorageError, ValidationError

LOCK_TIMEOUT_SECONDS = 10


@contextmanager
def locked(path: Path) -> Iterator[None]:
    lock = FileLock(str(path.with_name(path.name + ".lock")), timeout=LOCK_TIMEOUT_SECONDS)
    try:
        with lock:
            yield
    except Timeout as exc:
        raise StorageError(f"Timed out waiting for the lock on {path.name}") from exc


@contextmanager
def decoding(path: Path) -> Iterator[None]:
    """Turn a malformed record into StorageError."""
    try:
        yield
    except (KeyError, TypeError, ValueError, InvalidOperation, ValidationError) as exc:
        raise StorageError(f"Malformed record in {path.name}: {exc!r}") from exc


def ensure_file(path: Path, default: Any) -> None:
    if path.exists():
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    with locked(path):
        if not path.exists():
            write_atomic(path, default)


def read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise StorageError(f"Cannot read {path.name}: {exc}") from exc


def write_atomic(path: Path, data: Any) -> None:
    payload = json.dumps(data, indent=2) + "\n"
    tmp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(payload)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise StorageError(f"Cannot write {path.name}: {exc}") from exc
