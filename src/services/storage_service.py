"""Low-level JSON file I/O with atomic writes and locking."""
import copy
import json
import os
import sys
import tempfile
import time
from contextlib import contextmanager
from typing import Any, Dict, Optional

if sys.platform == "win32":
    import msvcrt
else:
    import fcntl

LOCK_POLL_INTERVAL = 0.05


def load_json(file_path: str, default: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Load and parse a UTF-8 JSON file.

    Args:
        file_path: Path to JSON file
        default: Returned (as a copy) when the file doesn't exist; if None,
            a missing file raises FileNotFoundError

    Returns:
        dict: Parsed JSON content

    Raises:
        FileNotFoundError: If file doesn't exist and no default given
        json.JSONDecodeError: If JSON is malformed
    """
    if not os.path.exists(file_path):
        if default is None:
            raise FileNotFoundError(f"File not found: {file_path}")
        return copy.deepcopy(default)

    with open(file_path, "r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise json.JSONDecodeError(
                f"Malformed JSON in {file_path}: {e.msg}",
                e.doc,
                e.pos
            ) from e


def save_json(file_path: str, data: Dict[str, Any]) -> None:
    """
    Save data to a JSON file atomically.

    Writes to a temp file in the same directory, fsyncs, then replaces the
    target so readers never see a half-written file.

    Raises:
        IOError: If the write or rename fails
    """
    dir_path = os.path.dirname(file_path)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)

    temp_fd, temp_path = tempfile.mkstemp(
        dir=dir_path or ".",
        prefix=".tmp_",
        suffix=".json"
    )

    try:
        with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, file_path)
    except OSError as e:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise IOError(f"Failed to write file {file_path}: {e}") from e


def _try_lock(fd: int) -> bool:
    try:
        if sys.platform == "win32":
            msvcrt.locking(fd, msvcrt.LK_NBLCK, 1)
        else:
            fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
        return True
    except OSError:
        return False


def _unlock(fd: int) -> None:
    if sys.platform == "win32":
        msvcrt.locking(fd, msvcrt.LK_UNLCK, 1)
    else:
        fcntl.flock(fd, fcntl.LOCK_UN)


@contextmanager
def lock_file(file_path: str, timeout: float = 5.0):
    """
    Hold an exclusive lock for a data file.

    The lock is taken on a sibling `<file_path>.lock` file so the data file
    itself can be replaced atomically while locked.

    Usage:
        with lock_file("data/registrations.json"):
            data = load_json("data/registrations.json", default={})
            ...
            save_json("data/registrations.json", data)

    Raises:
        TimeoutError: If the lock isn't acquired within timeout seconds
    """
    lock_path = f"{file_path}.lock"
    dir_path = os.path.dirname(lock_path)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)

    fd = os.open(lock_path, os.O_CREAT | os.O_RDWR)
    try:
        deadline = time.monotonic() + timeout
        while not _try_lock(fd):
            if time.monotonic() > deadline:
                raise TimeoutError(f"Could not acquire lock on {file_path} within {timeout}s")
            time.sleep(LOCK_POLL_INTERVAL)

        try:
            yield
        finally:
            _unlock(fd)
    finally:
        os.close(fd)
