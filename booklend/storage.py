import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from booklend.errors import DecodeError, StorageError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_text(path: PathLike) -> Optional[str]:
    """Return the file's contents, or None when the file does not exist."""
    path = Path(path)
    if not path.exists():
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as exc:
        raise DecodeError(f"{path}: not valid UTF-8 ({exc.reason} at byte {exc.start})") from exc
    except OSError as exc:
        raise StorageError(path, exc) from exc


def write_text(path: PathLike, text: str) -> None:
    """Replace the file with ``text``.

    The data goes to a temp file in the same directory first and is moved
    over the target with ``os.replace``, so a crash never leaves a half
    written file behind.
    """
    path = Path(path)
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as exc:
        raise StorageError(path, exc) from exc
    finally:
        if tmp_name and os.path.exists(tmp_name):
            try:
                os.remove(tmp_name)
            except OSError:
                logger.warning(f"Could not remove temp file {tmp_name}")
