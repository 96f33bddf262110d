"""Filesystem implementations used by the reconciliation engine."""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_DIR_MODE = 0o700


class LocalFileSystem:
    """Reads and writes the real disk as UTF-8 text.

    Writes truncate and rewrite in place; there is no temp file and rename.
    Missing parent directories are created with mode 0700.
    """

    def exists(self, path: Path) -> bool:
        return Path(path).is_file()

    def read_text(self, path: Path) -> str:
        return Path(path).read_text(encoding="utf-8")

    def mkdir(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True, mode=DEFAULT_DIR_MODE)

    def write_text(self, path: Path, data: str) -> None:
        path = Path(path)
        self.mkdir(path.parent)
        path.write_text(data, encoding="utf-8")
        logger.debug("Wrote %d chars to %s", len(data), path)

    def touch(self, path: Path) -> None:
        path = Path(path)
        self.mkdir(path.parent)
        if not path.exists():
            path.touch(mode=0o644)
            logger.info("Created %s", path)

    def write_private(self, path: Path, data: str, mode: int) -> None:
        path = Path(path)
        self.mkdir(path.parent)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        # O_CREAT only applies mode to new files
        os.chmod(path, mode)


class MemoryFileSystem:
    """In-memory filesystem for tests.

    Keeps file contents and permission bits in dicts keyed by path, and
    counts writes per path so tests can check flush behaviour. Directories
    are recorded as files are written.
    """

    def __init__(self, files: dict[Path | str, str] | None = None):
        self.files: dict[Path, str] = {}
        self.modes: dict[Path, int] = {}
        self.writes: dict[Path, int] = {}
        self.dirs: set[Path] = set()
        for path, text in (files or {}).items():
            self.mkdir(Path(path).parent)
            self.files[Path(path)] = text

    def exists(self, path: Path) -> bool:
        return Path(path) in self.files

    def read_text(self, path: Path) -> str:
        try:
            return self.files[Path(path)]
        except KeyError:
            raise FileNotFoundError(2, "No such file or directory", str(path)) from None

    def mkdir(self, path: Path) -> None:
        path = Path(path)
        self.dirs.update([path, *path.parents])

    def write_text(self, path: Path, data: str) -> None:
        path = Path(path)
        self.mkdir(path.parent)
        self.files[path] = data
        self.writes[path] = self.writes.get(path, 0) + 1

    def touch(self, path: Path) -> None:
        path = Path(path)
        self.mkdir(path.parent)
        self.files.setdefault(path, "")

    def write_private(self, path: Path, data: str, mode: int) -> None:
        self.write_text(path, data)
        self.modes[Path(path)] = mode
