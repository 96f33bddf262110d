"""Private key placement for managed entries."""

import logging
from pathlib import Path

from brev_ssh.protocols import FileSystem

logger = logging.getLogger(__name__)

PRIVATE_KEY_MODE = 0o600


class KeyMaterialError(Exception):
    """The private key is not available on disk."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Private key {path}: {reason}")


class PrivateKeyFile:
    """Key provider backed by a single file.

    When key material is supplied it is (re)written with mode 0600 before
    the path is handed out. Without material the file must already exist.
    """

    def __init__(self, fs: FileSystem, path: Path | str, material: str | None = None):
        self.fs = fs
        self.path = Path(path)
        self._material = material

    def private_key_path(self) -> Path:
        """Return the key path, writing the key first if material is known.

        Raises:
            KeyMaterialError: If no material was given and the file is missing
        """
        if self._material is not None:
            self.fs.write_private(self.path, self._material, PRIVATE_KEY_MODE)
            logger.debug("Wrote private key to %s", self.path)
        elif not self.fs.exists(self.path):
            raise KeyMaterialError(self.path, "file not found")
        return self.path
