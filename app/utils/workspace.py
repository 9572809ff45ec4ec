import logging
import os
import shutil
import uuid
from typing import List

logger = logging.getLogger(__name__)


class Workspace:
    """
    Request-scoped temp directory owning the subprocess artifacts.

    Each request writes into `<root>/<uuid>/` so that discovering the output by
    identifier prefix never observes files of a concurrent request or of an
    earlier crashed run.
    """

    def __init__(self, root: str, prefix: str):
        self.root = root
        self.prefix = prefix
        self.path = os.path.join(root, uuid.uuid4().hex)

    def create(self) -> "Workspace":
        os.makedirs(self.path, exist_ok=True)
        return self

    def find(self) -> List[str]:
        """Paths of files whose name starts with the prefix, sorted by name"""
        try:
            names = sorted(os.listdir(self.path))
        except FileNotFoundError:
            return []
        return [os.path.join(self.path, name) for name in names if name.startswith(self.prefix)]

    def purge(self) -> int:
        """Best-effort removal of partial files; returns how many were deleted"""
        removed = 0
        for path in self.find():
            try:
                os.remove(path)
                removed += 1
            except OSError as e:
                logger.warning(f"Failed to delete partial file {path}: {e}")
        return removed

    def remove(self) -> None:
        """Delete the whole workspace. Failures are logged, never raised"""
        if not os.path.exists(self.path):
            return
        try:
            shutil.rmtree(self.path)
            logger.debug(f"Cleaned up {self.path}")
        except OSError as e:
            logger.error(f"Failed to delete workspace {self.path}: {e}")


def ensure_dir(path: str) -> str:
    """Create the temp root if absent and return its absolute path"""
    path = os.path.abspath(path)
    os.makedirs(path, exist_ok=True)
    return path
