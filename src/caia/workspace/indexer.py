"""Build the workspace file index used as conversation context."""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from ..errors import MutationError
from ..sheets import WorkbookClient
from .models import WorkspaceFileDescriptor

logger = logging.getLogger(__name__)

SKIPPED_DIRECTORIES = frozenset({".git"})

LANGUAGES_BY_EXTENSION = {
    ".go": "Go",
    ".js": "JavaScript",
    ".jsx": "JavaScript",
    ".ts": "TypeScript",
    ".tsx": "TypeScript",
    ".py": "Python",
    ".java": "Java",
    ".cpp": "C++",
    ".cc": "C++",
    ".cxx": "C++",
    ".c": "C",
    ".rs": "Rust",
    ".rb": "Ruby",
    ".php": "PHP",
    ".swift": "Swift",
    ".kt": "Kotlin",
    ".cs": "C#",
    ".html": "HTML",
    ".css": "CSS",
    ".md": "Markdown",
    ".json": "JSON",
    ".yaml": "YAML",
    ".yml": "YAML",
    ".xlsx": "Excel",
    ".xls": "Excel",
}


def detect_language(filename: str) -> str:
    """Language label for ``filename`` by extension, empty when unknown."""
    return LANGUAGES_BY_EXTENSION.get(Path(filename).suffix.lower(), "")


class WorkspaceIndexer:
    """Walks the workspace and describes every file and directory in it."""

    def __init__(self, root: Union[str, Path] = ".", client: Optional[WorkbookClient] = None):
        self.root = Path(root)
        self.client = client or WorkbookClient()

    def index(self) -> list[WorkspaceFileDescriptor]:
        """Return a fresh descriptor list.

        Raises:
            NotADirectoryError: the workspace root is not a directory.
        """
        if not self.root.is_dir():
            raise NotADirectoryError(f"Workspace root is not a directory: {self.root}")

        descriptors = []
        for dirpath, dirnames, filenames in os.walk(self.root, onerror=self._on_walk_error):
            dirnames[:] = sorted(d for d in dirnames if d not in SKIPPED_DIRECTORIES)
            base = Path(dirpath)
            for name in dirnames:
                descriptor = self._describe(base / name, is_dir=True)
                if descriptor:
                    descriptors.append(descriptor)
            for name in sorted(filenames):
                descriptor = self._describe(base / name, is_dir=False)
                if descriptor:
                    descriptors.append(descriptor)

        descriptors.sort(key=lambda d: d.path)
        logger.info(f"Indexed {len(descriptors)} entries under {self.root}")
        return descriptors

    def _describe(self, path: Path, is_dir: bool) -> Optional[WorkspaceFileDescriptor]:
        try:
            stat = path.stat()
        except OSError as e:
            logger.warning(f"Skipping {path}: {e}")
            return None

        descriptor = WorkspaceFileDescriptor(
            path=path.relative_to(self.root).as_posix(),
            name=path.name,
            size=stat.st_size,
            mod_time=datetime.fromtimestamp(stat.st_mtime),
            is_dir=is_dir,
        )
        if is_dir:
            return descriptor

        descriptor.language = detect_language(path.name)
        if descriptor.is_spreadsheet:
            try:
                descriptor.sheet_names, descriptor.row_count = self.client.summarize(path)
            except MutationError as e:
                logger.warning(f"Could not read sheets of {path}: {e}")
        return descriptor

    def _on_walk_error(self, error: OSError) -> None:
        logger.warning(f"Error walking workspace: {error}")
