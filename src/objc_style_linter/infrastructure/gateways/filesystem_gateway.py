"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

import shutil
from pathlib import Path

from objc_style_linter.domain.constants import SOURCE_EXTENSIONS
from objc_style_linter.domain.protocols import FileSystemProtocol


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def exists(self, path: str) -> bool:
        """Return True if path exists (file or directory)."""
        return Path(path).exists()

    def glob_source_files(self, path: str) -> list[str]:
        """Get all Objective-C sources in path (recursive if directory)."""
        path_obj = Path(path)
        if path_obj.is_dir():
            return sorted(
                str(p) for p in path_obj.rglob("*") if p.suffix in SOURCE_EXTENSIONS and p.is_file()
            )
        return [str(path_obj)] if path_obj.suffix in SOURCE_EXTENSIONS else []

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content, keeping line endings as they are on disk."""
        with Path(path).open(encoding=encoding, newline="") as f:
            return f.read()

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content without translating line endings."""
        with Path(path).open("w", encoding=encoding, newline="") as f:
            f.write(content)

    def copy_file(self, source: str, destination: str) -> None:
        """Copy a file, preserving metadata."""
        shutil.copy2(source, destination)
