"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

from pathlib import Path

from ui_compliance.domain.protocols import FileSystemProtocol

# Directories never worth scanning for component sources.
SKIPPED_DIRECTORIES = frozenset({"node_modules", ".git", "dist", "build", ".next", "coverage"})


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        return str(Path(path).resolve())

    def is_directory(self, path: str) -> bool:
        """Check if path is a directory."""
        return Path(path).is_dir()

    def glob_source_files(self, path: str, suffixes: tuple[str, ...]) -> list[str]:
        """Get all files with one of the suffixes in path (recursive if directory), sorted."""
        path_obj = Path(path).resolve()
        if not path_obj.is_dir():
            return [str(path_obj)] if path_obj.suffix in suffixes else []
        found = [
            p for p in path_obj.rglob("*")
            if p.is_file()
            and p.suffix in suffixes
            and not SKIPPED_DIRECTORIES.intersection(p.relative_to(path_obj).parts)
        ]
        return sorted(str(p) for p in found)

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        return Path(path).read_text(encoding=encoding)

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        Path(path).write_text(content, encoding=encoding)
