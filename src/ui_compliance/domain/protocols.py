"""Ports the engine and CLI depend on. Implementations live in infrastructure / interface."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ui_compliance.domain.entities import FileKind
    from ui_compliance.domain.markup import MarkupDocument


class MarkupParserProtocol(Protocol):
    """Parser front-end: source text -> markup AST."""

    def parse(
        self, source: str, file_kind: "FileKind", file_path: str | None = None
    ) -> "MarkupDocument":
        """
        Parse source text. Raises ParseError when the text is not valid markup/script.

        file_path only refines the grammar choice (.ts files do not allow markup).
        """
        ...


class TelemetryPort(Protocol):
    """Protocol for telemetry/UI updates."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...
    def handshake(self) -> None: ...


class FileSystemProtocol(Protocol):
    """Protocol for filesystem operations - abstracts Path usage."""

    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        ...

    def is_directory(self, path: str) -> bool:
        """Check if path is a directory."""
        ...

    def glob_source_files(self, path: str, suffixes: tuple[str, ...]) -> list[str]:
        """Get all files with one of the suffixes under path (recursive if directory)."""
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content from a file."""
        ...

    def write_text(self, path: str, content: str, encoding: str = "utf-8") -> None:
        """Write text content to a file."""
        ...
