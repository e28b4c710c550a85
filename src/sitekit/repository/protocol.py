"""Abstract protocol for file repository operations."""

from pathlib import Path
from typing import Protocol, Union


class FileRepositoryProtocol(Protocol):
    """Protocol defining file repository operations.

    All file I/O in services must go through this repository interface
    to enable testing with mocks and alternative implementations.
    """

    def exists(self, path: Union[str, Path]) -> bool:
        """Check if a file or directory exists."""
        ...

    def is_file(self, path: Union[str, Path]) -> bool:
        """Check if path is a file."""
        ...

    def is_dir(self, path: Union[str, Path]) -> bool:
        """Check if path is a directory."""
        ...

    def read_binary(self, path: Union[str, Path]) -> bytes:
        """Read file contents as bytes."""
        ...

    def write_binary(self, path: Union[str, Path], data: bytes) -> None:
        """Write bytes to file."""
        ...

    def mkdir(self, path: Union[str, Path], parents: bool = True) -> None:
        """Create directory (and parents if needed)."""
        ...

    def get_extension(self, path: Union[str, Path]) -> str:
        """Get file extension."""
        ...

    def resolve(self, path: Union[str, Path]) -> Path:
        """Resolve to absolute path."""
        ...
