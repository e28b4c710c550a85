"""Mock file repository for testing."""

from pathlib import Path
from typing import Dict, Union


class MockFileRepository:
    """Mock implementation of FileRepositoryProtocol for testing.

    Allows tests to simulate file operations without touching the filesystem.
    """

    def __init__(self) -> None:
        """Initialize mock repository with empty filesystem."""
        self.files: Dict[str, bytes] = {}
        self.directories: set = set()

    def exists(self, path: Union[str, Path]) -> bool:
        """Check if a file or directory exists."""
        path_str = str(path)
        return path_str in self.files or path_str in self.directories

    def is_file(self, path: Union[str, Path]) -> bool:
        """Check if path is a file."""
        return str(path) in self.files

    def is_dir(self, path: Union[str, Path]) -> bool:
        """Check if path is a directory."""
        return str(path) in self.directories

    def read_binary(self, path: Union[str, Path]) -> bytes:
        """Read file contents as bytes."""
        path_str = str(path)
        if path_str not in self.files:
            raise FileNotFoundError(f"File not found: {path}")
        return self.files[path_str]

    def write_binary(self, path: Union[str, Path], data: bytes) -> None:
        """Write bytes to file."""
        parent = str(Path(path).parent)
        if parent and parent not in self.directories:
            self.directories.add(parent)
        self.files[str(path)] = data

    def mkdir(self, path: Union[str, Path], parents: bool = True) -> None:
        """Create directory (and parents if needed)."""
        path_str = str(path)
        self.directories.add(path_str)
        if parents:
            parent = str(Path(path).parent)
            if parent and parent not in self.directories:
                self.mkdir(parent, parents=True)

    def get_extension(self, path: Union[str, Path]) -> str:
        """Get file extension."""
        return Path(path).suffix.lstrip(".")

    def resolve(self, path: Union[str, Path]) -> Path:
        """Resolve to absolute path."""
        return Path(path).resolve()
