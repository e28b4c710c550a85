"""Local filesystem implementation of FileRepositoryProtocol."""

from pathlib import Path
from typing import Union


class LocalFileRepository:
    """Implementation of FileRepositoryProtocol using local filesystem."""

    def exists(self, path: Union[str, Path]) -> bool:
        """Check if a file or directory exists."""
        return Path(path).exists()

    def is_file(self, path: Union[str, Path]) -> bool:
        """Check if path is a file."""
        return Path(path).is_file()

    def is_dir(self, path: Union[str, Path]) -> bool:
        """Check if path is a directory."""
        return Path(path).is_dir()

    def read_binary(self, path: Union[str, Path]) -> bytes:
        """Read file contents as bytes."""
        return Path(path).read_bytes()

    def write_binary(self, path: Union[str, Path], data: bytes) -> None:
        """Write bytes to file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)

    def mkdir(self, path: Union[str, Path], parents: bool = True) -> None:
        """Create directory (and parents if needed)."""
        Path(path).mkdir(parents=parents, exist_ok=True)

    def get_extension(self, path: Union[str, Path]) -> str:
        """Get file extension."""
        return Path(path).suffix.lstrip(".")

    def resolve(self, path: Union[str, Path]) -> Path:
        """Resolve to absolute path."""
        return Path(path).resolve()
