"""
Service for file system operations shared by other services.
"""

from pathlib import Path
from typing import Union

from sitekit.core.logger import get_logger
from sitekit.repository.protocol import FileRepositoryProtocol

from .base import BaseService, ServiceResult

logger = get_logger(__name__)


class FileService(BaseService):
    """
    Service for directory and file bookkeeping.

    All operations go through the injected file repository.
    """

    def __init__(self, file_repository: FileRepositoryProtocol) -> None:
        super().__init__(file_repository)

    def mkdir(self, path: Union[str, Path]) -> ServiceResult[str]:
        """
        Create a directory and its parents if missing.

        Args:
            path: Directory to create

        Returns:
            ServiceResult containing the directory path on success
        """
        path = str(path)
        if not path or path == ".":
            return ServiceResult.ok(data=path or ".", message="Current directory")

        try:
            if self.file_repository.exists(path):
                if not self.file_repository.is_dir(path):
                    return ServiceResult.fail(f"Not a directory: {path}")
                return ServiceResult.ok(data=path, message=f"Directory exists: {path}")

            self.file_repository.mkdir(path, parents=True)
            logger.debug(f"Created directory {path}")
            return ServiceResult.ok(data=path, message=f"Created directory: {path}")
        except OSError as e:
            logger.warning(f"Failed to create directory {path}: {e}")
            return ServiceResult.fail(f"Failed to create directory {path}: {e}")

    def exists(self, path: Union[str, Path]) -> bool:
        """Check whether a file or directory exists."""
        return self.file_repository.exists(path)
