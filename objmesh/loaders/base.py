"""Base class for pluggable mesh content loaders."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence, Union

from objmesh.core.exceptions import ObjLoadError
from objmesh.geometry.types import Mesh


class AssetLoader(ABC):
    """Turns the bytes of one asset into a mesh.

    Subclasses declare the file extensions they handle and implement
    ``load``; file reading and the checks around it live here.
    """

    # Largest file accepted, in bytes
    max_file_size: int = 512 * 1024 * 1024

    @abstractmethod
    def extensions(self) -> Sequence[str]:
        """Lowercase extensions (without the dot) this loader handles."""
        pass

    @abstractmethod
    def load(self, data: bytes, source: Optional[Union[str, Path]] = None) -> Mesh:
        """Build a mesh from raw bytes.

        Args:
            data: File contents
            source: Optional name used in errors and logs

        Returns:
            Assembled mesh
        """
        pass

    def load_file(self, file_path: Union[str, Path]) -> Mesh:
        """Read a file and load it.

        Args:
            file_path: Path to the asset

        Returns:
            Assembled mesh

        Raises:
            ObjLoadError: If the file cannot be read
        """
        file_path = Path(file_path)
        self._validate_file(file_path)

        try:
            data = file_path.read_bytes()
        except OSError as e:
            raise ObjLoadError(file_path, str(e)) from e

        return self.load(data, source=file_path)

    def _validate_file(self, file_path: Path) -> None:
        """Validate file before loading.

        Raises:
            ObjLoadError: If file validation fails
        """
        if not file_path.exists():
            raise ObjLoadError(file_path, "File does not exist")

        if not file_path.is_file():
            raise ObjLoadError(file_path, "Path is not a file")

        file_size = file_path.stat().st_size

        if file_size == 0:
            raise ObjLoadError(file_path, "File is empty")

        if file_size > self.max_file_size:
            raise ObjLoadError(
                file_path,
                f"File too large ({file_size / 1024**2:.1f}MB > "
                f"{self.max_file_size / 1024**2:.1f}MB limit)",
            )

        if file_path.suffix.lower().lstrip(".") not in self.extensions():
            raise ObjLoadError(
                file_path,
                f"Unsupported file extension: {file_path.suffix}",
            )
