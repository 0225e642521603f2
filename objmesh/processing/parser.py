"""OBJ document parsing into raw geometry."""

import io
from pathlib import Path
from typing import Any, Optional, Union

import numpy as np
import trimesh

from objmesh.core.exceptions import GeometryError, IndexOutOfRangeError, ObjFormatError
from objmesh.geometry.types import RawGeometry


def parse_obj(
    data: bytes,
    source: Optional[Union[str, Path]] = None,
) -> RawGeometry:
    """Parse an OBJ document into positions and a flat index stream.

    Polygons are triangulated by trimesh; vertices are neither merged nor
    reordered.

    Args:
        data: Raw OBJ bytes
        source: Optional file name for error messages

    Returns:
        Parsed geometry

    Raises:
        ObjFormatError: If the bytes are not a usable OBJ document
        IndexOutOfRangeError: If a face references a vertex the document lacks
    """
    if not data or not data.strip():
        raise ObjFormatError(source, "Document is empty")

    try:
        loaded = trimesh.load(
            io.BytesIO(data),
            file_type="obj",
            process=False,
            force="mesh",
            maintain_order=True,
            skip_materials=True,
        )
    except IndexError as e:
        # trimesh indexes its vertex array with the face references directly
        missing = _first_missing_vertex(data)
        if missing is None:
            raise ObjFormatError(source, str(e)) from e
        raise IndexOutOfRangeError(*missing) from e
    except Exception as e:
        raise ObjFormatError(source, str(e)) from e

    vertices, faces = _extract_arrays(loaded, source)

    if len(vertices) == 0:
        # trimesh keeps only vertices that some face references
        raise ObjFormatError(source, "No faces found")

    try:
        return RawGeometry(positions=vertices, indices=faces.reshape(-1))
    except GeometryError as e:
        raise ObjFormatError(source, str(e)) from e


def _extract_arrays(
    loaded: Any,
    source: Optional[Union[str, Path]],
) -> tuple[np.ndarray, np.ndarray]:
    """Pull vertex and face arrays out of whatever trimesh returned."""
    if isinstance(loaded, trimesh.Scene):
        meshes = [g for g in loaded.geometry.values() if hasattr(g, "vertices")]
        if not meshes:
            raise ObjFormatError(source, "No geometry found in document")
        loaded = meshes[0] if len(meshes) == 1 else trimesh.util.concatenate(meshes)

    vertices = getattr(loaded, "vertices", None)
    if vertices is None:
        raise ObjFormatError(
            source, f"Expected mesh geometry, got {type(loaded).__name__}"
        )

    faces = getattr(loaded, "faces", None)
    if faces is None:
        faces = np.zeros((0, 3), dtype=np.int64)

    return np.asarray(vertices), np.asarray(faces)


def _first_missing_vertex(data: bytes) -> Optional[tuple[int, int]]:
    """Find the first face reference past the document's vertices.

    Returns:
        ``(zero_based_index, vertex_count)`` or None if every reference resolves
    """
    lines = [line.split() for line in data.decode("utf-8", errors="replace").splitlines()]
    vertex_count = sum(1 for parts in lines if parts and parts[0] == "v")

    seen = 0
    for parts in lines:
        if not parts:
            continue
        if parts[0] == "v":
            seen += 1
        elif parts[0] == "f":
            for corner in parts[1:]:
                try:
                    reference = int(corner.split("/")[0])
                except ValueError:
                    continue
                # negative references count back from the vertices read so far
                index = reference - 1 if reference > 0 else seen + reference
                if not 0 <= index < vertex_count:
                    return index, vertex_count
    return None
