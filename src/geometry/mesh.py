# geometry/mesh.py
import logging
from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

import numpy as np

from core.transform import Matrix
from core.vector import Vector3
from geometry.shapes import Triangle
from materials.material import Material, MaterialProperties

logger = logging.getLogger(__name__)

# Copied for faces that come before any usemtl, or name a material the MTL
# library does not define.
DEFAULT_PROPERTIES = MaterialProperties(
    ka=Vector3(0.1, 0.1, 0.1),
    kd=Vector3(0.8, 0.8, 0.8),
    ks=Vector3(0.0, 0.0, 0.0),
    ns=1.0,
    ni=1.0,
    d=1.0,
)


class MeshFormatError(ValueError):
    """Malformed OBJ or MTL content."""

    def __init__(self, source: str, line_num: int, line: str, reason: str):
        super().__init__(f"{source}:{line_num}: {reason}: {line.strip()!r}")
        self.source = source
        self.line_num = line_num


def _floats(values: List[str], count: int) -> List[float]:
    if len(values) < count:
        raise ValueError(f"expected {count} numbers, got {len(values)}")
    return [float(v) for v in values[:count]]


def parse_mtl(lines: Iterable[str], source: str = "<mtl>") -> Dict[str, MaterialProperties]:
    """Parse MTL text into material records keyed by name."""
    materials: Dict[str, MaterialProperties] = {}
    current: Optional[MaterialProperties] = None

    for line_num, line in enumerate(lines, 1):
        values = line.split()
        if not values or values[0].startswith('#'):
            continue
        key = values[0]
        try:
            if key == 'newmtl':
                current = MaterialProperties()
                materials[" ".join(values[1:])] = current
                continue
            if current is None:
                raise ValueError("statement before newmtl")
            if key in ('Ka', 'Kd', 'Ks', 'Ke'):
                setattr(current, key.lower(), Vector3(*_floats(values[1:], 3)))
            elif key == 'Ns':
                current.ns = float(values[1])
            elif key == 'Ni':
                current.ni = float(values[1])
            elif key == 'd':
                current.d = float(values[1])
            elif key == 'Tr':
                current.d = 1.0 - float(values[1])
            # illum, map_* and the rest are not used for shading.
        except (ValueError, IndexError) as e:
            raise MeshFormatError(source, line_num, line, str(e)) from e

    return materials


def load_mtl(filename: Union[str, Path]) -> Dict[str, MaterialProperties]:
    path = Path(filename)
    with open(path, 'r') as f:
        return parse_mtl(f, source=str(path))


class Face:
    """One triangular face: vertex and normal indices plus its material record."""
    __slots__ = ("vertex_indices", "normal_indices", "properties")

    def __init__(self, vertex_indices: Tuple[int, int, int],
                 normal_indices: Optional[Tuple[int, int, int]],
                 properties: MaterialProperties):
        self.vertex_indices = vertex_indices
        self.normal_indices = normal_indices
        self.properties = properties


class ObjReader:
    """
    Reads a Wavefront OBJ mesh with its MTL materials.

    Polygons are fanned into triangles. Each triangle takes a single flat
    normal: the normal of its first vertex when the file provides `vn`
    data, otherwise the winding normal. Texture coordinates are ignored.
    """
    def __init__(self, lines: Iterable[str],
                 materials: Optional[Dict[str, MaterialProperties]] = None,
                 base_dir: Optional[Path] = None,
                 source: str = "<obj>"):
        self.vertices: List[Vector3] = []
        self.normals: List[Vector3] = []
        self.faces: List[Face] = []
        self.materials: Dict[str, MaterialProperties] = dict(materials or {})
        self.source = source
        self._base_dir = base_dir
        self._parse(lines)
        logger.info("Loaded %s: %d vertices, %d normals, %d faces",
                    source, len(self.vertices), len(self.normals), len(self.faces))

    @classmethod
    def from_file(cls, filename: Union[str, Path]) -> "ObjReader":
        path = Path(filename)
        with open(path, 'r') as f:
            return cls(f, base_dir=path.parent, source=str(path))

    def _load_library(self, name: str):
        if self._base_dir is None:
            logger.warning("%s: mtllib %s ignored, no base directory", self.source, name)
            return
        path = self._base_dir / name
        if not path.exists():
            # Fall back to the MTL file named after the OBJ itself.
            path = Path(self.source).with_suffix('.mtl')
        self.materials.update(load_mtl(path))

    def _resolve(self, index: int, count: int) -> int:
        # OBJ indices are 1-based; negative ones count back from the end.
        resolved = index - 1 if index > 0 else count + index
        if not 0 <= resolved < count:
            raise ValueError(f"index {index} out of range")
        return resolved

    def _parse_corner(self, corner: str) -> Tuple[int, Optional[int]]:
        indices = corner.split('/')
        v_idx = self._resolve(int(indices[0]), len(self.vertices))
        n_idx = None
        if len(indices) > 2 and indices[2]:
            n_idx = self._resolve(int(indices[2]), len(self.normals))
        return v_idx, n_idx

    def _parse(self, lines: Iterable[str]):
        current = replace(DEFAULT_PROPERTIES)

        for line_num, line in enumerate(lines, 1):
            values = line.split()
            if not values or values[0].startswith('#'):
                continue
            key = values[0]
            try:
                if key == 'v':
                    self.vertices.append(Vector3(*_floats(values[1:], 3)))
                elif key == 'vn':
                    self.normals.append(Vector3(*_floats(values[1:], 3)))
                elif key == 'mtllib':
                    self._load_library(" ".join(values[1:]))
                elif key == 'usemtl':
                    name = " ".join(values[1:])
                    current = self.materials.get(name)
                    if current is None:
                        logger.warning("%s:%d: unknown material %r, using default",
                                       self.source, line_num, name)
                        current = replace(DEFAULT_PROPERTIES)
                elif key == 'f':
                    corners = [self._parse_corner(c) for c in values[1:]]
                    if len(corners) < 3:
                        raise ValueError("face needs at least 3 vertices")
                    # Triangulate the face (assuming it's convex).
                    for i in range(1, len(corners) - 1):
                        tri = (corners[0], corners[i], corners[i + 1])
                        v_idx = tuple(c[0] for c in tri)
                        n_idx = tuple(c[1] for c in tri)
                        self.faces.append(Face(v_idx, None if None in n_idx else n_idx, current))
            except (ValueError, IndexError) as e:
                raise MeshFormatError(self.source, line_num, line, str(e)) from e

    def face_points(self) -> List[Tuple[Vector3, Vector3, Vector3]]:
        return [tuple(self.vertices[i] for i in face.vertex_indices) for face in self.faces]

    def center(self) -> Vector3:
        if not self.vertices:
            return Vector3(0.0, 0.0, 0.0)
        return Vector3.from_array(np.mean([v.to_array() for v in self.vertices], axis=0))

    def apply_transform(self, matrix: Matrix):
        """
        Transforms the mesh about its own center: scaling and rotation keep
        the model in place instead of swinging it around the world origin.
        """
        about_center = Matrix.about_point(matrix, self.center())
        self.vertices = [about_center.apply_point(v) for v in self.vertices]
        # Triangle renormalizes these, keeping a degenerate normal as zero.
        self.normals = [about_center.apply_normal(n) for n in self.normals]

    def triangles(self) -> List[Triangle]:
        triangles = []
        for face in self.faces:
            p0, p1, p2 = (self.vertices[i] for i in face.vertex_indices)
            normal = self.normals[face.normal_indices[0]] if face.normal_indices else None
            triangles.append(Triangle(p0, p1, p2, normal))
        return triangles

    def attach_materials(self, scene) -> List[Material]:
        """
        Adds one Triangle and one Material per face to scene. Zero-area
        faces can never be hit and are left out.
        """
        attached = []
        skipped = 0
        for face, triangle in zip(self.faces, self.triangles()):
            if triangle.denom == 0:
                skipped += 1
                continue
            index = scene.add_shape(triangle)
            attached.append(scene.add_material(Material.from_properties(index, face.properties)))
        if skipped:
            logger.warning("%s: skipped %d degenerate faces", self.source, skipped)
        return attached


def load_obj(filename: Union[str, Path], scene, transform: Optional[Matrix] = None) -> List[Material]:
    """Load an OBJ file, optionally place it with transform, and add its faces to scene."""
    reader = ObjReader.from_file(filename)
    if transform is not None:
        reader.apply_transform(transform)
    return reader.attach_materials(scene)
