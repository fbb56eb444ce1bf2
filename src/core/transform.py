# core/transform.py
import math
from typing import Tuple

import numpy as np

from core.vector import Vector3

class Matrix:
    """
    A 4x4 affine transform.

    Matrices compose with the @ operator and apply right to left:
    (A @ B).apply_point(p) == A.apply_point(B.apply_point(p)).
    Points are multiplied with w=1 and pick up the translation column;
    direction vectors use w=0 and ignore it.
    """
    __slots__ = ("m",)

    def __init__(self, values=None):
        if values is None:
            values = np.identity(4)
        m = np.array(values, dtype=np.float64)
        if m.shape != (4, 4):
            raise ValueError(f"transform must be 4x4, got shape {m.shape}")
        self.m = m

    @classmethod
    def identity(cls) -> "Matrix":
        return cls()

    @classmethod
    def translation(cls, offset: Vector3) -> "Matrix":
        m = np.identity(4)
        m[:3, 3] = offset.to_array()
        return cls(m)

    @classmethod
    def scaling(cls, sx: float, sy: float = None, sz: float = None) -> "Matrix":
        if sy is None:
            sy = sx
        if sz is None:
            sz = sx
        return cls(np.diag([sx, sy, sz, 1.0]))

    @classmethod
    def rotation_x(cls, angle: float) -> "Matrix":
        c, s = math.cos(angle), math.sin(angle)
        return cls([[1, 0, 0, 0],
                    [0, c, -s, 0],
                    [0, s, c, 0],
                    [0, 0, 0, 1]])

    @classmethod
    def rotation_y(cls, angle: float) -> "Matrix":
        c, s = math.cos(angle), math.sin(angle)
        return cls([[c, 0, s, 0],
                    [0, 1, 0, 0],
                    [-s, 0, c, 0],
                    [0, 0, 0, 1]])

    @classmethod
    def rotation_z(cls, angle: float) -> "Matrix":
        c, s = math.cos(angle), math.sin(angle)
        return cls([[c, -s, 0, 0],
                    [s, c, 0, 0],
                    [0, 0, 1, 0],
                    [0, 0, 0, 1]])

    @classmethod
    def about_point(cls, transform: "Matrix", pivot: Vector3) -> "Matrix":
        """Conjugates transform so it acts around pivot instead of the origin."""
        return cls.translation(pivot) @ transform @ cls.translation(-pivot)

    def __matmul__(self, other: "Matrix") -> "Matrix":
        return Matrix(self.m @ other.m)

    def __getitem__(self, index: Tuple[int, int]) -> float:
        return float(self.m[index])

    def apply_point(self, p: Vector3) -> Vector3:
        return Vector3.from_array(self.m[:3, :3] @ p.to_array() + self.m[:3, 3])

    def apply_vector(self, v: Vector3) -> Vector3:
        return Vector3.from_array(self.m[:3, :3] @ v.to_array())

    def apply_normal(self, n: Vector3) -> Vector3:
        """
        Transforms a surface normal with the inverse transpose of the linear
        block, which keeps it perpendicular to the surface under non-uniform
        scale. Falls back to the linear block when it is singular. The result
        is not normalized.
        """
        linear = self.m[:3, :3]
        if np.linalg.det(linear) == 0:
            return self.apply_vector(n)
        return Vector3.from_array(np.linalg.inv(linear).T @ n.to_array())

    def axis_scales(self) -> Tuple[float, float, float]:
        """
        Scale factor along each axis: the lengths of the transformed basis
        vectors i, j and k, i.e. the column norms of the upper-left 3x3 block.
        """
        sx, sy, sz = np.linalg.norm(self.m[:3, :3], axis=0)
        return float(sx), float(sy), float(sz)

    def inverse(self) -> "Matrix":
        return Matrix(np.linalg.inv(self.m))

    def is_close(self, other: "Matrix", tol: float = 1e-9) -> bool:
        return bool(np.allclose(self.m, other.m, atol=tol))

    def __repr__(self) -> str:
        return f"Matrix({self.m.tolist()})"
