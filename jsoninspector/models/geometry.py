"""
Geometry primitives parsed from Elements-style JSON.

Keys follow the Elements serialization (``X``/``Y``/``Z``, ``Vertices``,
``Perimeter``/``Voids``, ``Matrix.Components``, ``Min``/``Max``). Values are
immutable; construction validates the data and raises ``ValueError``
(pydantic's ``ValidationError`` is one) on anything malformed.
"""

from typing import List, Optional, Tuple

import numpy as np
from pydantic import BaseModel, Field, field_validator, model_validator
from shapely.geometry import Polygon as ShapelyPolygon

# Geometric tolerance shared by all validity checks
EPSILON = 1e-5

IDENTITY_COMPONENTS = [1.0, 0.0, 0.0, 0.0,
                       0.0, 1.0, 0.0, 0.0,
                       0.0, 0.0, 1.0, 0.0]


class GeometryModel(BaseModel):
    """Base for immutable geometry values."""

    class Config:
        frozen = True
        populate_by_name = True
        allow_inf_nan = False


class Vector3(GeometryModel):
    x: float = Field(alias="X")
    y: float = Field(alias="Y")
    z: float = Field(default=0.0, alias="Z")

    @classmethod
    def from_array(cls, values) -> "Vector3":
        x, y, z = (float(v) for v in values)
        return cls(x=x, y=y, z=z)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def distance_to(self, other: "Vector3") -> float:
        return float(np.linalg.norm(self.to_array() - other.to_array()))

    def is_almost_equal_to(self, other: "Vector3", tolerance: float = EPSILON) -> bool:
        return self.distance_to(other) <= tolerance


def _check_segments(vertices: List[Vector3], closed: bool):
    """Reject consecutive vertices that coincide."""
    count = len(vertices)
    last = count if closed else count - 1
    for i in range(last):
        a = vertices[i]
        b = vertices[(i + 1) % count]
        if a.is_almost_equal_to(b):
            raise ValueError(f"Zero-length segment between vertices {i} and {(i + 1) % count}")


class Line(GeometryModel):
    start: Vector3 = Field(alias="Start")
    end: Vector3 = Field(alias="End")

    def length(self) -> float:
        return self.start.distance_to(self.end)


class Polyline(GeometryModel):
    vertices: List[Vector3] = Field(alias="Vertices")

    @field_validator("vertices")
    @classmethod
    def _enough_vertices(cls, vertices: List[Vector3]) -> List[Vector3]:
        if len(vertices) < 2:
            raise ValueError("A polyline needs at least two vertices")
        _check_segments(vertices, closed=False)
        return vertices

    def segments(self) -> List[Line]:
        return [Line(start=a, end=b) for a, b in zip(self.vertices, self.vertices[1:])]

    def length(self) -> float:
        return sum(segment.length() for segment in self.segments())


class Polygon(GeometryModel):
    """Closed planar loop; the closing segment is implicit."""

    vertices: List[Vector3] = Field(alias="Vertices")

    @field_validator("vertices")
    @classmethod
    def _valid_loop(cls, vertices: List[Vector3]) -> List[Vector3]:
        if len(vertices) < 3:
            raise ValueError("A polygon needs at least three vertices")
        _check_segments(vertices, closed=True)
        points = np.array([v.to_array() for v in vertices])
        origin, normal = _fit_plane(points)
        if normal is None:
            raise ValueError("Polygon vertices are collinear")
        deviation = np.abs((points - origin) @ normal)
        if float(deviation.max()) > EPSILON:
            raise ValueError("Polygon vertices are not coplanar")
        return vertices

    def points(self) -> np.ndarray:
        return np.array([v.to_array() for v in self.vertices])

    def plane(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return (origin, unit normal) of the best-fit plane."""
        return _fit_plane(self.points())

    def to_polyline(self) -> Polyline:
        """Open polyline that revisits the first vertex."""
        return Polyline(vertices=list(self.vertices) + [self.vertices[0]])

    def segments(self) -> List[Line]:
        return self.to_polyline().segments()


def _fit_plane(points: np.ndarray):
    origin = points.mean(axis=0)
    _, singular, vt = np.linalg.svd(points - origin)
    # Rank below two means every point lies on one line
    if len(singular) < 2 or singular[1] <= EPSILON:
        return origin, None
    return origin, vt[-1] / np.linalg.norm(vt[-1])


def _plane_basis(normal: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    reference = np.array([0.0, 0.0, 1.0]) if abs(normal[2]) < 0.9 else np.array([1.0, 0.0, 0.0])
    u = np.cross(reference, normal)
    u /= np.linalg.norm(u)
    v = np.cross(normal, u)
    return u, v


class Profile(GeometryModel):
    perimeter: Polygon = Field(alias="Perimeter")
    voids: Optional[List[Polygon]] = Field(default=None, alias="Voids")
    name: Optional[str] = Field(default=None, alias="Name")

    def loops(self) -> List[Polygon]:
        """Perimeter followed by every void."""
        return [self.perimeter] + list(self.voids or [])

    def area(self) -> float:
        """Planar area of the perimeter minus its voids."""
        origin, normal = self.perimeter.plane()
        u, v = _plane_basis(normal)

        def project(polygon: Polygon):
            local = polygon.points() - origin
            return list(zip((local @ u).tolist(), (local @ v).tolist()))

        surface = ShapelyPolygon(
            project(self.perimeter),
            [project(void) for void in (self.voids or [])]
        )
        return float(surface.area)


class Matrix(GeometryModel):
    components: List[float] = Field(alias="Components")

    @field_validator("components")
    @classmethod
    def _twelve_components(cls, components: List[float]) -> List[float]:
        if len(components) != 12:
            raise ValueError(f"A matrix needs 12 components, got {len(components)}")
        return components

    def to_array(self) -> np.ndarray:
        """Rows are the X, Y and Z axes followed by their translation term."""
        return np.array(self.components, dtype=float).reshape(3, 4)


class Transform(GeometryModel):
    """Rigid frame: local axes are matrix rows, translation is the last column."""

    matrix: Matrix = Field(default_factory=lambda: Matrix(components=IDENTITY_COMPONENTS),
                           alias="Matrix")

    @classmethod
    def from_translation(cls, vector: Vector3) -> "Transform":
        components = list(IDENTITY_COMPONENTS)
        components[3], components[7], components[11] = vector.x, vector.y, vector.z
        return cls(matrix=Matrix(components=components))

    @property
    def origin(self) -> Vector3:
        return Vector3.from_array(self.matrix.to_array()[:, 3])

    @property
    def x_axis(self) -> Vector3:
        return Vector3.from_array(self.matrix.to_array()[0, :3])

    @property
    def y_axis(self) -> Vector3:
        return Vector3.from_array(self.matrix.to_array()[1, :3])

    @property
    def z_axis(self) -> Vector3:
        return Vector3.from_array(self.matrix.to_array()[2, :3])

    def apply(self, point: Vector3) -> Vector3:
        m = self.matrix.to_array()
        return Vector3.from_array(m[:, :3].T @ point.to_array() + m[:, 3])

    def axis_lines(self, length: float = 1.0) -> List[Line]:
        """One line per local axis, drawn from the origin."""
        origin = self.origin.to_array()
        lines = []
        for axis in (self.x_axis, self.y_axis, self.z_axis):
            direction = axis.to_array()
            norm = np.linalg.norm(direction)
            if norm <= EPSILON:
                raise ValueError("Transform has a degenerate axis")
            end = origin + direction / norm * length
            lines.append(Line(start=Vector3.from_array(origin), end=Vector3.from_array(end)))
        return lines


class BBox3(GeometryModel):
    min: Vector3 = Field(alias="Min")
    max: Vector3 = Field(alias="Max")

    def corners(self) -> List[Vector3]:
        """Bottom face counter-clockwise, then the top face."""
        lo, hi = self.min, self.max
        return [
            Vector3(x=lo.x, y=lo.y, z=lo.z),
            Vector3(x=hi.x, y=lo.y, z=lo.z),
            Vector3(x=hi.x, y=hi.y, z=lo.z),
            Vector3(x=lo.x, y=hi.y, z=lo.z),
            Vector3(x=lo.x, y=lo.y, z=hi.z),
            Vector3(x=hi.x, y=lo.y, z=hi.z),
            Vector3(x=hi.x, y=hi.y, z=hi.z),
            Vector3(x=lo.x, y=hi.y, z=hi.z),
        ]

    def edges(self) -> List[Line]:
        """The twelve wireframe edges of the box."""
        c = self.corners()
        bottom = [Line(start=c[i], end=c[(i + 1) % 4]) for i in range(4)]
        top = [Line(start=c[4 + i], end=c[4 + (i + 1) % 4]) for i in range(4)]
        verticals = [Line(start=c[i], end=c[4 + i]) for i in range(4)]
        return bottom + top + verticals


class MeshVertex(GeometryModel):
    position: Vector3 = Field(alias="Position")
    normal: Optional[Vector3] = Field(default=None, alias="Normal")


class MeshTriangle(GeometryModel):
    vertex_indices: List[int] = Field(alias="VertexIndices")

    @field_validator("vertex_indices")
    @classmethod
    def _three_indices(cls, indices: List[int]) -> List[int]:
        if len(indices) != 3:
            raise ValueError("A triangle references exactly three vertices")
        return indices


class Mesh(GeometryModel):
    vertices: List[MeshVertex] = Field(default_factory=list, alias="Vertices")
    triangles: List[MeshTriangle] = Field(default_factory=list, alias="Triangles")

    @model_validator(mode="after")
    def _indices_in_range(self) -> "Mesh":
        count = len(self.vertices)
        for triangle in self.triangles:
            for index in triangle.vertex_indices:
                if index < 0 or index >= count:
                    raise ValueError(f"Triangle index {index} out of range for {count} vertices")
        return self

    @classmethod
    def sphere(cls, radius: float, divisions: int = 10) -> "Mesh":
        """UV sphere centered on the origin with poles on the Z axis."""
        if radius <= 0:
            raise ValueError("Sphere radius must be positive")
        if divisions < 3:
            raise ValueError("A sphere needs at least three divisions")

        polar = np.linspace(0.0, np.pi, divisions + 1)[1:-1]
        azimuth = np.linspace(0.0, 2.0 * np.pi, divisions, endpoint=False)
        rings = np.stack([
            np.outer(np.sin(polar), np.cos(azimuth)),
            np.outer(np.sin(polar), np.sin(azimuth)),
            np.repeat(np.cos(polar)[:, None], divisions, axis=1),
        ], axis=-1).reshape(-1, 3)
        normals = np.vstack([[0.0, 0.0, 1.0], rings, [0.0, 0.0, -1.0]])

        def ring_index(ring: int, step: int) -> int:
            return 1 + ring * divisions + step % divisions

        bottom = len(normals) - 1
        ring_count = divisions - 1
        faces = []
        for step in range(divisions):
            faces.append((0, ring_index(0, step), ring_index(0, step + 1)))
        for ring in range(ring_count - 1):
            for step in range(divisions):
                a = ring_index(ring, step)
                b = ring_index(ring, step + 1)
                c = ring_index(ring + 1, step + 1)
                d = ring_index(ring + 1, step)
                faces.append((a, d, c))
                faces.append((a, c, b))
        for step in range(divisions):
            faces.append((bottom, ring_index(ring_count - 1, step + 1), ring_index(ring_count - 1, step)))

        vertices = [
            MeshVertex(position=Vector3.from_array(n * radius), normal=Vector3.from_array(n))
            for n in normals
        ]
        triangles = [MeshTriangle(vertex_indices=list(face)) for face in faces]
        return cls(vertices=vertices, triangles=triangles)
