from collections.abc import Iterable

import numpy
import shapely
from pyproj import CRS

from gridsurface.errors import InvalidInputError

POLYGON = "polygon"
POLYLINE = "polyline"
POINT = "point"
GEOMETRY_KINDS = (POLYGON, POLYLINE, POINT)

_SHAPELY_KINDS = {
    "Polygon": POLYGON,
    "MultiPolygon": POLYGON,
    "LineString": POLYLINE,
    "LinearRing": POLYLINE,
    "MultiLineString": POLYLINE,
    "Point": POINT,
    "MultiPoint": POINT,
}


def _first_part(geometry):
    """Unpack `Multi` geometries to their first part"""
    if hasattr(geometry, "geoms"):
        if len(geometry.geoms) == 0:
            raise InvalidInputError(
                f"Cannot use an empty {geometry.geom_type}", stage="attribution"
            )
        return geometry.geoms[0]
    return geometry


def _vertices(geometry):
    geometry = _first_part(geometry)
    if geometry.is_empty:
        raise InvalidInputError(
            f"Cannot use an empty {geometry.geom_type}", stage="attribution"
        )
    if isinstance(geometry, shapely.geometry.Polygon):
        return numpy.array(geometry.exterior.coords)[:, :2]
    return numpy.array(geometry.coords)[:, :2]


class GeometryCollection:
    """A homogeneous collection of polygons, polylines or points.

    The kind is fixed when the collection is created.
    The vertices of each object are stored as they were supplied and are never modified.

    Init parameters
    ---------------
    kind: :class:`str`
        One of "polygon", "polyline" or "point"
    vertices: `List[numpy.ndarray]`
        The (x, y) vertices of each object, one array of shape (n, 2) per object.
        For polygons this is the (closed) ring of the outline.
        For points a single (x, y) per object is expected, or an array of shape (n, 2) holding all points.
    crs: `pyproj.CRS` (optional)
        The coordinate reference system of the vertices.
        The value can be anything accepted by `pyproj.CRS.from_user_input()`.

    Raises
    ------
    :class:`.InvalidInputError`
        The kind is not recognized or the vertices are malformed.
    """

    def __init__(self, kind, vertices, crs=None):
        if kind not in GEOMETRY_KINDS:
            raise InvalidInputError(
                f"Cannot determine the geometry kind, expected one of {GEOMETRY_KINDS}, got: {kind}",
                stage="attribution",
            )
        if kind == POINT:
            try:
                vertices = numpy.asarray(vertices, dtype=float)
            except (TypeError, ValueError) as e:
                raise InvalidInputError(
                    f"Expected points in the shape (n, 2): {e}", stage="attribution"
                ) from e
            if vertices.ndim == 1 and vertices.size == 2:
                vertices = vertices[numpy.newaxis]
            elif vertices.ndim == 3 and vertices.shape[1] == 1:
                # one (1, 2) vertex array per point
                vertices = vertices[:, 0]
            if vertices.ndim != 2 or vertices.shape[1] != 2:
                raise InvalidInputError(
                    f"Expected points in the shape (n, 2), got {vertices.shape}",
                    stage="attribution",
                )
            vertices = vertices.reshape(-1, 1, 2)
        objects = []
        for i, obj in enumerate(vertices):
            try:
                obj = numpy.asarray(obj, dtype=float)
            except (TypeError, ValueError) as e:
                raise InvalidInputError(
                    f"Vertices of object {i} are not numeric: {e}", stage="attribution"
                ) from e
            if obj.ndim != 2 or obj.shape[1] != 2 or len(obj) == 0:
                raise InvalidInputError(
                    f"Expected the vertices of object {i} in the shape (n, 2), got {obj.shape}",
                    stage="attribution",
                )
            objects.append(obj)
        self._kind = kind
        self._objects = objects
        self._crs = None if not crs else CRS.from_user_input(crs)

    @classmethod
    def from_shapely(cls, geometries, crs=None):
        """Create a collection from shapely geometries.

        Parameters
        ----------
        geometries: `Iterable[shapely.Geometry]`
            Polygons, LineStrings or Points, or their Multi versions of which the first part is used.
            A geopandas GeoSeries is accepted as well, in which case its CRS is used if ``crs`` is not supplied.
        crs: `pyproj.CRS` (optional)
            The coordinate reference system of the geometries.

        Raises
        ------
        :class:`.InvalidInputError`
            The geometries are of mixed or unsupported type.
        """
        if crs is None:
            crs = getattr(geometries, "crs", None)
        if isinstance(geometries, shapely.Geometry) or not isinstance(
            geometries, Iterable
        ):
            geometries = [geometries]

        geometries = list(geometries)
        kinds = set()
        for geometry in geometries:
            geom_type = getattr(geometry, "geom_type", None)
            if geom_type not in _SHAPELY_KINDS:
                raise InvalidInputError(
                    f"Cannot determine the geometry kind of {type(geometry).__name__} '{geom_type}'. "
                    "Supported are Polygon, LineString and Point geometries.",
                    stage="attribution",
                )
            kinds.add(_SHAPELY_KINDS[geom_type])
        if len(kinds) > 1:
            raise InvalidInputError(
                f"Expected all geometries to be of the same kind, got: {sorted(kinds)}",
                stage="attribution",
            )
        if not kinds:
            raise InvalidInputError(
                "Cannot determine the geometry kind of an empty collection",
                stage="attribution",
            )
        return cls(kinds.pop(), [_vertices(geom) for geom in geometries], crs=crs)

    def __len__(self):
        return len(self._objects)

    def __iter__(self):
        return iter(self._objects)

    def __getitem__(self, item):
        return self._objects[item]

    def __repr__(self):
        return f"{self.__class__.__name__}(kind={self._kind!r}, n={len(self)})"

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def crs(self):
        return self._crs

    @property
    def vertex_counts(self) -> numpy.ndarray:
        return numpy.array([len(obj) for obj in self._objects], dtype=int)

    def representative_points(self) -> numpy.ndarray:
        """One (x, y) per object used to look up its value.

        For points this is the point itself.
        For polygons and polylines it is the mean of the vertices.
        This is not the area centroid; for polygons the closing vertex counts twice.

        Returns
        -------
        `numpy.ndarray`
            Array of shape (n, 2)
        """
        if not self._objects:
            return numpy.empty((0, 2))
        if self._kind == POINT:
            return numpy.array([obj[0] for obj in self._objects])
        return numpy.array([obj.mean(axis=0) for obj in self._objects])

    def envelopes(self) -> numpy.ndarray:
        """The bounds of each object in (min-x, min-y, max-x, max-y), as an array of shape (n, 4)"""
        if not self._objects:
            return numpy.empty((0, 4))
        return numpy.array(
            [numpy.concatenate([obj.min(axis=0), obj.max(axis=0)]) for obj in self._objects]
        )
