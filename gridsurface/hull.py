import numpy
import shapely
from shapely.geometry import MultiPoint

from gridsurface.errors import InvalidInputError
from gridsurface.scattered_field import ScatteredField

OUTSIDE = 0
INSIDE = 1
ON_BOUNDARY = 2
UNDEFINED = numpy.nan


class ConvexHullFilter:
    """The convex hull around the sample locations of a :class:`.ScatteredField`.

    Raises
    ------
    :class:`.InvalidInputError`
        If the samples span fewer than 3 distinct, non-collinear locations.
    """

    def __init__(self, field: ScatteredField):
        points = numpy.unique(field.points, axis=0)
        hull = MultiPoint(points).convex_hull
        if not isinstance(hull, shapely.geometry.Polygon) or hull.area == 0:
            raise InvalidInputError(
                f"Cannot build a convex hull from {len(points)} distinct sample location(s) "
                "that do not span an area. At least 3 non-collinear locations are required.",
                stage="convex hull",
            )
        self._hull = hull
        shapely.prepare(self._hull)
        self._crs = field.crs

    @property
    def polygon(self) -> shapely.geometry.Polygon:
        return self._hull

    @property
    def boundary(self) -> numpy.ndarray:
        """The hull as a closed ring of (x, y) vertices, the first vertex repeated at the end"""
        return numpy.array(self._hull.exterior.coords)

    @property
    def crs(self):
        return self._crs

    def contains(self, x, y, fold_boundary=True):
        """Test which of the points (``x``, ``y``) lie in the hull.

        Parameters
        ----------
        x: `float` or `numpy.ndarray`
            The x-coordinate(s) of the points
        y: `float` or `numpy.ndarray`
            The y-coordinate(s) of the points
        fold_boundary: `bool`
            Report points on the boundary as ``INSIDE`` (default) instead of ``ON_BOUNDARY``

        Returns
        -------
        `int` or `numpy.ndarray`
            ``OUTSIDE`` (0), ``INSIDE`` (1) or ``ON_BOUNDARY`` (2) for each point
        """
        x = numpy.asarray(x, dtype=float)
        y = numpy.asarray(y, dtype=float)
        covered = shapely.intersects_xy(self._hull, x, y)
        membership = numpy.where(covered, INSIDE, OUTSIDE)
        if not fold_boundary:
            interior = shapely.contains_xy(self._hull, x, y)
            membership = numpy.where(covered & ~interior, ON_BOUNDARY, membership)
        if membership.ndim == 0:
            return int(membership)
        return membership.astype(int)
