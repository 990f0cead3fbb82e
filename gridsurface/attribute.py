import warnings

import numpy
from pyproj import Transformer

from gridsurface.attributed_table import AttributedTable
from gridsurface.errors import InvalidInputError
from gridsurface.geometry import POINT, GeometryCollection
from gridsurface.hull import ConvexHullFilter
from gridsurface.surface_grid import SurfaceGrid


def validate_viewport(viewport):
    """Check the viewport is given as (min-x, min-y, max-x, max-y) and return it as a tuple of floats"""
    try:
        viewport = tuple(float(val) for val in viewport)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(
            f"Expected the viewport as numeric (min-x, min-y, max-x, max-y), got: {viewport}",
            stage="attribution",
        ) from e
    if len(viewport) != 4:
        raise InvalidInputError(
            f"Expected the viewport as (min-x, min-y, max-x, max-y), got {len(viewport)} values",
            stage="attribution",
        )
    if viewport[0] > viewport[2] or viewport[1] > viewport[3]:
        raise InvalidInputError(
            f"The minimum of the viewport exceeds the maximum: {viewport}",
            stage="attribution",
        )
    return viewport


def _in_viewport(points, viewport):
    return (
        (points[:, 0] >= viewport[0])
        & (points[:, 0] <= viewport[2])
        & (points[:, 1] >= viewport[1])
        & (points[:, 1] <= viewport[3])
    )


def _envelope_in_viewport(envelopes, viewport):
    return (
        (envelopes[:, 0] > viewport[0])
        & (envelopes[:, 1] > viewport[1])
        & (envelopes[:, 2] < viewport[2])
        & (envelopes[:, 3] < viewport[3])
    )


class ObjectAttributor:
    """Attribute each object in a :class:`.GeometryCollection` with the grid value at its representative point.

    Init parameters
    ---------------
    grid: :class:`.SurfaceGrid`
        The grid from which values are looked up
    hull_filter: :class:`.ConvexHullFilter` (optional)
        If supplied, each object is flagged as inside (1) or outside (0) the hull,
        and objects that fall outside of the grid get a NaN value.
        If not supplied, the flag is NaN and objects outside of the grid get the value of the nearest edge cell.
    require_within_viewport: :class:`bool`
        Additionally drop polygons and polylines that do not lie entirely within the viewport. Default: False
    """

    def __init__(
        self,
        grid: SurfaceGrid,
        hull_filter: ConvexHullFilter = None,
        require_within_viewport: bool = False,
    ):
        if not isinstance(grid, SurfaceGrid):
            raise TypeError(f"Expected a SurfaceGrid, got {type(grid)}")
        self.grid = grid
        self.hull_filter = hull_filter
        self.require_within_viewport = require_within_viewport

    def surviving_objects(self, objects: GeometryCollection, viewport=None):
        """Indices of the objects that are visible in the ``viewport``, in their original order"""
        points = objects.representative_points()
        keep = numpy.ones(len(objects), dtype=bool)
        if viewport is None:
            return numpy.flatnonzero(keep)
        viewport = validate_viewport(viewport)
        if self.require_within_viewport and objects.kind != POINT:
            keep &= _envelope_in_viewport(objects.envelopes(), viewport)
        keep &= _in_viewport(points, viewport)
        return numpy.flatnonzero(keep)

    def _to_grid_crs(self, points, objects_crs):
        grid_crs = self.grid.crs
        if objects_crs is None and grid_crs is None:
            return points
        if objects_crs is None or grid_crs is None:
            warnings.warn(
                "`crs` not set for the objects or the grid. Assuming both have an identical CRS."
            )
            return points
        if objects_crs.is_exact_same(grid_crs):
            return points
        transformer = Transformer.from_crs(objects_crs, grid_crs, always_xy=True)
        x, y = transformer.transform(points[:, 0], points[:, 1])
        return numpy.stack([x, y], axis=-1)

    def grid_index(self, points):
        """The 1-based grid index of each point, clamped to the grid if no hull filter is used,
        else NaN outside of the grid."""
        index = self.grid.cell_index(points)
        upper = numpy.array([self.grid.nx, self.grid.ny])
        if self.hull_filter is None:
            return numpy.clip(index, 1, upper)
        index[(index < 1) | (index > upper)] = numpy.nan
        return index

    def attribute(self, objects, viewport=None) -> AttributedTable:
        """Look up the grid value of each object and flatten the result into a table.

        Parameters
        ----------
        objects: :class:`.GeometryCollection` or iterable of shapely geometries
            The polygons, polylines or points to attribute
        viewport: `Tuple(float, float, float, float)` (optional)
            The visible area in (min-x, min-y, max-x, max-y), in the CRS of the objects.
            Objects of which the representative point falls outside are dropped.

        Returns
        -------
        :class:`.AttributedTable`
            One row per vertex for polygons and polylines, one row per point for points.
            Objects are numbered from 1 in their original order, skipping dropped objects.
        """
        if not isinstance(objects, GeometryCollection):
            objects = GeometryCollection.from_shapely(objects)

        surviving = self.surviving_objects(objects, viewport)
        if len(surviving) == 0:
            return AttributedTable.empty(kind=objects.kind)

        points = self._to_grid_crs(
            objects.representative_points()[surviving], objects.crs
        )

        if self.hull_filter is None:
            inside = numpy.full(len(surviving), numpy.nan)
        else:
            inside = self.hull_filter.contains(points[:, 0], points[:, 1]).astype(float)

        index = self.grid_index(points)
        values = self.grid.value(index[:, 0], index[:, 1])

        vertices = [objects[i] for i in surviving]
        counts = numpy.array([len(obj) for obj in vertices])
        coords = numpy.concatenate(vertices)
        return AttributedTable(
            id=numpy.repeat(numpy.arange(1, len(surviving) + 1), counts),
            x=coords[:, 0],
            y=coords[:, 1],
            z=numpy.repeat(values, counts),
            inside_hull=numpy.repeat(inside, counts),
            kind=objects.kind,
        )


def attribute(objects, grid, hull_filter=None, viewport=None, **kwargs):
    """Shorthand for ``ObjectAttributor(grid, hull_filter, **kwargs).attribute(objects, viewport)``"""
    return ObjectAttributor(grid, hull_filter, **kwargs).attribute(objects, viewport)
