from gridsurface.attribute import ObjectAttributor
from gridsurface.attributed_table import AttributedTable
from gridsurface.errors import InvalidInputError
from gridsurface.geometry import GeometryCollection
from gridsurface.hull import ConvexHullFilter
from gridsurface.interpolator import Interpolator
from gridsurface.options import SurfaceOptions
from gridsurface.scattered_field import ScatteredField
from gridsurface.surface_grid import SurfaceGrid


class SurfaceLayers:
    """The attributed objects of a surface, ready to be drawn.

    Attributes
    ----------
    table: :class:`.AttributedTable`
        All records
    grid: :class:`.SurfaceGrid`
        The grid the values were looked up from
    hull: :class:`.ConvexHullFilter`
        The hull of the samples, or None if no background colour was set
    options: :class:`.SurfaceOptions`
        The options the layers were created with
    z_limits: `Tuple(float, float)`
        The range of the sample values, to be used as the limits of the colour scale
    """

    def __init__(
        self,
        table: AttributedTable,
        grid: SurfaceGrid,
        hull: ConvexHullFilter,
        options: SurfaceOptions,
        z_limits,
    ):
        self.table = table
        self.grid = grid
        self.hull = hull
        self.options = options
        self.z_limits = z_limits

    def __repr__(self):
        return f"{self.__class__.__name__}(kind={self.kind!r}, foreground={len(self.foreground)}, background={len(self.background)})"

    @property
    def kind(self):
        return self.table.kind

    @property
    def foreground(self) -> AttributedTable:
        """Records coloured by their value"""
        return self.table.foreground()

    @property
    def background(self) -> AttributedTable:
        """Records drawn in the background colour, empty if no background colour was set"""
        if not self.options.hull_filtering:
            return AttributedTable.empty(kind=self.kind)
        return self.table.background()

    @property
    def foreground_style(self):
        return self.options.foreground_style(self.kind)

    @property
    def background_style(self):
        return self.options.background_style(self.kind)


def surface_layers(objects, samples, viewport=None, options=None, **kwargs):
    """Colour spatial objects by a surface interpolated from scattered samples.

    The steps are as follows:
     1. Validate the ``samples`` into a :class:`.ScatteredField`
     2. Estimate a grid of values over the range of the samples
     3. If a background colour is set, compute the convex hull of the sample locations
     4. Drop objects that are not visible in the ``viewport``
     5. Look up the grid value at the representative point of each remaining object

    Parameters
    ----------
    objects: :class:`.GeometryCollection` or iterable of shapely geometries
        The polygons, polylines or points to colour
    samples: :class:`.ScatteredField` or table
        The (x, y, z) samples, or anything accepted by :class:`.ScatteredField`
    viewport: `Tuple(float, float, float, float)` (optional)
        The visible area in (min-x, min-y, max-x, max-y)
    options: :class:`.SurfaceOptions` (optional)
        The options of the layer. Cannot be combined with ``kwargs``.
    **kwargs:
        Passed to :class:`.SurfaceOptions` if ``options`` is not supplied

    Returns
    -------
    :class:`.SurfaceLayers`
    """
    if options is None:
        options = SurfaceOptions(**kwargs)
    elif kwargs:
        raise InvalidInputError(
            f"Supply either 'options' or keyword arguments, got both. Keyword arguments: {list(kwargs)}",
            stage="configuration",
        )

    field = samples if isinstance(samples, ScatteredField) else ScatteredField(samples)
    if not isinstance(objects, GeometryCollection):
        objects = GeometryCollection.from_shapely(objects)

    interpolator = Interpolator(
        method=options.method,
        grid_size=options.grid_size,
        power=options.power,
        bandwidth=options.bandwidth,
    )
    grid = interpolator.fit(field)
    hull = ConvexHullFilter(field) if options.hull_filtering else None

    attributor = ObjectAttributor(
        grid, hull, require_within_viewport=options.require_within_viewport
    )
    table = attributor.attribute(objects, viewport=viewport)
    return SurfaceLayers(table, grid, hull, options, z_limits=field.z_range)
