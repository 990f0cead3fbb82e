import numbers
import warnings

import matplotlib
import matplotlib.colors
import numpy

from gridsurface.errors import ConfigurationWarning, InvalidInputError
from gridsurface.geometry import GEOMETRY_KINDS, POLYGON

DEFAULT_SIZE = {"polygon": 0, "polyline": 0.5, "point": 0.5}
DEFAULT_SHAPE = 1


def heat_colours(n=30):
    """``n`` colours running from dark red to pale yellow, as hex strings"""
    cmap = matplotlib.colormaps["hot"]
    # skip the black and white ends of the colormap
    return [matplotlib.colors.to_hex(cmap(val)) for val in numpy.linspace(0.3, 0.95, n)]


def _as_pair(value, name):
    """Return ``value`` as a (foreground, background) pair"""
    if isinstance(value, numbers.Number):
        return (value, value)
    try:
        pair = tuple(value)
    except TypeError as e:
        raise InvalidInputError(
            f"Expected a number or a pair for '{name}', got: {value}",
            stage="configuration",
        ) from e
    if len(pair) == 1:
        pair = (pair[0], pair[0])
    if len(pair) != 2 or not all(isinstance(val, numbers.Number) for val in pair):
        raise InvalidInputError(
            f"Expected a number or a pair of numbers for '{name}', got: {value}",
            stage="configuration",
        )
    return pair


class SurfaceOptions:
    """All options of a surface layer with their defaults.

    Init parameters
    ---------------
    method: :class:`str`
        "idw" (default), "smooth" or any other value for binning regularly spaced samples.
        See :class:`.Interpolator`.
    grid_size: :class:`int`
        The number of grid cells along each axis. Default: 100
    power: :class:`float`
        The power of the inverse distance weights. Default: 2
    bandwidth: :class:`float` (optional)
        The Gaussian kernel standard deviation for "smooth". Selected by cross-validation if not supplied.
    colour_scale: `List[str]` (optional)
        The colours to map z-values to. Colours that are not strings are converted to hex strings.
        Default: 30 heat colours
    background_colour: :class:`str` (optional)
        If supplied, objects outside of the convex hull of the samples are drawn in this colour.
        If not supplied, no hull filtering is done.
    size: `float` or `Tuple(float, float)` (optional)
        Line width (polygons, polylines) or point size.
        A pair specifies the (foreground, background) size.
        Default: 0 for polygons, 0.5 for polylines and points
    shape: `int` or `Tuple(int, int)` (optional)
        Line type or point marker, or a (foreground, background) pair. Default: 1
    require_within_viewport: :class:`bool`
        Drop polygons and polylines that do not lie entirely within the viewport. Default: False
    """

    def __init__(
        self,
        method="idw",
        grid_size=100,
        power=2,
        bandwidth=None,
        colour_scale=None,
        background_colour=None,
        size=None,
        shape=None,
        require_within_viewport=False,
    ):
        if not isinstance(method, str):
            raise InvalidInputError(
                f"Expected a string for 'method', got: {method}", stage="configuration"
            )
        if (
            isinstance(grid_size, bool)
            or not isinstance(grid_size, numbers.Number)
            or not numpy.isclose(grid_size % 1, 0)
            or grid_size < 1
        ):
            raise InvalidInputError(
                f"Expected a positive integer for 'grid_size', got: {grid_size}",
                stage="configuration",
            )
        if not isinstance(power, numbers.Number) or power <= 0:
            raise InvalidInputError(
                f"Expected a positive number for 'power', got: {power}",
                stage="configuration",
            )
        if bandwidth is not None and (
            not isinstance(bandwidth, numbers.Number) or bandwidth <= 0
        ):
            raise InvalidInputError(
                f"Expected a positive number for 'bandwidth', got: {bandwidth}",
                stage="configuration",
            )

        self.method = method
        self.grid_size = int(grid_size)
        self.power = power
        self.bandwidth = bandwidth
        self.colour_scale = self._validate_colour_scale(colour_scale)
        self.background_colour = background_colour
        self.size = None if size is None else _as_pair(size, "size")
        self.shape = None if shape is None else _as_pair(shape, "shape")
        self.require_within_viewport = bool(require_within_viewport)

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(method={self.method!r}, grid_size={self.grid_size}, "
            f"background_colour={self.background_colour!r})"
        )

    @staticmethod
    def _validate_colour_scale(colour_scale):
        if colour_scale is None:
            return heat_colours()
        if isinstance(colour_scale, str):
            colour_scale = [colour_scale]
        colour_scale = list(colour_scale)
        if not colour_scale:
            raise InvalidInputError(
                "Expected at least one colour in 'colour_scale'", stage="configuration"
            )
        if all(isinstance(colour, str) for colour in colour_scale):
            return colour_scale
        warnings.warn(
            "colour_scale will be coerced to character", ConfigurationWarning
        )
        try:
            return [
                colour if isinstance(colour, str) else matplotlib.colors.to_hex(colour)
                for colour in colour_scale
            ]
        except ValueError as e:
            raise InvalidInputError(
                f"Cannot interpret 'colour_scale' as colours: {e}", stage="configuration"
            ) from e

    @property
    def hull_filtering(self) -> bool:
        """Whether objects are tested against the convex hull of the samples"""
        return self.background_colour is not None

    def _sizes(self, kind):
        if kind not in GEOMETRY_KINDS:
            raise InvalidInputError(
                f"Expected one of {GEOMETRY_KINDS}, got: {kind}", stage="configuration"
            )
        if self.size is not None:
            return self.size
        return (DEFAULT_SIZE[kind], DEFAULT_SIZE[kind])

    def _shapes(self, kind):
        if kind == POLYGON:
            return (None, None)
        if self.shape is not None:
            return self.shape
        return (DEFAULT_SHAPE, DEFAULT_SHAPE)

    def foreground_style(self, kind):
        """Styling of objects coloured by their value

        Returns
        -------
        :class:`dict`
            With keys "colours", "size" and "shape". Polygons have no shape.
        """
        return dict(
            colours=self.colour_scale,
            size=self._sizes(kind)[0],
            shape=self._shapes(kind)[0],
        )

    def background_style(self, kind):
        """Styling of objects outside of the convex hull, or None if no background colour is set"""
        if not self.hull_filtering:
            return None
        return dict(
            colour=self.background_colour,
            size=self._sizes(kind)[1],
            shape=self._shapes(kind)[1],
        )
