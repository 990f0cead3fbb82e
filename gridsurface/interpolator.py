import numbers

import numpy
import scipy.optimize
import scipy.spatial

from gridsurface.errors import InvalidInputError
from gridsurface.scattered_field import ScatteredField
from gridsurface.surface_grid import SurfaceGrid

INTERPOLATION_METHODS = ("idw", "smooth")


def _chunks(n, chunk_size):
    for start in range(0, n, chunk_size):
        yield slice(start, min(start + chunk_size, n))


def inverse_distance(points, values, query_points, power=2, chunk_size=4096):
    """Inverse distance weighted estimate at ``query_points``.

    The weight of sample i at query point p is ``1 / d(p, i) ** power``.
    Query points that coincide with one or more samples get the (mean) value of those samples.

    Parameters
    ----------
    points: `numpy.ndarray`
        Sample locations of shape (n, 2)
    values: `numpy.ndarray`
        Sample values of shape (n,)
    query_points: `numpy.ndarray`
        Locations of shape (m, 2) at which to estimate the value
    power: `float`
        The power of the inverse distance. Default: 2
    chunk_size: `int`
        The number of query points processed at once, bounding memory to ``chunk_size * n`` distances.

    Returns
    -------
    `numpy.ndarray`
        The estimated values of shape (m,)
    """
    query_points = numpy.asarray(query_points, dtype=float).reshape(-1, 2)
    result = numpy.empty(len(query_points))
    for chunk in _chunks(len(query_points), chunk_size):
        distances = scipy.spatial.distance.cdist(query_points[chunk], points)
        with numpy.errstate(divide="ignore", over="ignore"):
            weights = 1.0 / distances**power
        # coincident, or so close that the weight is no longer finite
        exact = ~numpy.isfinite(weights)
        hits = exact.any(axis=1)
        weights[hits] = exact[hits]
        result[chunk] = (weights @ values) / weights.sum(axis=1)
    return result


def _gaussian_weights(sq_distances, sigma):
    # shift by the row minimum so the nearest sample always has weight 1
    shifted = sq_distances - sq_distances.min(axis=1, keepdims=True)
    return numpy.exp(-shifted / (2 * sigma**2))


def gaussian_smooth(points, values, query_points, sigma, chunk_size=4096):
    """Nadaraya-Watson estimate at ``query_points`` using an isotropic Gaussian kernel
    with standard deviation ``sigma``."""
    query_points = numpy.asarray(query_points, dtype=float).reshape(-1, 2)
    result = numpy.empty(len(query_points))
    for chunk in _chunks(len(query_points), chunk_size):
        sq_distances = scipy.spatial.distance.cdist(
            query_points[chunk], points, "sqeuclidean"
        )
        weights = _gaussian_weights(sq_distances, sigma)
        result[chunk] = (weights @ values) / weights.sum(axis=1)
    return result


def select_bandwidth(points, values):
    """Select the Gaussian kernel bandwidth by leave-one-out least squares cross-validation.

    Candidate bandwidths are scanned on a logarithmic scale between 1/1000 of the
    diameter of the sample domain and the diameter itself.
    The best candidate is refined with a bounded scalar minimization.
    With fewer than 3 samples, or samples at a single location,
    the bandwidth is ``diameter / 8`` (or 1 for a zero diameter).
    """
    span = numpy.ptp(points, axis=0)
    diameter = float(numpy.hypot(*span))
    if diameter == 0:
        return 1.0
    if len(points) < 3:
        return diameter / 8

    sq_distances = scipy.spatial.distance.cdist(points, points, "sqeuclidean")
    numpy.fill_diagonal(sq_distances, numpy.inf)

    def cv_error(log_sigma):
        weights = _gaussian_weights(sq_distances, numpy.exp(log_sigma))
        predicted = (weights @ values) / weights.sum(axis=1)
        return numpy.mean((values - predicted) ** 2)

    candidates = numpy.linspace(numpy.log(diameter / 1000), numpy.log(diameter), 31)
    errors = [cv_error(c) for c in candidates]
    best = int(numpy.argmin(errors))
    lower = candidates[max(best - 1, 0)]
    upper = candidates[min(best + 1, len(candidates) - 1)]
    result = scipy.optimize.minimize_scalar(
        cv_error, bounds=(lower, upper), method="bounded"
    )
    log_sigma = result.x if result.fun <= errors[best] else candidates[best]
    return float(numpy.exp(log_sigma))


def _bin_index(coords, n):
    """0-based class of each coordinate when splitting its range in ``n`` equal, right-closed classes."""
    lower, upper = coords.min(), coords.max()
    if n == 1 or upper == lower:
        return numpy.zeros(len(coords), dtype=int)
    index = numpy.ceil(n * (coords - lower) / (upper - lower)).astype(int)
    return numpy.clip(index, 1, n) - 1


class Interpolator:
    """Estimate a regular grid of z-values from a :class:`.ScatteredField`.

    Init parameters
    ---------------
    method: :class:`str`
        - "idw": inverse distance weighting, an exact interpolator (default)
        - "smooth": Gaussian kernel smoothing with a cross-validated bandwidth
        - anything else: no interpolation, the samples are binned onto a grid of
          ``nx`` by ``ny`` cells, being the number of distinct x and y values.
          Samples are expected to be regularly spaced already; cells without a sample are NaN.
    grid_size: :class:`int`
        The number of cells along each axis for "idw" and "smooth". Default: 100
    power: :class:`float`
        The power of the inverse distance weights. Default: 2
    bandwidth: :class:`float` (optional)
        The standard deviation of the Gaussian kernel for "smooth".
        Selected by cross-validation if not supplied.
    """

    def __init__(self, method="idw", grid_size=100, power=2, bandwidth=None):
        if (
            isinstance(grid_size, bool)
            or not isinstance(grid_size, numbers.Number)
            or not numpy.isclose(grid_size % 1, 0)
        ):
            raise InvalidInputError(
                f"Expected an integer for 'grid_size', got: {grid_size}",
                stage="interpolation",
            )
        if grid_size < 1:
            raise InvalidInputError(
                f"Expected 'grid_size' to be 1 or larger, got: {grid_size}",
                stage="interpolation",
            )
        if not isinstance(power, numbers.Number) or power <= 0:
            raise InvalidInputError(
                f"Expected a positive 'power', got: {power}", stage="interpolation"
            )
        if bandwidth is not None and (
            not isinstance(bandwidth, numbers.Number) or bandwidth <= 0
        ):
            raise InvalidInputError(
                f"Expected a positive 'bandwidth', got: {bandwidth}",
                stage="interpolation",
            )
        self.method = method
        self.grid_size = int(grid_size)
        self.power = power
        self.bandwidth = bandwidth
        self.sigma = bandwidth
        self.grid = None
        self._samples = None

    @property
    def interpolates(self) -> bool:
        """Whether the method estimates values on a ``grid_size`` grid, as opposed to binning raw samples"""
        return self.method in INTERPOLATION_METHODS

    def fit(self, field: ScatteredField) -> SurfaceGrid:
        """Build the grid from ``field``.

        Returns
        -------
        :class:`.SurfaceGrid`
            The grid spanning the x and y range of ``field``, indexed as ``[x_index, y_index]``.
            The grid is also stored as ``self.grid``.
        """
        if not isinstance(field, ScatteredField):
            raise TypeError(f"Expected a ScatteredField, got {type(field)}")
        self._samples = field.samples.copy()
        points, values = self._samples[:, :2], self._samples[:, 2]

        if self.method == "smooth":
            self.sigma = (
                self.bandwidth
                if self.bandwidth is not None
                else select_bandwidth(points, values)
            )

        if self.interpolates:
            data = self._estimate_grid(field)
        else:
            data = self._bin_grid(field)

        self.grid = SurfaceGrid(
            data,
            x_range=field.x_range,
            y_range=field.y_range,
            crs=field.crs,
            prevent_copy=True,
        )
        return self.grid

    def _estimate_grid(self, field):
        n = self.grid_size
        (xmin, xmax), (ymin, ymax) = field.x_range, field.y_range
        # cell centers
        x = xmin + (numpy.arange(n) + 0.5) * (xmax - xmin) / n
        y = ymin + (numpy.arange(n) + 0.5) * (ymax - ymin) / n
        xx, yy = numpy.meshgrid(x, y)  # rows are y, columns are x
        query_points = numpy.stack([xx.ravel(), yy.ravel()], axis=-1)
        values = self.predict(query_points).reshape(n, n)
        return values.T  # index as (x, y)

    def _bin_grid(self, field):
        nx = len(numpy.unique(field.x))
        ny = len(numpy.unique(field.y))
        ix = _bin_index(field.x, nx)
        iy = _bin_index(field.y, ny)
        data = numpy.full((ny, nx), numpy.nan)  # rows are y, columns are x
        for row, col, value in zip(iy, ix, field.z):
            data[row, col] = value
        return data.T  # index as (x, y)

    def predict(self, points) -> numpy.ndarray:
        """Evaluate the fitted estimator at arbitrary ``points`` of shape (n, 2).

        Only available for the "idw" and "smooth" methods.
        """
        if self._samples is None:
            raise InvalidInputError(
                "The interpolator has not been fitted, call 'fit' first",
                stage="interpolation",
            )
        sample_points, values = self._samples[:, :2], self._samples[:, 2]
        if self.method == "idw":
            return inverse_distance(sample_points, values, points, power=self.power)
        if self.method == "smooth":
            return gaussian_smooth(sample_points, values, points, self.sigma)
        raise InvalidInputError(
            f"Method '{self.method}' bins samples and cannot be evaluated at arbitrary points",
            stage="interpolation",
        )


def sample(grid: SurfaceGrid, xi, yi):
    """Look up the value of the cell at 1-based index (``xi``, ``yi``) without further interpolation.

    See also
    --------
    :meth:`.SurfaceGrid.value`
    """
    return grid.value(xi, yi)
