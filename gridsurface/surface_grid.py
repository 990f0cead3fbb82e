from typing import Tuple

import numpy
from pyproj import CRS


class SurfaceGrid:
    """A regular grid of estimated z-values covering the sample domain.

    Unlike a numpy image, the data is indexed as ``[x_index, y_index]``.
    Cell ``[i, j]`` covers the i-th of ``nx`` equal slices of ``x_range``
    and the j-th of ``ny`` equal slices of ``y_range``.
    Public lookups (:meth:`value`, :meth:`cell_index`) use 1-based indices.

    Init parameters
    ---------------
    data: `numpy.ndarray`
        2D array of shape (nx, ny)
    x_range: `Tuple(float, float)`
        The (min, max) of the x-coordinates covered by the grid
    y_range: `Tuple(float, float)`
        The (min, max) of the y-coordinates covered by the grid
    nodata_value: `float` (optional)
        The value of cells without an estimate. Default: numpy.nan
    crs: `pyproj.CRS` (optional)
        The coordinate reference system of ``x_range`` and ``y_range``.
    prevent_copy: `bool` (optional)
        Use ``data`` as-is instead of storing a copy. Default: False
    """

    def __init__(
        self,
        data: numpy.ndarray,
        *,
        x_range: Tuple[float, float],
        y_range: Tuple[float, float],
        nodata_value=numpy.nan,
        crs=None,
        prevent_copy: bool = False,
    ) -> None:
        data = numpy.asarray(data, dtype=float)
        if data.ndim != 2:
            raise ValueError(f"Expected 2D data in (x, y), got {data.ndim} dimensions")
        self._data = data if prevent_copy else data.copy()
        self._x_range = (float(x_range[0]), float(x_range[1]))
        self._y_range = (float(y_range[0]), float(y_range[1]))
        self.nodata_value = nodata_value
        self._crs = None if not crs else CRS.from_user_input(crs)

    def __repr__(self):
        return f"{self.__class__.__name__}(shape={self.shape}, bounds={self.bounds})"

    @property
    def data(self):
        return self._data

    @data.setter
    def data(self, data):
        new_data = numpy.array(data)
        if new_data.dtype.name == "object":
            raise TypeError(
                f"Data cannot be interpreted as a numpy.ndarray, got {type(data)}"
            )
        if new_data.shape != self.data.shape:
            raise ValueError(
                f"Cannot set data that is different in size. Expected a shape of {self.data.shape}, got {new_data.shape}."
            )
        self._data = new_data.astype(float)

    def __array__(self, dtype=None, copy=None):
        if dtype:
            return self.data.astype(dtype)
        return self.data

    @property
    def image(self):
        """The data as an image in (y, x), to be drawn with the origin in the lower-left corner"""
        return self._data.T

    @property
    def crs(self):
        return self._crs

    @property
    def x_range(self) -> Tuple[float, float]:
        return self._x_range

    @property
    def y_range(self) -> Tuple[float, float]:
        return self._y_range

    @property
    def nx(self) -> int:
        """The number of cells in x-direction"""
        return self._data.shape[0]

    @property
    def ny(self) -> int:
        """The number of cells in y-direction"""
        return self._data.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._data.shape

    @property
    def nr_cells(self):
        return self.nx * self.ny

    @property
    def dx(self) -> float:
        return (self._x_range[1] - self._x_range[0]) / self.nx

    @property
    def dy(self) -> float:
        return (self._y_range[1] - self._y_range[0]) / self.ny

    @property
    def cellsize(self):
        """Get the cell size in (dx, dy)"""
        return (self.dx, self.dy)

    @property
    def bounds(self) -> tuple:
        """Grid bounds

        Returns
        -------
        :class:`tuple`
            The bounds of the data in (left, bottom, right, top) or equivalently (min-x, min-y, max-x, max-y)
        """
        return (self._x_range[0], self._y_range[0], self._x_range[1], self._y_range[1])

    @property
    def mpl_extent(self) -> tuple:
        """Grid bounds

        Returns
        -------
        :class:`tuple`
            The extent of the data as defined expected by matplotlib in (left, right, bottom, top) or equivalently (min-x, max-x, min-y, max-y)
        """
        b = self.bounds
        return (b[0], b[2], b[1], b[3])

    def centroid(self):
        """Coordinates at the center of every cell.

        Returns
        -------
        `numpy.ndarray`
            Array of shape (nx, ny, 2) with the (x, y) of each cell center
        """
        x = self._x_range[0] + (numpy.arange(self.nx) + 0.5) * self.dx
        y = self._y_range[0] + (numpy.arange(self.ny) + 0.5) * self.dy
        xx, yy = numpy.meshgrid(x, y, indexing="ij")
        return numpy.stack([xx, yy], axis=-1)

    def cell_index(self, points) -> numpy.ndarray:
        """The 1-based (x_index, y_index) of the cell covering each of the ``points``.

        The index is ``ceil(n * (coord - min) / (max - min))`` along each axis.
        Cells are closed on the upper side, so a point on the lower edge of the domain gets index 0
        and points outside the domain get indices outside of ``[1, n]``.
        No clamping is done here.

        Parameters
        ----------
        points: `numpy.ndarray`
            Array of shape (n, 2) with the (x, y) of each point

        Returns
        -------
        `numpy.ndarray`
            Float array of shape (n, 2) with the index along x and y.
        """
        points = numpy.asarray(points, dtype=float).reshape(-1, 2)
        index = numpy.empty_like(points)
        for axis, (lower, upper), n in (
            (0, self._x_range, self.nx),
            (1, self._y_range, self.ny),
        ):
            coords = points[:, axis]
            span = upper - lower
            if span > 0:
                index[:, axis] = numpy.ceil(n * (coords - lower) / span)
            else:
                # a single distinct coordinate: only that exact value lies in the grid
                index[:, axis] = numpy.where(
                    coords < lower, 0, numpy.where(coords > upper, n + 1, 1)
                )
        return index

    def value(self, xi, yi):
        """Return the value of the cell(s) at the 1-based index (``xi``, ``yi``).

        No interpolation is done; the value of the cell is returned as-is.
        NaN indices give ``nodata_value``.

        Parameters
        ----------
        xi: `int` or `numpy.ndarray`
            Index along x, in ``[1, nx]``
        yi: `int` or `numpy.ndarray`
            Index along y, in ``[1, ny]``

        Returns
        -------
        `float` or `numpy.ndarray`
            The cell value(s), in the shape of ``xi``

        Raises
        ------
        IndexError
            A defined index lies outside ``[1, nx]`` or ``[1, ny]``.
        """
        xi = numpy.asarray(xi, dtype=float)
        yi = numpy.asarray(yi, dtype=float)
        xi, yi = numpy.broadcast_arrays(xi, yi)
        defined = ~(numpy.isnan(xi) | numpy.isnan(yi))

        oob = defined & ((xi < 1) | (xi > self.nx) | (yi < 1) | (yi > self.ny))
        if numpy.any(oob):
            raise IndexError(
                f"Cell indices out of range for a grid of shape {self.shape}: "
                f"{list(zip(xi[oob].tolist(), yi[oob].tolist()))[:5]}"
            )

        values = numpy.full(xi.shape, self.nodata_value, dtype=float)
        values[defined] = self._data[
            xi[defined].astype(int) - 1, yi[defined].astype(int) - 1
        ]
        if values.ndim == 0:
            return float(values)
        return values
