import warnings
from collections.abc import Mapping
from typing import Tuple

import numpy
from pyproj import CRS

from gridsurface.errors import ConfigurationWarning, InvalidInputError


def _as_table(data, columns=None):
    """Split tabular input into a float array of shape (rows, columns) and the column names.

    Names are ``None`` if the input does not carry any.
    """
    names = None if columns is None else [str(name) for name in columns]
    if isinstance(data, Mapping):
        names = [str(name) for name in data.keys()]
        values = [numpy.asarray(col) for col in data.values()]
        try:
            values = numpy.column_stack(values) if values else numpy.empty((0, 0))
        except ValueError as e:
            raise InvalidInputError(f"Columns differ in length: {e}") from e
    elif isinstance(data, numpy.ndarray) and data.dtype.names:
        names = list(data.dtype.names)
        values = numpy.column_stack([data[name] for name in names])
    elif hasattr(data, "columns") and not isinstance(data, numpy.ndarray):
        # DataFrame-like
        names = [str(name) for name in data.columns]
        values = numpy.asarray(data)
    else:
        values = numpy.asarray(data)

    try:
        values = numpy.asarray(values, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(
            f"Samples must be a numeric table, got values that cannot be coerced to float: {e}"
        ) from e

    if values.ndim != 2:
        raise InvalidInputError(
            f"Samples must be a 2D table of (x, y, z) columns, got {values.ndim} dimension(s)"
        )
    if values.shape[1] < 3:
        raise InvalidInputError(
            f"Samples must have at least 3 columns, got {values.shape[1]}"
        )
    if names is not None and len(names) != values.shape[1]:
        raise InvalidInputError(
            f"Got {len(names)} column names for a table of {values.shape[1]} columns"
        )
    return values, names


def _find_column(names, exact, prefix=None):
    if exact in names:
        return names.index(exact)
    if prefix is not None:
        for i, name in enumerate(names):
            if name.startswith(prefix):
                return i
    return None


def identify_columns(names):
    """Determine which columns hold x, y and z.

    Parameters
    ----------
    names: `List[str]` or None
        The column names of the sample table.

    Returns
    -------
    :class:`tuple`
        Positional indices of the (x, y, z) columns.
        Columns that cannot be identified by name fall back to positions (0, 1, 2),
        in which case a :class:`.ConfigurationWarning` is issued.
    """
    if names is None:
        warnings.warn(
            "Samples have no column names; presuming [lon, lat, z]",
            ConfigurationWarning,
        )
        return 0, 1, 2

    x_col = _find_column(names, "x", "lon")
    y_col = _find_column(names, "y", "lat")
    if x_col is None or y_col is None:
        warnings.warn(
            "Samples should have columns of x/y, lon/lat, or equivalent; presuming first 2 columns are lon, lat",
            ConfigurationWarning,
        )
        x_col, y_col = 0, 1

    z_col = _find_column(names, "z")
    if z_col is None:
        warnings.warn(
            "Samples should have a column named z; presuming that to be the 3rd column",
            ConfigurationWarning,
        )
        z_col = 2
    return x_col, y_col, z_col


class ScatteredField:
    """Scattered (x, y, z) observations from which a surface is estimated.

    Rows with an undefined (NaN) z-value are dropped.
    The retained samples are copied, so later changes to ``data`` do not affect the field.

    Init parameters
    ---------------
    data: array-like, mapping, structured array or DataFrame
        A table of at least 3 columns.
        The x column is the one named ``x``, else the first one starting with ``lon``, else the first column.
        The y column is the one named ``y``, else the first one starting with ``lat``, else the second column.
        The z column is the one named ``z``, else the third column.
    columns: `List[str]` (optional)
        Column names for inputs that do not carry names themselves, such as a 2D numpy array.
    crs: `pyproj.CRS` (optional)
        The coordinate reference system of the sample locations.
        The value can be anything accepted by `pyproj.CRS.from_user_input()`.

    Raises
    ------
    :class:`.InvalidInputError`
        If the table has fewer than 3 columns, is not numeric,
        has non-finite coordinates or has no rows with a defined z-value.
    """

    def __init__(self, data, columns=None, crs=None):
        values, names = _as_table(data, columns=columns)
        x_col, y_col, z_col = identify_columns(names)
        samples = values[:, [x_col, y_col, z_col]]

        samples = samples[~numpy.isnan(samples[:, 2])]
        if len(samples) == 0:
            raise InvalidInputError("No samples with a defined z-value remain")
        if not numpy.all(numpy.isfinite(samples[:, :2])):
            raise InvalidInputError(
                "Sample coordinates must be finite, found NaN or infinite x or y values"
            )

        self._samples = numpy.ascontiguousarray(samples)
        self._crs = None if not crs else CRS.from_user_input(crs)

    def __len__(self):
        return len(self._samples)

    def __repr__(self):
        return f"{self.__class__.__name__}(n={len(self)}, bounds={self.bounds})"

    @property
    def samples(self) -> numpy.ndarray:
        """The retained samples as an array of shape (n, 3) in (x, y, z)"""
        return self._samples

    @property
    def x(self) -> numpy.ndarray:
        return self._samples[:, 0]

    @property
    def y(self) -> numpy.ndarray:
        return self._samples[:, 1]

    @property
    def z(self) -> numpy.ndarray:
        return self._samples[:, 2]

    @property
    def points(self) -> numpy.ndarray:
        """The sample locations as an array of shape (n, 2) in (x, y)"""
        return self._samples[:, :2]

    @property
    def crs(self):
        return self._crs

    @property
    def x_range(self) -> Tuple[float, float]:
        return float(self.x.min()), float(self.x.max())

    @property
    def y_range(self) -> Tuple[float, float]:
        return float(self.y.min()), float(self.y.max())

    @property
    def z_range(self) -> Tuple[float, float]:
        return float(self.z.min()), float(self.z.max())

    @property
    def bounds(self) -> tuple:
        """Sample bounds

        Returns
        -------
        :class:`tuple`
            The bounds of the samples in (min-x, min-y, max-x, max-y)
        """
        return (self.x_range[0], self.y_range[0], self.x_range[1], self.y_range[1])
