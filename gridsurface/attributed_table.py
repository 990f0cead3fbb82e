from typing import NamedTuple

import numpy


class AttributedRecord(NamedTuple):
    id: int
    x: float
    y: float
    z: float
    inside_hull: float  # 0, 1 or NaN if no hull was used


class AttributedTable:
    """Flat table of object vertices with the value looked up for their object.

    All vertices of one polygon or polyline share the ``id``, ``z`` and ``inside_hull`` of that object.
    Points contribute a single row each.
    The ``inside_hull`` column is 0 (outside), 1 (inside) or NaN (no hull filtering requested).
    """

    _columns = ("id", "x", "y", "z", "inside_hull")

    def __init__(self, id, x, y, z, inside_hull, kind=None):
        self._data = dict(
            id=numpy.asarray(id, dtype=int),
            x=numpy.asarray(x, dtype=float),
            y=numpy.asarray(y, dtype=float),
            z=numpy.asarray(z, dtype=float),
            inside_hull=numpy.asarray(inside_hull, dtype=float),
        )
        lengths = {len(col) for col in self._data.values()}
        if len(lengths) > 1:
            raise ValueError(f"All columns must be of equal length, got lengths {lengths}")
        self.kind = kind

    @classmethod
    def empty(cls, kind=None):
        return cls([], [], [], [], [], kind=kind)

    def __len__(self):
        return len(self._data["id"])

    def __iter__(self):
        for row in zip(*(self._data[name] for name in self._columns)):
            yield AttributedRecord(int(row[0]), *(float(val) for val in row[1:]))

    def __getitem__(self, item):
        if isinstance(item, str):
            return self._data[item]
        return AttributedRecord(
            int(self._data["id"][item]),
            *(float(self._data[name][item]) for name in self._columns[1:]),
        )

    def __repr__(self):
        return f"{self.__class__.__name__}(kind={self.kind!r}, records={len(self)}, objects={len(self.ids)})"

    @property
    def columns(self):
        return self._columns

    @property
    def id(self) -> numpy.ndarray:
        return self._data["id"]

    @property
    def x(self) -> numpy.ndarray:
        return self._data["x"]

    @property
    def y(self) -> numpy.ndarray:
        return self._data["y"]

    @property
    def z(self) -> numpy.ndarray:
        return self._data["z"]

    @property
    def inside_hull(self) -> numpy.ndarray:
        return self._data["inside_hull"]

    @property
    def ids(self) -> numpy.ndarray:
        """The distinct object ids, in order of appearance"""
        ids, first = numpy.unique(self.id, return_index=True)
        return ids[numpy.argsort(first)]

    def select(self, mask):
        """A new table containing the rows where ``mask`` is True"""
        mask = numpy.asarray(mask, dtype=bool)
        return self.__class__(
            *(self._data[name][mask] for name in self._columns), kind=self.kind
        )

    def foreground(self):
        """Rows drawn with the colour scale: inside the hull, or no hull filtering requested"""
        return self.select(self.inside_hull != 0)

    def background(self):
        """Rows drawn in the background colour: outside the hull"""
        return self.select(self.inside_hull == 0)

    def groups(self):
        """Iterate over the objects in the table.

        Yields
        ------
        :class:`tuple`
            (id, vertices of shape (n, 2), z, inside_hull) per object
        """
        for object_id in self.ids:
            mask = self.id == object_id
            first = numpy.argmax(mask)
            yield (
                int(object_id),
                numpy.stack([self.x[mask], self.y[mask]], axis=-1),
                float(self.z[first]),
                float(self.inside_hull[first]),
            )

    def to_dict(self):
        """The columns as a dict of numpy arrays, for instance to create a ``pandas.DataFrame``"""
        return {name: self._data[name].copy() for name in self._columns}
