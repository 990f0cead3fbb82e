import numpy
import pytest
import shapely.geometry

from gridsurface import GeometryCollection, ScatteredField


@pytest.fixture(scope="function")
def unit_square_field():
    data = numpy.array(
        [
            [0, 0, 1],
            [1, 0, 2],
            [0, 1, 3],
            [1, 1, 4],
        ]
    )
    return ScatteredField(data, columns=["x", "y", "z"])


@pytest.fixture(scope="function")
def regular_field():
    # 4 x 3 samples of z = x + 10 * y
    x, y = numpy.meshgrid(numpy.arange(4), numpy.arange(3))
    x, y = x.ravel(), y.ravel()
    return ScatteredField({"x": x, "y": y, "z": x + 10.0 * y})


@pytest.fixture(scope="function")
def scattered_field():
    numpy.random.seed(0)
    x = 100 * numpy.random.rand(50)
    numpy.random.seed(1)
    y = 100 * numpy.random.rand(50)
    z = numpy.sin(x / (10 * numpy.pi)) * numpy.sin(y / (10 * numpy.pi))
    return ScatteredField({"x": x, "y": y, "z": z})


@pytest.fixture(scope="function")
def square_polygons():
    """Three squares along the diagonal of the unit square, the last one partly outside of it"""
    geoms = [
        shapely.geometry.box(0.0, 0.0, 0.2, 0.2),
        shapely.geometry.box(0.4, 0.4, 0.6, 0.6),
        shapely.geometry.box(0.9, 0.9, 1.3, 1.3),
    ]
    return GeometryCollection.from_shapely(geoms)
