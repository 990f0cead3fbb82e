import numpy
import pytest

from gridsurface import SurfaceGrid


@pytest.fixture(scope="function")
def small_grid():
    data = numpy.arange(6, dtype=float).reshape((2, 3))  # nx=2, ny=3
    return SurfaceGrid(data, x_range=(0, 2), y_range=(0, 3))


def test_shape_and_bounds(small_grid):
    assert small_grid.shape == (2, 3)
    assert small_grid.nx == 2
    assert small_grid.ny == 3
    assert small_grid.nr_cells == 6
    assert small_grid.cellsize == (1, 1)
    assert small_grid.bounds == (0, 0, 2, 3)
    assert small_grid.mpl_extent == (0, 2, 0, 3)
    assert small_grid.image.shape == (3, 2)


def test_value_is_one_based(small_grid):
    assert small_grid.value(1, 1) == 0
    assert small_grid.value(1, 2) == 1
    assert small_grid.value(2, 3) == 5
    numpy.testing.assert_allclose(small_grid.value([1, 2], [3, 1]), [2, 3])


def test_value_nan_index(small_grid):
    result = small_grid.value([1, numpy.nan], [1, 1])
    assert result[0] == 0
    assert numpy.isnan(result[1])


@pytest.mark.parametrize("xi, yi", [[0, 1], [3, 1], [1, 0], [1, 4]])
def test_value_out_of_range(small_grid, xi, yi):
    with pytest.raises(IndexError):
        small_grid.value(xi, yi)


def test_centroid(small_grid):
    centroid = small_grid.centroid()
    assert centroid.shape == (2, 3, 2)
    numpy.testing.assert_allclose(centroid[0, 0], [0.5, 0.5])
    numpy.testing.assert_allclose(centroid[1, 2], [1.5, 2.5])


def test_cell_index():
    grid = SurfaceGrid(numpy.zeros((10, 10)), x_range=(0, 1), y_range=(0, 1))
    points = [
        [0.05, 0.05],
        [0.95, 0.5],
        [1.0, 1.0],
        [0.0, 0.0],
        [1.5, -0.5],
    ]
    expected = [
        [1, 1],
        [10, 5],
        [10, 10],
        [0, 0],
        [15, -5],
    ]
    numpy.testing.assert_allclose(grid.cell_index(points), expected)


def test_cell_index_zero_span():
    grid = SurfaceGrid(numpy.zeros((1, 4)), x_range=(2, 2), y_range=(0, 4))
    index = grid.cell_index([[2, 1], [1, 1], [3, 1]])
    numpy.testing.assert_allclose(index[:, 0], [1, 0, 2])


def test_data_mutability():
    data = numpy.zeros((3, 3))
    grid = SurfaceGrid(data, x_range=(0, 1), y_range=(0, 1))
    grid_mutable = SurfaceGrid(data, x_range=(0, 1), y_range=(0, 1), prevent_copy=True)

    assert id(data) != id(grid.data)
    assert id(data) == id(grid_mutable.data)


def test_data_setter(small_grid):
    small_grid.data = small_grid.data + 1
    assert small_grid.value(1, 1) == 1

    with pytest.raises(TypeError) as e:
        small_grid.data = str
    assert (
        str(e.value)
        == "Data cannot be interpreted as a numpy.ndarray, got <class 'type'>"
    )

    with pytest.raises(ValueError) as e:
        small_grid.data = [1, 2]
    assert (
        str(e.value)
        == "Cannot set data that is different in size. Expected a shape of (2, 3), got (2,)."
    )


def test_array_interface(small_grid):
    array = numpy.asarray(small_grid)
    numpy.testing.assert_allclose(array, small_grid.data)
    assert numpy.asarray(small_grid, dtype=int).dtype == int
    numpy.testing.assert_allclose(numpy.array(small_grid) * 2, small_grid.data * 2)


def test_nodata_value():
    grid = SurfaceGrid(
        numpy.ones((2, 2)), x_range=(0, 1), y_range=(0, 1), nodata_value=-9999
    )
    assert grid.nodata_value == -9999
    assert grid.value(numpy.nan, 1) == -9999
    numpy.testing.assert_allclose(grid.value([1, numpy.nan], [2, 2]), [1, -9999])
