import warnings

import numpy
import pytest

from gridsurface import ConfigurationWarning, InvalidInputError, ScatteredField


def test_columns_by_name():
    data = {
        "z": [1.0, 2.0, 3.0],
        "y": [10.0, 20.0, 30.0],
        "x": [-1.0, -2.0, -3.0],
    }
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        field = ScatteredField(data)

    numpy.testing.assert_allclose(field.x, [-1, -2, -3])
    numpy.testing.assert_allclose(field.y, [10, 20, 30])
    numpy.testing.assert_allclose(field.z, [1, 2, 3])


def test_columns_by_prefix():
    data = {
        "latitude": [51.5, 51.6],
        "longitude": [-0.1, -0.2],
        "z": [1.0, 2.0],
    }
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        field = ScatteredField(data)
    numpy.testing.assert_allclose(field.x, [-0.1, -0.2])
    numpy.testing.assert_allclose(field.y, [51.5, 51.6])


def test_lon_lat_without_z_name():
    data = {"lat": [1.0, 2.0], "lon": [3.0, 4.0], "value": [5.0, 6.0]}
    with pytest.warns(ConfigurationWarning, match="column named z"):
        field = ScatteredField(data)
    numpy.testing.assert_allclose(field.samples, [[3, 1, 5], [4, 2, 6]])


def test_unknown_names_fall_back_to_positions():
    data = numpy.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    with pytest.warns(ConfigurationWarning, match="presuming first 2 columns"):
        field = ScatteredField(data, columns=["a", "b", "z"])
    numpy.testing.assert_allclose(field.samples, data)


def test_no_column_names():
    data = numpy.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
    with pytest.warns(ConfigurationWarning, match="no column names"):
        field = ScatteredField(data)
    numpy.testing.assert_allclose(field.points, data[:, :2])
    numpy.testing.assert_allclose(field.z, data[:, 2])


def test_structured_array():
    data = numpy.array(
        [(1.0, 2.0, 3.0), (4.0, 5.0, 6.0)],
        dtype=[("z", float), ("x", float), ("y", float)],
    )
    field = ScatteredField(data)
    numpy.testing.assert_allclose(field.samples, [[2, 3, 1], [5, 6, 4]])


def test_dataframe():
    pandas = pytest.importorskip("pandas")
    df = pandas.DataFrame({"x": [0.0, 1.0], "y": [0.0, 1.0], "z": [5.0, 6.0]})
    field = ScatteredField(df)
    numpy.testing.assert_allclose(field.z, [5, 6])


def test_undefined_z_is_dropped():
    data = numpy.array(
        [
            [0.0, 0.0, 1.0],
            [5.0, 5.0, numpy.nan],
            [1.0, 2.0, 3.0],
        ]
    )
    field = ScatteredField(data, columns=["x", "y", "z"])
    assert len(field) == 2
    assert field.x_range == (0, 1)
    assert field.y_range == (0, 2)
    assert field.bounds == (0, 0, 1, 2)
    assert field.z_range == (1, 3)


def test_samples_are_copied():
    data = numpy.array([[0.0, 0.0, 1.0], [1.0, 1.0, 2.0]])
    field = ScatteredField(data, columns=["x", "y", "z"])
    data[0, 2] = 100
    assert field.z[0] == 1


@pytest.mark.parametrize(
    "data, columns, message",
    [
        [numpy.zeros((3, 2)), ["x", "y"], "at least 3 columns"],
        [numpy.zeros(3), None, "2D table"],
        [{"x": ["a", "b"], "y": [1, 2], "z": [1, 2]}, None, "numeric table"],
        [
            numpy.array([[0.0, 0.0, numpy.nan], [1.0, 1.0, numpy.nan]]),
            ["x", "y", "z"],
            "No samples",
        ],
        [
            numpy.array([[numpy.nan, 0.0, 1.0], [1.0, 1.0, 2.0]]),
            ["x", "y", "z"],
            "must be finite",
        ],
        [numpy.zeros((2, 3)), ["x", "y"], "column names"],
    ],
)
def test_invalid_input(data, columns, message):
    with pytest.raises(InvalidInputError, match=message) as e:
        ScatteredField(data, columns=columns)
    assert e.value.stage == "field validation"
    assert str(e.value).startswith("[field validation]")


def test_crs():
    field = ScatteredField(
        {"x": [0.0, 1.0], "y": [0.0, 1.0], "z": [1.0, 2.0]}, crs=4326
    )
    assert field.crs.to_epsg() == 4326
