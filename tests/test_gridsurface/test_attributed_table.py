import numpy
import pytest

from gridsurface import AttributedRecord, AttributedTable


@pytest.fixture(scope="function")
def table():
    return AttributedTable(
        id=[1, 1, 1, 2, 2, 3],
        x=[0, 1, 0, 5, 6, 9],
        y=[0, 0, 1, 5, 6, 9],
        z=[0.5, 0.5, 0.5, numpy.nan, numpy.nan, 2.0],
        inside_hull=[1, 1, 1, 0, 0, 1],
        kind="polyline",
    )


def test_records(table):
    records = list(table)
    assert len(records) == 6
    assert records[0] == AttributedRecord(1, 0.0, 0.0, 0.5, 1.0)
    assert table[5].id == 3
    assert table[5].z == 2.0
    numpy.testing.assert_equal(table["id"], table.id)


def test_ids_in_order_of_appearance():
    table = AttributedTable([3, 3, 1, 2], [0] * 4, [0] * 4, [0] * 4, [numpy.nan] * 4)
    numpy.testing.assert_equal(table.ids, [3, 1, 2])


def test_foreground_background(table):
    foreground = table.foreground()
    background = table.background()
    numpy.testing.assert_equal(foreground.ids, [1, 3])
    numpy.testing.assert_equal(background.ids, [2])
    assert len(foreground) + len(background) == len(table)
    assert foreground.kind == "polyline"


def test_undefined_membership_is_foreground():
    table = AttributedTable([1, 2], [0, 0], [0, 0], [1, 2], [numpy.nan, numpy.nan])
    assert len(table.foreground()) == 2
    assert len(table.background()) == 0


def test_groups(table):
    groups = list(table.groups())
    assert [group[0] for group in groups] == [1, 2, 3]
    numpy.testing.assert_allclose(groups[0][1], [[0, 0], [1, 0], [0, 1]])
    assert groups[0][2] == 0.5
    assert numpy.isnan(groups[1][2])
    assert groups[1][3] == 0


def test_to_dict(table):
    columns = table.to_dict()
    assert list(columns) == ["id", "x", "y", "z", "inside_hull"]
    columns["x"][0] = 100
    assert table.x[0] == 0


def test_empty():
    table = AttributedTable.empty(kind="point")
    assert len(table) == 0
    assert list(table) == []
    assert len(table.ids) == 0


def test_unequal_columns():
    with pytest.raises(ValueError):
        AttributedTable([1, 2], [0], [0], [0], [0])
