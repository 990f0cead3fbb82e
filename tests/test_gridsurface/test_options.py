import warnings

import pytest

from gridsurface import ConfigurationWarning, InvalidInputError, SurfaceOptions


def test_defaults():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        options = SurfaceOptions()
    assert options.method == "idw"
    assert options.grid_size == 100
    assert options.power == 2
    assert options.bandwidth is None
    assert len(options.colour_scale) == 30
    assert all(colour.startswith("#") for colour in options.colour_scale)
    assert not options.hull_filtering
    assert options.background_style("polygon") is None


@pytest.mark.parametrize(
    "kind, size, shape",
    [
        ["polygon", 0, None],
        ["polyline", 0.5, 1],
        ["point", 0.5, 1],
    ],
)
def test_default_styles(kind, size, shape):
    options = SurfaceOptions(background_colour="gray40")
    assert options.foreground_style(kind)["size"] == size
    assert options.foreground_style(kind)["shape"] == shape
    assert options.background_style(kind) == dict(colour="gray40", size=size, shape=shape)


def test_style_pairs():
    options = SurfaceOptions(background_colour="gray60", size=(1.5, 0.5), shape=(8, 1))
    assert options.foreground_style("point") == dict(
        colours=options.colour_scale, size=1.5, shape=8
    )
    assert options.background_style("point") == dict(colour="gray60", size=0.5, shape=1)


def test_single_style_value_applies_to_both():
    options = SurfaceOptions(background_colour="gray60", size=2, shape=[3])
    assert options.foreground_style("polyline")["size"] == 2
    assert options.background_style("polyline")["size"] == 2
    assert options.background_style("polyline")["shape"] == 3


def test_colour_scale_coercion():
    with pytest.warns(ConfigurationWarning, match="coerced"):
        options = SurfaceOptions(colour_scale=[(1, 0, 0), "blue", (0, 0, 1)])
    assert options.colour_scale == ["#ff0000", "blue", "#0000ff"]


def test_colour_scale_strings_untouched():
    options = SurfaceOptions(colour_scale="red")
    assert options.colour_scale == ["red"]


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(grid_size=0),
        dict(grid_size=1.5),
        dict(grid_size=True),
        dict(grid_size="10"),
        dict(method=None),
        dict(power=-1),
        dict(bandwidth=0),
        dict(colour_scale=[]),
        dict(colour_scale=[(2, 3)]),
        dict(size=(1, 2, 3)),
        dict(shape="dashed"),
    ],
)
def test_invalid_options(kwargs):
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", ConfigurationWarning)
        with pytest.raises(InvalidInputError) as e:
            SurfaceOptions(**kwargs)
    assert e.value.stage == "configuration"


def test_unknown_kind():
    with pytest.raises(InvalidInputError):
        SurfaceOptions().foreground_style("circle")
