"""
Colour objects by a surface
===========================

Colour polygons based on values measured at scattered points

Introduction
------------

In this example a set of polygons is coloured by a surface that is interpolated between scattered samples.
For this operation we need:

#. locations and values of the samples
#. the polygons to colour
#. the visible area of the map

In this example, we simulate the sample data using a 2d sinusoidal equation,
sampled at pseudo-random locations in the centre of the map.
The polygons are a regular pattern of small squares covering the whole map.

"""

# sphinx_gallery_thumbnail_number = -1

import numpy

numpy.random.seed(0)
x = 20 + 60 * numpy.random.rand(100)
numpy.random.seed(1)
y = 20 + 60 * numpy.random.rand(100)
values = numpy.sin(x / (10 * numpy.pi)) * numpy.sin(y / (10 * numpy.pi))
samples = dict(x=x, y=y, z=values)

import shapely.geometry

squares = [
    shapely.geometry.box(cx, cy, cx + 3, cy + 3)
    for cx in range(0, 100, 5)
    for cy in range(0, 100, 5)
]
viewport = (0, 0, 100, 100)

# %%
#
# Now we can look up the value of each square.
# Without a background colour, squares outside the range of the samples get the value of the nearest edge of the surface.

from gridsurface import surface_layers

layers = surface_layers(squares, samples, viewport=viewport, grid_size=50)

import matplotlib.pyplot as plt
from matplotlib.collections import PolyCollection
from matplotlib.colors import LinearSegmentedColormap


def plot_layers(layers, ax):
    cmap = LinearSegmentedColormap.from_list("surface", layers.foreground_style["colours"])
    polygons = [vertices for _, vertices, _, _ in layers.foreground.groups()]
    colours = [z for _, _, z, _ in layers.foreground.groups()]
    collection = PolyCollection(polygons, array=numpy.array(colours), cmap=cmap)
    collection.set_clim(*layers.z_limits)
    ax.add_collection(collection)

    if layers.background_style is not None:
        polygons = [vertices for _, vertices, _, _ in layers.background.groups()]
        ax.add_collection(
            PolyCollection(polygons, facecolor=layers.background_style["colour"])
        )

    ax.scatter(x, y, c="black", s=2)
    ax.set_xlim(viewport[0], viewport[2])
    ax.set_ylim(viewport[1], viewport[3])
    ax.set_aspect("equal")
    return collection


fig, axes = plt.subplots(1, 2, sharey=True, figsize=(12, 6))
collection = plot_layers(layers, axes[0])
axes[0].set_title("Extrapolated")

# %%
#
# When a background colour is given, squares outside of the convex hull of the samples
# are drawn in that colour instead.

layers = surface_layers(
    squares, samples, viewport=viewport, grid_size=50, background_colour="lightgray"
)
plot_layers(layers, axes[1])
axes[1].set_title("Outside of the hull in the background colour")
fig.colorbar(collection, ax=axes)
plt.show()
