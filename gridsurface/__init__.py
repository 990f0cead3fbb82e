from gridsurface.attribute import ObjectAttributor, attribute
from gridsurface.attributed_table import AttributedRecord, AttributedTable
from gridsurface.errors import ConfigurationWarning, InvalidInputError
from gridsurface.geometry import POINT, POLYGON, POLYLINE, GeometryCollection
from gridsurface.hull import INSIDE, ON_BOUNDARY, OUTSIDE, ConvexHullFilter
from gridsurface.interpolator import Interpolator, sample
from gridsurface.options import SurfaceOptions
from gridsurface.scattered_field import ScatteredField
from gridsurface.surface import SurfaceLayers, surface_layers
from gridsurface.surface_grid import SurfaceGrid
from gridsurface.version import __version__
