"""Validated pixel addressing for 2-D rasters from any numeric coordinate type."""
from rasteraxis.index import (
    AxisDomain,
    axis_domain,
    axis_limit,
    clamp_axis_index,
    clamp_axis_indices,
    domain_for_dtype,
    to_axis_index,
    to_axis_indices,
)
from rasteraxis.coordinate import (
    PointLike,
    coordinate_components,
    image_coordinate,
    image_coordinate_clamped,
    image_coordinates,
    image_coordinates_clamped,
)
from rasteraxis.view import (
    ArrayRaster,
    EmptyRasterError,
    ImageRaster,
    Raster,
    as_raster,
    edges,
    get_pixel_at,
    get_pixel_clamped,
    get_pixels_at,
    get_pixels_clamped,
    raster_edges,
    within_bounds,
)
from rasteraxis.pixel import clamp_pixel, get_pixel, in_bounds

__version__ = "0.1.0"
