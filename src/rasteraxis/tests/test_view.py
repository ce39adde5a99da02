import numpy as np
import pytest
from PIL import Image

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

NEIGHBOURS = [(0, 0), (-1, -1), (1, 1), (1, 0), (0, 1), (-1, 0), (0, -1)]


def gray_2x2_array():
    return np.array([[32, 64], [128, 255]], dtype=np.uint8)


def gray_2x2_image():
    return Image.frombytes('L', (2, 2), bytes([32, 64, 128, 255]))


@pytest.fixture(params=['array', 'image', 'flat'])
def raster(request):
    if request.param == 'array':
        return gray_2x2_array()
    if request.param == 'image':
        return gray_2x2_image()
    return ArrayRaster.from_flat([32, 64, 128, 255], width=2, height=2)


def test_as_raster_wraps_known_types():
    assert isinstance(as_raster(gray_2x2_array()), ArrayRaster)
    assert isinstance(as_raster(gray_2x2_image()), ImageRaster)
    r = ArrayRaster(gray_2x2_array())
    assert as_raster(r) is r
    assert isinstance(r, Raster)
    with pytest.raises(TypeError):
        as_raster([[1, 2], [3, 4]])


def test_array_raster_rejects_bad_shapes():
    with pytest.raises(ValueError):
        ArrayRaster(np.zeros(4))
    with pytest.raises(ValueError):
        ArrayRaster.from_flat([1, 2, 3], width=2, height=2)


def test_edges():
    assert edges(2, 2) == (1, 1)
    assert edges(640, 480) == (639, 479)
    assert raster_edges(np.zeros((3, 5))) == (4, 2)
    assert raster_edges(gray_2x2_image()) == (1, 1)
    with pytest.raises(EmptyRasterError):
        edges(0, 0)
    with pytest.raises(EmptyRasterError):
        edges(3, 0)
    with pytest.raises(ValueError):
        edges(300, 2, bits=8)


def test_in_bounds_for_empty_image():
    image = np.zeros((0, 0), dtype=np.uint8)
    for coords in NEIGHBOURS:
        assert not within_bounds(image, coords)


def test_in_bounds_for_zero_height_image():
    image = np.zeros((0, 4), dtype=np.uint8)
    for coords in NEIGHBOURS:
        assert not within_bounds(image, coords)
        assert get_pixel_at(image, coords) is None


def test_in_bounds_for_non_empty_image():
    image = np.zeros((1, 1), dtype=np.uint8)
    assert within_bounds(image, (0, 0))
    for coords in NEIGHBOURS[1:]:
        assert not within_bounds(image, coords)


def test_lookup_pixel_for_empty_image():
    image = np.zeros((0, 0), dtype=np.uint8)
    for coords in NEIGHBOURS:
        assert get_pixel_at(image, coords) is None


def test_lookup_pixel_for_non_empty_image():
    image = np.full((1, 1), 255, dtype=np.uint8)
    assert get_pixel_at(image, (-1, -1)) is None
    assert get_pixel_at(image, (1, 1)) is None
    assert get_pixel_at(image, (0, 0)) == image[0, 0]


def test_lookup_matches_direct_fetch(raster):
    r = as_raster(raster)
    for y in range(r.height):
        for x in range(r.width):
            assert get_pixel_at(raster, (x, y)) == r.unchecked_fetch(x, y)


def test_clamp_pixel_for_empty_image():
    image = np.zeros((0, 0), dtype=np.uint8)
    with pytest.raises(EmptyRasterError):
        get_pixel_clamped(image, (0, 0))


def test_clamp_pixel_for_non_empty_image(raster):
    w, h = 2, 2
    b, r = h - 1, w - 1

    # near top-left corner
    assert get_pixel_clamped(raster, (-1, -1)) == 32
    assert get_pixel_clamped(raster, (0, -1)) == 32
    assert get_pixel_clamped(raster, (-1, 0)) == 32

    # near bottom-right corner
    assert get_pixel_clamped(raster, (w, b)) == 255
    assert get_pixel_clamped(raster, (r, h)) == 255
    assert get_pixel_clamped(raster, (5, 5)) == 255

    # near top-right corner
    assert get_pixel_clamped(raster, (w, 0)) == 64
    assert get_pixel_clamped(raster, (r, -1)) == 64
    assert get_pixel_clamped(raster, (w, -1)) == 64

    # near bottom-left corner
    assert get_pixel_clamped(raster, (-1, b)) == 128
    assert get_pixel_clamped(raster, (-1, h)) == 128
    assert get_pixel_clamped(raster, (0, h)) == 128

    # corners of the image
    assert get_pixel_clamped(raster, (0, 0)) == 32
    assert get_pixel_clamped(raster, (r, 0)) == 64
    assert get_pixel_clamped(raster, (0, b)) == 128
    assert get_pixel_clamped(raster, (r, b)) == 255


def test_checked_lookup_scenario(raster):
    assert within_bounds(raster, (0, 0))
    assert within_bounds(raster, (1, 1))
    assert not within_bounds(raster, (-1, 0))
    assert not within_bounds(raster, (2, 0))

    assert get_pixel_at(raster, (0, 0)) == 32
    assert get_pixel_at(raster, (1, 0)) == 64
    assert get_pixel_at(raster, (0, 1)) == 128
    assert get_pixel_at(raster, (1, 1)) == 255
    assert get_pixel_at(raster, (-1, -1)) is None
    assert get_pixel_at(raster, (2, 2)) is None


def test_coordinate_representations(raster):
    tuple_coord = (np.int32(0), np.int32(1))
    assert within_bounds(raster, tuple_coord)
    assert get_pixel_at(raster, tuple_coord) == 128

    array_coord = np.array([1, 0], dtype=np.int32)
    assert within_bounds(raster, array_coord)
    assert get_pixel_at(raster, array_coord) == 64

    assert get_pixel_clamped(raster, [-1, -1]) == 32
    assert get_pixel_clamped(raster, np.array([5, 5], dtype=np.int32)) == 255


def test_shapely_point_lookup(raster):
    geometry = pytest.importorskip('shapely.geometry')
    assert within_bounds(raster, geometry.Point(0, 1))
    assert get_pixel_at(raster, geometry.Point(0, 1)) == 128
    assert not within_bounds(raster, geometry.Point(-1, -1))
    assert get_pixel_clamped(raster, geometry.Point(-1, -1)) == 32


def test_float_coordinates(raster):
    nan, inf = float('nan'), float('inf')
    assert get_pixel_at(raster, (1.9, 0.2)) == 64
    assert get_pixel_at(raster, (nan, 0.0)) is None
    assert not within_bounds(raster, (inf, 0.0))

    assert get_pixel_clamped(raster, (nan, nan)) == 32
    assert get_pixel_clamped(raster, (inf, 0.0)) == 64
    assert get_pixel_clamped(raster, (-inf, inf)) == 128
    assert get_pixel_clamped(raster, (inf, inf)) == 255


def test_unsigned_and_wide_coordinates(raster):
    assert get_pixel_at(raster, (np.uint8(1), np.uint8(1))) == 255
    assert get_pixel_at(raster, (np.uint64(2 ** 40), np.uint64(0))) is None
    assert get_pixel_clamped(raster, (np.uint64(2 ** 40), np.uint64(0))) == 64
    assert get_pixel_clamped(raster, (-(2 ** 80), 2 ** 80)) == 128


def test_multichannel_pixels():
    rgb = np.arange(2 * 2 * 3, dtype=np.uint8).reshape((2, 2, 3))
    pixel = get_pixel_at(rgb, (1, 0))
    assert np.array_equal(pixel, [3, 4, 5])
    assert np.array_equal(get_pixel_clamped(rgb, (9, 9)), [9, 10, 11])

    image = Image.fromarray(rgb)
    assert image.mode == 'RGB'
    assert get_pixel_clamped(image, (9, -9)) == (3, 4, 5)


def test_get_pixels_at():
    points = np.array([[0, 0], [1, 0], [-1, 0], [2, 2], [1, 1]])
    pixels, valid = get_pixels_at(gray_2x2_array(), points)
    assert np.array_equal(valid, [True, True, False, False, True])
    assert np.array_equal(pixels, [32, 64, 0, 0, 255])

    pixels, valid = get_pixels_at(gray_2x2_image(), points, fill_value=7)
    assert np.array_equal(pixels, [32, 64, 7, 7, 255])


def test_get_pixels_at_empty_raster():
    pixels, valid = get_pixels_at(np.zeros((0, 0), dtype=np.uint8), np.array([[0, 0], [1, 1]]))
    assert not valid.any()
    assert np.array_equal(pixels, [0, 0])


def test_get_pixels_clamped():
    points = np.array([[-1.0, -1.0], [2.0, 0.0], [-1.0, 1.0], [5.0, 5.0], [np.nan, np.inf]])
    expected = [32, 64, 128, 255, 128]
    assert np.array_equal(get_pixels_clamped(gray_2x2_array(), points), expected)
    assert np.array_equal(get_pixels_clamped(gray_2x2_image(), points), expected)
    with pytest.raises(EmptyRasterError):
        get_pixels_clamped(np.zeros((0, 0)), points)


class TupleRaster:
    """Minimal raster with no bulk fetch."""

    def __init__(self, rows):
        self.rows = rows

    @property
    def width(self):
        return len(self.rows[0]) if self.rows else 0

    @property
    def height(self):
        return len(self.rows)

    def unchecked_fetch(self, x, y):
        return self.rows[y][x]


def test_get_pixels_at_keeps_pixel_layout_when_nothing_is_inside():
    rgb = np.arange(2 * 2 * 3, dtype=np.uint8).reshape((2, 2, 3))
    image = Image.fromarray(rgb)
    some, _ = get_pixels_at(image, np.array([[0, 0], [9, 9]]))
    none, valid = get_pixels_at(image, np.array([[9, 9], [9, 9]]))
    assert not valid.any()
    assert some.shape == none.shape == (2, 3)
    assert some.dtype == none.dtype == np.uint8
    assert np.array_equal(some[0], [0, 1, 2])

    pixels, valid = get_pixels_at(gray_2x2_image(), np.array([[-1, 0], [0, 5]]))
    assert not valid.any()
    assert pixels.dtype == np.uint8
    assert pixels.shape == (2,)


def test_get_pixels_at_for_raster_without_bulk_fetch():
    raster = TupleRaster([[(1, 2, 3), (4, 5, 6)]])
    pixels, valid = get_pixels_at(raster, np.array([[1, 0], [3, 3]]))
    assert np.array_equal(valid, [True, False])
    assert np.array_equal(pixels, [[4, 5, 6], [0, 0, 0]])

    pixels, valid = get_pixels_at(raster, np.array([[3, 3], [-1, 0]]))
    assert not valid.any()
    assert pixels.shape == (2, 3)
    assert np.array_equal(get_pixels_clamped(raster, np.array([[-5, 9]])), [[1, 2, 3]])
