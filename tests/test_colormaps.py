import numpy as np
import pytest

from bandbrot.colormaps import BLACK, colorize, create_colormap, halfway_point
from bandbrot.compute import apply_colormap
from bandbrot.escape import IN_SET, IN_SET_CODE, Escaped


LIMITS = [2, 3, 16, 255, 256, 1001]


def test_in_set_is_black():
    assert colorize(IN_SET, 256) == BLACK == (0, 0, 0)


def test_halfway_rounds_up():
    assert halfway_point(256) == 128
    assert halfway_point(255) == 128
    assert halfway_point(1) == 1


def test_ramp_endpoints():
    assert colorize(Escaped(0), 256) == (0, 0, 0)
    assert colorize(Escaped(127), 256) == (253, 0, 0)
    assert colorize(Escaped(128), 256) == (255, 0, 0)
    assert colorize(Escaped(255), 256) == (255, 253, 253)


@pytest.mark.parametrize('limit', LIMITS[1:])
def test_first_and_last_lower_band_differ(limit):
    halfway = halfway_point(limit)
    assert colorize(Escaped(0), limit) != colorize(Escaped(halfway - 1), limit)


@pytest.mark.parametrize('limit', LIMITS)
def test_upper_half_has_no_seam(limit):
    # Above the halfway point the green/blue ramp must only increase; a
    # floored halfway would wrap the last iteration back to pure red.
    halfway = halfway_point(limit)
    greens = [colorize(Escaped(i), limit)[1] for i in range(halfway, limit)]
    assert greens == sorted(greens)
    for i in range(halfway, limit):
        r, g, b = colorize(Escaped(i), limit)
        assert r == 255 and g == b


def test_odd_limit_last_iteration_is_near_white():
    assert colorize(Escaped(254), 255) == (255, 251, 251)


@pytest.mark.parametrize('limit', LIMITS)
def test_total_over_iteration_range(limit):
    for i in range(limit):
        color = colorize(Escaped(i), limit)
        assert len(color) == 3
        assert all(0 <= channel <= 255 for channel in color)


def test_out_of_range_iterations_rejected():
    with pytest.raises(ValueError):
        colorize(Escaped(256), 256)
    with pytest.raises(TypeError):
        colorize(5, 256)


def test_colormap_table():
    table = create_colormap(16)
    assert table.shape == (17, 3)
    assert table.dtype == np.uint8
    assert tuple(table[-1]) == BLACK
    for i in range(16):
        assert tuple(table[i]) == colorize(Escaped(i), 16)


def test_apply_colormap_kernel():
    table = create_colormap(16)
    codes = np.array([[0, 5, IN_SET_CODE], [8, 15, 3]], dtype=np.int32)
    out = np.zeros((2, 3, 3), dtype=np.uint8)
    apply_colormap(codes, table, out)
    assert tuple(out[0, 2]) == BLACK
    assert tuple(out[1, 1]) == colorize(Escaped(15), 16)
    assert tuple(out[0, 1]) == colorize(Escaped(5), 16)
