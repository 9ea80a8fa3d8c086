import numpy as np

from annotation_utils.paint_ops import mark, mark_at_cursor, new_mask
from annotation_utils.viewport import Viewport
from gt_utils.config import MARKED, UNMARKED


def test_mark_paints_centered_square():
    mask = new_mask((100, 100))
    mark(mask, (50, 50), 5, set_mark=True)

    expected = np.zeros((100, 100), np.uint8)
    expected[45:56, 45:56] = MARKED
    np.testing.assert_array_equal(mask, expected)


def test_mark_is_idempotent():
    once = new_mask((64, 64))
    mark(once, (20, 30), 4)
    twice = once.copy()
    mark(twice, (20, 30), 4)
    np.testing.assert_array_equal(once, twice)


def test_clear_on_disjoint_region_keeps_marks():
    mask = new_mask((100, 100))
    mark(mask, (20, 20), 5)
    before = mask[15:26, 15:26].copy()

    mark(mask, (70, 70), 5, set_mark=False)
    np.testing.assert_array_equal(mask[15:26, 15:26], before)
    assert (mask[15:26, 15:26] == MARKED).all()


def test_clear_removes_marks():
    mask = new_mask((50, 50))
    mark(mask, (25, 25), 10)
    mark(mask, (25, 25), 3, set_mark=False)
    assert (mask[22:29, 22:29] == UNMARKED).all()
    assert mask[15, 15] == MARKED


def test_mark_is_clipped_at_image_border():
    mask = new_mask((30, 40))
    mark(mask, (0, 0), 5)
    assert (mask[:6, :6] == MARKED).all()
    assert mask.sum() == 36 * MARKED

    mark(mask, (39, 29), 50)
    assert (mask == MARKED).all()


def test_mark_at_cursor_maps_through_viewport():
    mask = new_mask((100, 100))
    vp = Viewport(100, 100)
    vp.zoom(0.5, (50, 50), (100, 100))

    # display (0, 0) is source (25, 25) once zoomed in
    mark_at_cursor(mask, vp, (0, 0), (100, 100), 1)
    assert (mask[24:27, 24:27] == MARKED).all()
    assert mask.sum() == 9 * MARKED


def test_mark_floors_points_left_of_the_border():
    mask = new_mask((20, 20))
    mark(mask, (-0.5, 10), 1)
    assert (mask[9:12, 0] == MARKED).all()
    assert not mask[:, 1:].any()
