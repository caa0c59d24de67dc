"""Tests for matching strategies and score tables."""

import math

import numpy as np
import pytest


@pytest.fixture
def box(make_object):
    """Box at [1, 1, 0] with size [2, 1, 1]."""
    return make_object(position=(1.0, 1.0, 0.0), size=(2.0, 1.0, 1.0))


class TestSelfMatch:
    """An object matched against itself."""

    def test_scores(self, box):
        """Test the scores of a box against itself."""
        from perception_eval.matching import MatchingMode, calculate_score

        assert calculate_score(MatchingMode.CENTER_DISTANCE, box, box) == pytest.approx(0.0)
        assert calculate_score(MatchingMode.PLANE_DISTANCE, box, box) == pytest.approx(0.0)
        assert calculate_score(MatchingMode.IOU_2D, box, box) == pytest.approx(1.0)
        assert calculate_score(MatchingMode.IOU_3D, box, box) == pytest.approx(1.0)

    @pytest.mark.parametrize("mode", ["CENTER_DISTANCE", "PLANE_DISTANCE", "IOU_2D", "IOU_3D"])
    def test_is_match(self, box, mode):
        """Test a box matches itself under every mode."""
        from perception_eval.matching import MatchingMode, is_match

        assert is_match(MatchingMode[mode], box, box, 0.5)


class TestCenterDistance:
    """Tests for the center distance strategy."""

    def test_distance(self, make_object):
        """Test center distance of shifted boxes."""
        from perception_eval.matching import center_distance

        est = make_object(position=(0.0, 0.0, 0.0))
        gt = make_object(position=(3.0, 4.0, 0.0))

        assert center_distance(est, gt) == pytest.approx(5.0)

    def test_threshold_is_strict(self, make_object):
        """Test a score equal to the threshold does not match."""
        from perception_eval.matching import MatchingMode, is_match

        est = make_object(position=(0.0, 0.0, 0.0))
        gt = make_object(position=(1.0, 0.0, 0.0))

        assert not is_match(MatchingMode.CENTER_DISTANCE, est, gt, 1.0)
        assert is_match(MatchingMode.CENTER_DISTANCE, est, gt, 1.01)


class TestPlaneDistance:
    """Tests for the plane distance strategy."""

    def test_longitudinal_offset(self, make_object):
        """Test plane distance of a longitudinal offset."""
        from perception_eval.matching import plane_distance

        gt = make_object(position=(10.0, 0.0, 0.0))
        est = make_object(position=(10.5, 0.0, 0.0))

        assert plane_distance(est, gt) == pytest.approx(0.5)

    def test_lateral_offset(self, make_object):
        """Corner pairing follows position, not corner generation order."""
        from perception_eval.matching import plane_distance

        gt = make_object(position=(10.0, 0.0, 0.0))
        est = make_object(position=(10.0, 0.5, 0.0))

        assert plane_distance(est, gt) == pytest.approx(0.5)


class TestIoU:
    """Tests for the IoU strategies."""

    def test_iou_2d_partial(self, make_object):
        """Test BEV IoU of overlapping boxes."""
        from perception_eval.matching import iou_2d

        est = make_object(position=(0.0, 0.0, 0.0))
        gt = make_object(position=(1.0, 0.0, 0.0))

        # intersection 2, union 4 + 4 - 2
        assert iou_2d(est, gt) == pytest.approx(1.0 / 3.0)

    def test_iou_3d_partial(self, make_object):
        """Test 3D IoU of overlapping boxes."""
        from perception_eval.matching import iou_3d

        est = make_object(position=(0.0, 0.0, 0.0))
        gt = make_object(position=(1.0, 0.0, 0.0))

        # intersection 2 * 2, union 8 + 8 - 4
        assert iou_3d(est, gt) == pytest.approx(1.0 / 3.0)

    def test_iou_3d_vertical_shift(self, make_object):
        """Test 3D IoU of vertically shifted boxes."""
        from perception_eval.matching import iou_2d, iou_3d

        est = make_object(position=(0.0, 0.0, 0.0))
        gt = make_object(position=(0.0, 0.0, 1.0))

        assert iou_2d(est, gt) == pytest.approx(1.0)
        assert iou_3d(est, gt) == pytest.approx(1.0 / 3.0)

    def test_disjoint(self, make_object):
        """Test IoU of disjoint boxes."""
        from perception_eval.matching import iou_2d, iou_3d

        est = make_object(position=(0.0, 0.0, 0.0))
        gt = make_object(position=(10.0, 0.0, 0.0))

        assert iou_2d(est, gt) == 0.0
        assert iou_3d(est, gt) == 0.0

    def test_degenerate_boxes(self, make_object):
        """Zero-size boxes give 0.0, not NaN."""
        from perception_eval.matching import iou_2d, iou_3d

        est = make_object(size=(0.0, 0.0, 0.0))
        gt = make_object(size=(0.0, 0.0, 0.0))

        assert iou_2d(est, gt) == 0.0
        assert iou_3d(est, gt) == 0.0

    def test_rotated_box(self, make_object):
        """A box rotated by 90 deg over its own center."""
        from perception_eval.matching import iou_2d

        q = (np.cos(np.pi / 4), 0.0, 0.0, np.sin(np.pi / 4))
        est = make_object(size=(4.0, 2.0, 1.0))
        gt = make_object(orientation=q, size=(4.0, 2.0, 1.0))

        # intersection 2 x 2, union 8 + 8 - 4
        assert iou_2d(est, gt) == pytest.approx(4.0 / 12.0)

    def test_iou_threshold_direction(self, make_object):
        """Test IoU matching above the threshold."""
        from perception_eval.matching import MatchingMode, is_match

        est = make_object(position=(0.0, 0.0, 0.0))
        gt = make_object(position=(1.0, 0.0, 0.0))

        assert is_match(MatchingMode.IOU_2D, est, gt, 0.3)
        assert not is_match(MatchingMode.IOU_2D, est, gt, 0.5)


class TestMatchingMode:
    """Tests for MatchingMode."""

    def test_direction(self):
        """Test the better-score direction of each mode."""
        from perception_eval.matching import MatchingMode

        assert MatchingMode.CENTER_DISTANCE.lower_is_better
        assert MatchingMode.PLANE_DISTANCE.lower_is_better
        assert not MatchingMode.IOU_2D.lower_is_better
        assert not MatchingMode.IOU_3D.lower_is_better

    def test_is_better_score(self):
        """Test score comparison per mode."""
        from perception_eval.matching import MatchingMode, is_better_score

        assert is_better_score(MatchingMode.CENTER_DISTANCE, 0.5, 1.0)
        assert is_better_score(MatchingMode.IOU_3D, 0.8, 0.5)
        assert not is_better_score(MatchingMode.IOU_3D, 0.5, 0.5)


class TestScoreTable:
    """Tests for ScoreTable."""

    def test_label_mismatch_is_ineligible(self, make_object):
        """Test cells of different labels are NaN."""
        from perception_eval.matching import ScoreTable
        from perception_eval.objects import Label

        ests = [make_object(label=Label.CAR)]
        gts = [make_object(label=Label.PEDESTRIAN), make_object(position=(1.0, 0.0, 0.0))]

        table = ScoreTable.build(ests, gts)

        assert table.shape == (1, 2)
        assert math.isnan(table.scores[0, 0])
        assert not table.is_eligible(0, 0)
        assert table.scores[0, 1] == pytest.approx(1.0)

    def test_read_only(self, make_object):
        """Test the score matrix cannot be written."""
        from perception_eval.matching import ScoreTable

        table = ScoreTable.build([make_object()], [make_object()])

        with pytest.raises(ValueError):
            table.scores[0, 0] = 1.0

    def test_best_index_distance(self, make_object):
        """Test the best column under a distance mode."""
        from perception_eval.matching import ScoreTable

        ests = [make_object()]
        gts = [make_object(position=(2.0, 0.0, 0.0)), make_object(position=(0.5, 0.0, 0.0))]

        table = ScoreTable.build(ests, gts)

        assert table.best_index(0) == 1
        assert table.best_index(0, consumed={1}) == 0
        assert table.best_index(0, consumed={0, 1}) is None

    def test_best_index_iou(self, make_object):
        """Test the best column under an IoU mode."""
        from perception_eval.matching import MatchingMode, ScoreTable

        ests = [make_object()]
        gts = [make_object(position=(1.0, 0.0, 0.0)), make_object(position=(0.5, 0.0, 0.0))]

        table = ScoreTable.build(ests, gts, MatchingMode.IOU_2D)

        assert table.best_index(0) == 1

    def test_tie_goes_to_lowest_index(self, make_object):
        """Test ties resolve to the lowest column."""
        from perception_eval.matching import ScoreTable

        ests = [make_object()]
        gts = [make_object(position=(1.0, 0.0, 0.0)), make_object(position=(-1.0, 0.0, 0.0))]

        table = ScoreTable.build(ests, gts)

        assert table.best_index(0) == 0
