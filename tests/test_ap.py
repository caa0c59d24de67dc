"""Tests for the AP / APH calculator."""

import math

import numpy as np
import pytest


@pytest.fixture
def tp_result(make_object):
    """Result that matches under a 1 m center-distance threshold."""
    from perception_eval.result import PerceptionResult

    def _make(orientation=(1.0, 0.0, 0.0, 0.0)):
        return PerceptionResult(make_object(orientation=orientation), make_object())

    return _make


@pytest.fixture
def fp_result(make_object):
    from perception_eval.result import PerceptionResult

    def _make():
        return PerceptionResult(make_object(position=(50.0, 0.0, 0.0)))

    return _make


def compute_ap(results, num_gt, tp_metrics=None):
    from perception_eval.eval import Ap, TPMetrics
    from perception_eval.matching import MatchingMode

    return Ap(tp_metrics or TPMetrics.AP, results, num_gt, MatchingMode.CENTER_DISTANCE, 1.0)


class TestHeading:
    """Tests for the heading weight."""

    def test_same_heading(self):
        """Test full heading weight for an identical yaw."""
        from perception_eval.eval.ap import heading_tp_value

        assert heading_tp_value(0.3, 0.3) == pytest.approx(1.0)

    def test_opposite_heading(self):
        """Test zero heading weight for a half turn."""
        from perception_eval.eval.ap import heading_tp_value

        assert heading_tp_value(np.pi, 0.0) == pytest.approx(0.0)

    def test_quarter_turn(self):
        """Test half heading weight for a quarter turn."""
        from perception_eval.eval.ap import heading_tp_value

        assert heading_tp_value(np.pi / 2, 0.0) == pytest.approx(0.5)

    def test_wraps_around(self):
        """3.0 and -3.0 rad are 2*pi - 6 rad apart."""
        from perception_eval.eval.ap import heading_tp_value

        expected = 1.0 - (2.0 * np.pi - 6.0) / np.pi
        assert heading_tp_value(3.0, -3.0) == pytest.approx(expected)


class TestCurve:
    """Tests for the running sums and PR curve."""

    def test_calculate_tp_fp(self, tp_result, fp_result):
        """Test running TP and FP sums."""
        from perception_eval.eval.ap import calculate_tp_fp
        from perception_eval.matching import MatchingMode

        results = [tp_result(), fp_result(), tp_result()]
        tp_list, fp_list = calculate_tp_fp(results, MatchingMode.CENTER_DISTANCE, 1.0)

        assert np.allclose(tp_list, [1.0, 1.0, 2.0])
        assert np.allclose(fp_list, [0.0, 1.0, 1.0])

    def test_precision_recall(self):
        """Test precision and recall per position."""
        from perception_eval.eval.ap import calculate_precision_recall

        precision, recall = calculate_precision_recall(np.array([1.0, 1.0, 2.0]), 4)

        assert np.allclose(precision, [1.0, 0.5, 2.0 / 3.0])
        assert np.allclose(recall, [0.25, 0.25, 0.5])

    def test_recall_without_ground_truth(self):
        """Test recall stays zero without ground truth."""
        from perception_eval.eval.ap import calculate_precision_recall

        _, recall = calculate_precision_recall(np.array([0.0, 0.0]), 0)

        assert np.allclose(recall, 0.0)

    def test_envelope(self):
        """Test the precision envelope from the highest recall down."""
        from perception_eval.eval.ap import interpolate_precision_recall

        max_precision, max_recall = interpolate_precision_recall(
            [1.0, 0.5, 2.0 / 3.0], [0.5, 0.5, 1.0]
        )

        assert np.allclose(max_precision, [2.0 / 3.0, 1.0, 1.0])
        assert np.allclose(max_recall, [1.0, 0.5, 0.0])

    def test_empty_envelope(self):
        """Test an empty curve gives an empty envelope."""
        from perception_eval.eval.ap import calculate_ap, interpolate_precision_recall

        max_precision, max_recall = interpolate_precision_recall([], [])

        assert len(max_precision) == 0
        assert calculate_ap(max_precision, max_recall) == 0.0


class TestAp:
    """Tests for Ap."""

    def test_perfect_detection(self, tp_result):
        """Test AP of one exact match."""
        assert compute_ap([tp_result()], 1).ap == pytest.approx(1.0)

    def test_trailing_false_positive(self, tp_result, fp_result):
        """Test a false positive after every match keeps AP at one."""
        assert compute_ap([tp_result(), fp_result()], 1).ap == pytest.approx(1.0)

    def test_leading_false_positive(self, tp_result, fp_result):
        """Results are not sorted: a leading FP lowers the score."""
        assert compute_ap([fp_result(), tp_result()], 1).ap == pytest.approx(0.5)

    def test_mixed(self, tp_result, fp_result):
        """Test AP of interleaved true and false positives."""
        ap = compute_ap([tp_result(), fp_result(), tp_result()], 2)

        assert ap.ap == pytest.approx(2.0 / 3.0 * 0.5 + 0.5)

    def test_missed_ground_truths(self, tp_result):
        """Test missed ground truths lower the reachable recall."""
        assert compute_ap([tp_result()], 4).ap == pytest.approx(0.25)

    def test_no_results_no_ground_truth(self):
        """Test AP is NaN with neither results nor ground truth."""
        assert math.isnan(compute_ap([], 0).ap)

    def test_false_positives_without_ground_truth(self, fp_result):
        """Test AP is zero for results without ground truth."""
        assert compute_ap([fp_result() for _ in range(3)], 0).ap == 0.0

    def test_ground_truth_without_results(self):
        """Test AP is zero for ground truth without results."""
        assert compute_ap([], 3).ap == 0.0

    def test_ap_in_unit_interval(self, tp_result, fp_result):
        """Test AP stays within [0, 1]."""
        results = [tp_result(), fp_result(), fp_result(), tp_result(), fp_result()]

        ap = compute_ap(results, 3).ap

        assert 0.0 <= ap <= 1.0


class TestAph:
    """Tests for heading-weighted AP."""

    def test_perfect_heading(self, tp_result):
        """Test APH equals AP when headings agree."""
        from perception_eval.eval import TPMetrics

        assert compute_ap([tp_result()], 1, TPMetrics.APH).ap == pytest.approx(1.0)

    def test_reversed_heading(self, tp_result):
        """A half turn keeps AP at 1 but drops APH to 0."""
        from perception_eval.eval import TPMetrics

        reversed_result = tp_result(orientation=(0.0, 0.0, 0.0, 1.0))

        assert compute_ap([reversed_result], 1, TPMetrics.AP).ap == pytest.approx(1.0)
        assert compute_ap([reversed_result], 1, TPMetrics.APH).ap == pytest.approx(0.0)

    def test_aph_not_above_ap(self, tp_result, fp_result):
        """Test APH never exceeds AP."""
        from perception_eval.eval import TPMetrics

        q = (np.cos(np.pi / 8), 0.0, 0.0, np.sin(np.pi / 8))
        results = [tp_result(q), fp_result(), tp_result()]

        ap = compute_ap(results, 2, TPMetrics.AP).ap
        aph = compute_ap(results, 2, TPMetrics.APH).ap

        assert aph <= ap

    def test_tp_value_without_ground_truth(self, fp_result):
        """Test heading weight of a false positive."""
        from perception_eval.eval import TPMetrics

        assert TPMetrics.APH.get_value(fp_result()) == 0.0
