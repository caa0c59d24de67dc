"""Tests for rotation, distance and footprint primitives."""

import numpy as np
import pytest


class TestQuaternion:
    """Tests for quaternion conversions."""

    def test_identity_rotation(self):
        """Test the identity quaternion."""
        from perception_eval.geometry import quaternion_to_rotation

        R = quaternion_to_rotation([1.0, 0.0, 0.0, 0.0])

        assert np.allclose(R, np.eye(3))

    def test_rotation_90_z(self):
        """Scalar-first quaternion for +90 deg about z."""
        from perception_eval.geometry import quaternion_to_rotation

        q = [np.cos(np.pi / 4), 0.0, 0.0, np.sin(np.pi / 4)]
        R = quaternion_to_rotation(q)

        expected = np.array([
            [0.0, -1.0, 0.0],
            [1.0, 0.0, 0.0],
            [0.0, 0.0, 1.0],
        ])
        assert np.allclose(R, expected)

    def test_yaw_90(self):
        """Test a quarter turn about z."""
        from perception_eval.geometry import quaternion_to_yaw

        q = [np.cos(np.pi / 4), 0.0, 0.0, np.sin(np.pi / 4)]

        assert quaternion_to_yaw(q) == pytest.approx(np.pi / 2)

    def test_yaw_half_turn(self):
        """A half turn is representable, not folded to 0."""
        from perception_eval.geometry import quaternion_to_yaw

        assert abs(quaternion_to_yaw([0.0, 0.0, 0.0, 1.0])) == pytest.approx(np.pi)

    def test_euler_identity(self):
        """Test euler angles of the identity quaternion."""
        from perception_eval.geometry import quaternion_to_euler

        roll, pitch, yaw = quaternion_to_euler([1.0, 0.0, 0.0, 0.0])

        assert np.allclose([roll, pitch, yaw], 0.0)


class TestAngles:
    """Tests for angle wrapping."""

    @pytest.mark.parametrize(
        "angle,expected",
        [
            (0.0, 0.0),
            (1.5 * np.pi, -0.5 * np.pi),
            (-1.5 * np.pi, 0.5 * np.pi),
            (np.pi, np.pi),
        ],
    )
    def test_normalize_angle(self, angle, expected):
        """Test angle wrapping."""
        from perception_eval.geometry import normalize_angle

        assert normalize_angle(angle) == pytest.approx(expected)


class TestDistances:
    """Tests for point distances."""

    def test_distance_points(self):
        """Test 3D point distance."""
        from perception_eval.geometry import distance_points

        assert distance_points([0.0, 0.0, 0.0], [1.0, 2.0, 2.0]) == pytest.approx(3.0)

    def test_distance_points_bev_ignores_z(self):
        """Test BEV distance ignores height."""
        from perception_eval.geometry import distance_points_bev

        assert distance_points_bev([0.0, 0.0, 10.0], [3.0, 4.0, -5.0]) == pytest.approx(5.0)


class TestFootprint:
    """Tests for box footprint corners."""

    def test_axis_aligned_footprint(self):
        """Test footprint corners of an unrotated box."""
        from perception_eval.geometry import box_footprint

        corners = box_footprint([1.0, 1.0, 0.0], [1.0, 0.0, 0.0, 0.0], [2.0, 2.0, 1.0])

        expected = np.array([
            [2.0, 2.0, 0.0],
            [0.0, 2.0, 0.0],
            [0.0, 0.0, 0.0],
            [2.0, 0.0, 0.0],
        ])
        assert corners.shape == (4, 3)
        assert np.allclose(corners, expected)

    def test_length_follows_heading(self):
        """Rotating by 90 deg moves the length onto the y axis."""
        from perception_eval.geometry import box_footprint

        q = [np.cos(np.pi / 4), 0.0, 0.0, np.sin(np.pi / 4)]
        corners = box_footprint([0.0, 0.0, 0.0], q, [4.0, 2.0, 1.0])

        assert np.allclose(np.abs(corners[:, 0]).max(), 1.0)
        assert np.allclose(np.abs(corners[:, 1]).max(), 2.0)

    def test_footprint_polygon_area(self):
        """Test footprint polygon area."""
        from perception_eval.geometry import box_footprint, footprint_polygon

        corners = box_footprint([5.0, -3.0, 0.0], [1.0, 0.0, 0.0, 0.0], [4.0, 2.0, 1.0])

        assert footprint_polygon(corners).area == pytest.approx(8.0)


class TestCornerOrdering:
    """Tests for (left, right) corner ordering."""

    def test_negative_cross_keeps_order(self):
        """Test corner order is kept for a negative cross product."""
        from perception_eval.geometry import get_point_left_right

        p1, p2 = np.array([0.0, 1.0]), np.array([1.0, 0.0])
        left, right = get_point_left_right(p1, p2)

        assert np.array_equal(left, p1)
        assert np.array_equal(right, p2)

    def test_positive_cross_swaps(self):
        """Test corners are swapped for a positive cross product."""
        from perception_eval.geometry import get_point_left_right

        p1, p2 = np.array([1.0, 0.0]), np.array([0.0, 1.0])
        left, right = get_point_left_right(p1, p2)

        assert np.array_equal(left, p2)
        assert np.array_equal(right, p1)

    def test_nearest_corner_pair(self):
        """Test the two corners nearest the sensor."""
        from perception_eval.geometry import box_footprint, nearest_corner_pair

        corners = box_footprint([10.0, 0.0, 0.0], [1.0, 0.0, 0.0, 0.0], [2.0, 2.0, 1.0])
        left, right = nearest_corner_pair(corners)

        assert np.allclose(left[:2], [9.0, 1.0])
        assert np.allclose(right[:2], [9.0, -1.0])


class TestVerticalOverlap:
    """Tests for vertical span overlap."""

    def test_partial_overlap(self):
        """Test partial vertical overlap."""
        from perception_eval.geometry import vertical_overlap

        assert vertical_overlap(0.0, 2.0, 1.0, 3.0) == pytest.approx(1.0)

    def test_contained(self):
        """Test a box contained in another."""
        from perception_eval.geometry import vertical_overlap

        assert vertical_overlap(0.0, 4.0, 1.0, 2.0) == pytest.approx(1.0)

    def test_disjoint(self):
        """Test boxes without vertical overlap."""
        from perception_eval.geometry import vertical_overlap

        assert vertical_overlap(0.0, 1.0, 2.0, 3.0) == 0.0
