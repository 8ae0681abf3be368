import math

import numpy as np
import pytest

from src.camproute.services.geospatial import (
    bearing_degrees,
    distance_matrix_km,
    haversine_km,
    point_in_polygon,
    road_distance_km,
)

PARIS = (48.8566, 2.3522)
LYON = (45.764, 4.8357)
MARSEILLE = (43.2965, 5.3698)


def test_haversine_known_distances():
    assert haversine_km(*PARIS, *LYON) == pytest.approx(391.5, abs=2)
    assert haversine_km(*LYON, *MARSEILLE) == pytest.approx(277.5, abs=3)


def test_haversine_is_symmetric_and_zero_on_identity():
    assert haversine_km(*PARIS, *PARIS) == 0
    assert haversine_km(*PARIS, *LYON) == pytest.approx(haversine_km(*LYON, *PARIS))


def test_road_distance_applies_factor():
    direct = haversine_km(*PARIS, *LYON)
    assert road_distance_km(*PARIS, *LYON) == pytest.approx(direct * 1.2)
    assert road_distance_km(*PARIS, *LYON, road_factor=1.0) == pytest.approx(direct)


def test_distance_matrix_matches_pairwise_road_distance():
    points = [PARIS, LYON, MARSEILLE]
    matrix = distance_matrix_km(points)

    assert matrix.shape == (3, 3)
    assert np.all(np.diag(matrix) == 0)
    assert np.allclose(matrix, matrix.T)
    assert matrix[0, 1] == pytest.approx(road_distance_km(*PARIS, *LYON))
    assert matrix[1, 2] == pytest.approx(road_distance_km(*LYON, *MARSEILLE))


def test_distance_matrix_empty():
    assert distance_matrix_km([]).shape == (0, 0)


def test_bearing_cardinal_directions():
    assert bearing_degrees(45.0, 5.0, 46.0, 5.0) == pytest.approx(0.0, abs=1e-6)
    assert bearing_degrees(46.0, 5.0, 45.0, 5.0) == pytest.approx(180.0, abs=1e-6)
    east = bearing_degrees(0.0, 0.0, 0.0, 1.0)
    assert math.isclose(east, 90.0, abs_tol=1e-6)


def test_point_in_polygon():
    square = [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0)]
    assert point_in_polygon(0.5, 0.5, square)
    assert not point_in_polygon(1.5, 0.5, square)
