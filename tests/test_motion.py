import math

import numpy as np
import pytest

from mechlab.physics import (
    area_breakdown,
    area_under_graph,
    displacement,
    final_velocity,
    final_velocity_from_displacement,
)


def test_final_velocity_examples():
    assert final_velocity(0, 2, 10) == 20
    assert final_velocity(5, 3, 4) == 17
    assert final_velocity(20, -2, 5) == 10
    assert final_velocity(10, -2, 5) == 0
    assert final_velocity(10, 5, 0) == 10
    assert final_velocity(2.5, 1.5, 3.2) == pytest.approx(7.3)


def test_displacement_examples():
    assert displacement(0, 2, 10) == 100
    assert displacement(5, 2, 10) == 150
    assert displacement(20, -2, 5) == 75
    assert displacement(-10, -2, 5) == -75
    assert displacement(30, -5, 6) == 90
    assert displacement(20, -9.8, 2) == pytest.approx(20.4)


def test_area_under_graph_examples():
    assert area_under_graph(0, 20, 10) == 100
    assert area_under_graph(5, 15, 10) == 100
    assert area_under_graph(10, 10, 5) == 50
    assert area_under_graph(-10, -5, 3) == -22.5
    assert area_under_graph(10, 20, 0) == 0


def test_area_matches_displacement_for_linear_velocity():
    rng = np.random.default_rng(7)
    for u, a, t in rng.uniform(-50.0, 50.0, size=(500, 3)):
        t = abs(t)
        v = final_velocity(u, a, t)
        scale = abs(u * t) + abs(a) * t * t + 1.0
        assert area_under_graph(u, v, t) == pytest.approx(displacement(u, a, t), abs=1e-9 * scale)


def test_final_velocity_from_displacement():
    assert final_velocity_from_displacement(0, 2, 100) == 20
    assert final_velocity_from_displacement(10, 2, 100) == pytest.approx(22.36, abs=0.01)
    assert final_velocity_from_displacement(20, -2, 50) == pytest.approx(14.14, abs=0.01)
    assert final_velocity_from_displacement(10, 5, 0) == 10


def test_final_velocity_from_displacement_unreachable_target_is_zero():
    # v² = 100 - 400 < 0: the body stops before covering 20 m
    assert final_velocity_from_displacement(10, -10, 20) == 0
    assert final_velocity_from_displacement(20, -2, 100) == 0
    assert final_velocity_from_displacement(math.nan, 1, 1) == 0


def test_non_finite_values_propagate():
    assert final_velocity(math.inf, 1, 1) == math.inf
    assert math.isnan(final_velocity(math.nan, 1, 1))
    assert displacement(math.inf, 1, 1) == math.inf
    assert math.isnan(displacement(math.nan, 1, 1))


def test_area_breakdown_shapes():
    triangle = area_breakdown(0, 20, 10)
    assert triangle.shape == "triangle"
    assert triangle.total_area == 100

    rectangle = area_breakdown(15, 15, 10)
    assert rectangle.shape == "rectangle"
    assert rectangle.triangle_area == 0
    assert rectangle.total_area == 150

    trapezoid = area_breakdown(5, 25, 10)
    assert trapezoid.shape == "trapezoid"
    assert trapezoid.rectangle_area == 50
    assert trapezoid.triangle_area == 100
    assert trapezoid.rectangle_area + trapezoid.triangle_area == trapezoid.total_area
