"""
Streaming bunching tests
Run segmentation, precision count and buffer handling
"""

import numpy as np
import pytest

from sensor_projection import BunchClusterer, BunchStatus, DataPlace
from sensor_projection.types import NO_RESULT_ACCUMULATING

FIRST, MIDDLE, LAST = DataPlace.FIRST, DataPlace.MIDDLE, DataPlace.LAST


@pytest.fixture
def clusterer():
    return BunchClusterer((2.0, 2.0), eps=0.05, precision_count=3)


def feed(clusterer, points, places):
    return [clusterer.push(np.array(p), place) for p, place in zip(points, places)]


def test_initial_state_is_empty(clusterer):
    assert clusterer.buffer == []
    assert clusterer.prev_point is None


def test_single_sweep_emits_once_at_last(clusterer):
    points = [(0.10, 0.10), (0.12, 0.10), (0.11, 0.11), (0.11, 0.09), (0.11, 0.10)]
    results = feed(clusterer, points, [FIRST, MIDDLE, MIDDLE, MIDDLE, LAST])

    assert [r.point is None for r in results] == [True, True, True, True, False]
    assert results[-1].status is BunchStatus.EMITTED
    np.testing.assert_allclose(results[-1].point, np.mean(points, axis=0))
    assert clusterer.buffer == []


def test_last_point_is_not_part_of_the_run(clusterer):
    points = [(0.10, 0.10), (0.11, 0.10), (0.12, 0.10), (0.13, 0.10)]
    results = feed(clusterer, points + [(0.50, 0.50)], [FIRST, MIDDLE, MIDDLE, MIDDLE, LAST])

    np.testing.assert_allclose(results[-1].point, np.mean(points, axis=0))
    assert results[-1].num_points == 4


def test_short_run_is_discarded_and_cleared(clusterer):
    results = feed(clusterer, [(0.0, 0.0), (0.01, 0.0)], [FIRST, MIDDLE])
    assert all(r.status is BunchStatus.ACCUMULATING for r in results)

    gap = clusterer.push(np.array([0.5, 0.0]), MIDDLE)
    assert gap.status is BunchStatus.DISCARDED
    assert gap.point is None
    assert len(clusterer.buffer) == 1

    # Next run starts from the gap point alone
    results = feed(clusterer, [(0.51, 0.0), (0.52, 0.0), (0.9, 0.9)], [MIDDLE, MIDDLE, MIDDLE])
    assert results[-1].status is BunchStatus.EMITTED
    np.testing.assert_allclose(results[-1].point, [0.51, 0.0])


def test_gap_flushes_previous_run(clusterer):
    run = [(0.20, 0.30), (0.21, 0.31), (0.22, 0.32)]
    feed(clusterer, run, [FIRST, MIDDLE, MIDDLE])

    result = clusterer.push(np.array([0.60, 0.32]), MIDDLE)

    assert result.status is BunchStatus.EMITTED
    np.testing.assert_allclose(result.point, np.mean(run, axis=0))
    assert len(clusterer.buffer) == 1
    np.testing.assert_allclose(clusterer.buffer[0], [0.60, 0.32])
    np.testing.assert_allclose(clusterer.prev_point, [0.60, 0.32])


def test_gap_on_y_axis_only(clusterer):
    feed(clusterer, [(0.0, 0.0), (0.0, 0.01), (0.0, 0.02)], [FIRST, MIDDLE, MIDDLE])
    result = clusterer.push(np.array([0.0, 0.2]), MIDDLE)
    assert result.emitted


def test_gap_equal_to_eps_keeps_run():
    clusterer = BunchClusterer((4.0, 4.0), eps=0.5, precision_count=1)
    clusterer.push(np.array([0.0, 0.0]), FIRST)
    result = clusterer.push(np.array([0.5, 0.5]), MIDDLE)
    assert result.status is BunchStatus.ACCUMULATING
    assert len(clusterer.buffer) == 2


@pytest.mark.parametrize("place", [FIRST, MIDDLE, LAST])
def test_out_of_area_point_flushes_regardless_of_place(clusterer, place):
    run = [(0.5, 0.5), (0.51, 0.5), (0.52, 0.5)]
    feed(clusterer, run, [FIRST, MIDDLE, MIDDLE])

    result = clusterer.push(np.array([1.5, 0.5]), place)

    assert result.status is BunchStatus.EMITTED
    np.testing.assert_allclose(result.point, np.mean(run, axis=0))
    assert clusterer.buffer == []
    np.testing.assert_allclose(clusterer.prev_point, [1.5, 0.5])


def test_out_of_area_with_empty_buffer(clusterer):
    result = clusterer.push(np.array([3.0, 3.0]), MIDDLE)
    assert result.point is None
    assert clusterer.buffer == []
    np.testing.assert_allclose(clusterer.prev_point, [3.0, 3.0])


def test_out_of_area_short_run_is_discarded(clusterer):
    feed(clusterer, [(0.0, 0.0), (0.01, 0.0)], [FIRST, MIDDLE])
    result = clusterer.push(np.array([0.0, -1.2]), MIDDLE)
    assert result.status is BunchStatus.DISCARDED
    assert clusterer.buffer == []


def test_first_drops_unfinished_run(clusterer):
    feed(clusterer, [(0.0, 0.0), (0.01, 0.0), (0.02, 0.0), (0.03, 0.0)],
         [FIRST, MIDDLE, MIDDLE, MIDDLE])

    result = clusterer.push(np.array([-0.5, -0.5]), FIRST)

    assert result.status is BunchStatus.ACCUMULATING
    assert len(clusterer.buffer) == 1
    np.testing.assert_allclose(clusterer.buffer[0], [-0.5, -0.5])


def test_last_with_empty_buffer(clusterer):
    clusterer.push(np.array([5.0, 5.0]), MIDDLE)
    result = clusterer.push(np.array([0.1, 0.1]), LAST)
    assert result.point is None
    # Last in-area sample leaves the previous point as it was
    np.testing.assert_allclose(clusterer.prev_point, [5.0, 5.0])


def test_precision_count_one_emits_single_points():
    clusterer = BunchClusterer((2.0, 2.0), eps=0.05, precision_count=1)
    clusterer.push(np.array([0.3, 0.4]), FIRST)
    result = clusterer.push(np.array([0.3, 0.4]), LAST)
    np.testing.assert_allclose(result.point, [0.3, 0.4])


def test_place_accepts_tags(clusterer):
    clusterer.push([0.0, 0.0], 'first')
    clusterer.push([0.0, 0.01], 'middle')
    clusterer.push([0.0, 0.02], 'middle')
    result = clusterer.push([0.0, 0.03], 'last')
    np.testing.assert_allclose(result.point, [0.0, 0.01])


def test_reset_clears_state(clusterer):
    feed(clusterer, [(0.0, 0.0), (0.01, 0.0)], [FIRST, MIDDLE])
    clusterer.reset()
    assert clusterer.buffer == []
    assert clusterer.prev_point is None


def test_middle_without_first_starts_run(clusterer):
    results = feed(clusterer, [(0.0, 0.0), (0.01, 0.0), (0.02, 0.0), (0.03, 0.0)],
                   [MIDDLE, MIDDLE, MIDDLE, LAST])
    np.testing.assert_allclose(results[-1].point, [0.01, 0.0])


def test_open_run_steps_report_nothing(clusterer):
    first = clusterer.push(np.array([0.0, 0.0]), FIRST)
    middle = clusterer.push(np.array([0.01, 0.0]), MIDDLE)
    for result in (first, middle):
        assert result is NO_RESULT_ACCUMULATING
        assert result.point is None and not result.emitted
