"""
Unit tests for chart geometry - axis scaling, bars and gap-aware polylines
"""

import pytest
from datetime import datetime
from hypothesis import given, strategies as st

from schemas.canonical import CANONICAL_PLATFORMS, Platform
from services.aggregator import matched_day_series
from services.chart_geometry import (
    bar_height, build_chart, contiguous_runs, count_axis, likes_axis,
    segment_series, x_percent, y_percent,
)


class TestAxes:

    @pytest.mark.parametrize("observed,step,max_value", [
        (0, 1, 5),
        (1, 1, 5),
        (5, 1, 5),
        (6, 2, 10),
        (12, 3, 15),
    ])
    def test_count_axis(self, observed, step, max_value):
        axis = count_axis(observed)

        assert axis.step == step
        assert axis.max_value == max_value

    @pytest.mark.parametrize("observed,step,max_value", [
        (0, 10, 50),
        (49, 10, 50),
        (51, 20, 100),
        (120, 30, 150),
        (501, 110, 550),
    ])
    def test_likes_axis_rounds_to_tens(self, observed, step, max_value):
        axis = likes_axis(observed)

        assert axis.step == step
        assert axis.max_value == max_value

    def test_ticks_run_top_to_bottom(self):
        assert count_axis(12).ticks == [15, 12, 9, 6, 3, 0]

    def test_axis_max_never_below_observed(self):
        for observed in range(0, 300, 7):
            assert count_axis(observed).max_value >= observed
            assert likes_axis(observed).max_value >= observed


class TestCoordinates:

    def test_x_is_cell_centered(self):
        assert x_percent(0, 4) == 12.5
        assert x_percent(3, 4) == 87.5

    def test_y_is_top_origin(self):
        assert y_percent(0, 50) == 100
        assert y_percent(50, 50) == 0
        assert y_percent(25, 50) == 50

    def test_bar_height_minimum_for_nonzero(self):
        """
        Business Critical: Tiny non-zero values must stay visible
        """
        assert bar_height(0, 100) == 0.0
        assert bar_height(1, 100) == 3.0
        assert bar_height(50, 100) == 50.0
        assert bar_height(1, 100, min_percent=5.0) == 5.0


class TestSegments:

    def test_contiguous_runs(self):
        assert contiguous_runs([0, 3, 4, 6]) == [[0], [3, 4], [6]]
        assert contiguous_runs([]) == []

    def test_gaps_split_polyline(self):
        """
        Business Critical: Zero days must break the line, never bridge it
        """
        segments = segment_series([5, 0, 0, 3, 4], 50)

        assert [len(s.points) for s in segments] == [1, 2]
        assert segments[0].is_marker
        assert not segments[1].is_marker
        assert [p.index for p in segments[1].points] == [3, 4]
        assert segments[1].points[0].value == 3
        assert segments[1].points[0].label == "3"
        assert segments[0].points[0].x == pytest.approx(10.0)
        assert segments[0].points[0].y == pytest.approx(90.0)

    def test_all_zero_series_has_no_segments(self):
        assert segment_series([0, 0, 0], 50) == []


class TestBuildChart:

    def test_empty_series_has_no_data(self):
        chart = build_chart([])

        assert chart.has_data is False
        assert chart.buckets == []
        assert chart.bar_axis.max_value == 5
        assert chart.line_axis.max_value == 50

    def test_bars_and_lines_per_platform(self, post_factory):
        posts = [
            post_factory(Platform.YOUTUBE, post_date=datetime(2024, 3, 13), likes=40),
            post_factory(Platform.YOUTUBE, post_date=datetime(2024, 3, 13), likes=20),
            post_factory(Platform.YOUTUBE, post_date=datetime(2024, 3, 13), likes=0),
            post_factory(Platform.TWITTER, post_date=datetime(2024, 3, 14), likes=5),
        ]
        buckets = matched_day_series(posts)

        chart = build_chart(buckets)

        assert chart.has_data is True
        assert [b.label for b in chart.buckets] == ["3/13", "3/14"]
        first = {bar.platform: bar for bar in chart.buckets[0].bars}
        assert [bar.platform for bar in chart.buckets[0].bars] == list(CANONICAL_PLATFORMS)
        assert first[Platform.YOUTUBE].value == 3
        assert first[Platform.YOUTUBE].title == "YouTube: 3 posts"
        assert first[Platform.YOUTUBE].height_percent == pytest.approx(60.0)
        assert first[Platform.INSTAGRAM].is_placeholder
        assert first[Platform.INSTAGRAM].height_percent == 0.0

        lines = {line.platform: line for line in chart.lines}
        assert len(lines[Platform.YOUTUBE].segments) == 1
        assert lines[Platform.YOUTUBE].segments[0].points[0].value == 60
        assert lines[Platform.INSTAGRAM].segments == []
        assert chart.line_axis.max_value == 100


@given(st.lists(st.integers(min_value=0, max_value=500), max_size=30))
def test_segments_never_bridge_zero_hypothesis(values):
    """
    Business Critical: Every non-zero point lands in exactly one segment of consecutive indices
    """
    segments = segment_series(values, likes_axis(max(values, default=0)).max_value)

    indices = [p.index for s in segments for p in s.points]
    assert indices == [i for i, v in enumerate(values) if v > 0]
    for segment in segments:
        run = [p.index for p in segment.points]
        assert run == list(range(run[0], run[0] + len(run)))
        assert all(values[i] > 0 for i in run)
    for first, second in zip(segments, segments[1:]):
        assert second.points[0].index - first.points[-1].index > 1
