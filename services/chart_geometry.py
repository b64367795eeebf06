"""
Chart geometry engine: converts time-series buckets into percentage-space
bar heights, axis ticks and gap-aware polylines for a combination chart.

The bar (post count) and line (likes) axes are scaled independently.
"""

import math
from typing import Iterable, List, Sequence

from schemas.canonical import CANONICAL_PLATFORMS, Platform
from schemas.responses import (
    AxisScale, BarGeometry, BucketBars, ChartGeometry, PlatformLine,
    PolylinePoint, PolylineSegment, TimeSeriesBucket,
)

AXIS_DIVISIONS = 5
LINE_STEP_ROUNDING = 10


def _axis(step: int) -> AxisScale:
    return AxisScale(
        step=step,
        max_value=step * AXIS_DIVISIONS,
        ticks=[step * i for i in range(AXIS_DIVISIONS, -1, -1)],
    )


def count_axis(observed_max: int) -> AxisScale:
    """Left axis: step = max(1, ceil(max / 5))"""
    observed_max = max(observed_max, 1)
    return _axis(max(1, math.ceil(observed_max / AXIS_DIVISIONS)))


def likes_axis(observed_max: int) -> AxisScale:
    """Right axis: step rounded up to a multiple of 10, never below 10"""
    observed_max = max(observed_max, 1)
    raw_step = math.ceil(observed_max / AXIS_DIVISIONS)
    step = math.ceil(raw_step / LINE_STEP_ROUNDING) * LINE_STEP_ROUNDING
    return _axis(max(LINE_STEP_ROUNDING, step))


def x_percent(index: int, total: int) -> float:
    """Cell-centered x coordinate"""
    return (index + 0.5) / total * 100


def y_percent(value: int, axis_max: int) -> float:
    """Top-origin y coordinate"""
    return 100 - (value / axis_max) * 100


def bar_height(value: int, axis_max: int, min_percent: float = 3.0) -> float:
    if value <= 0:
        return 0.0
    return max(value / axis_max * 100, min_percent)


def contiguous_runs(indices: Iterable[int]) -> List[List[int]]:
    """Split ascending indices into maximal runs of consecutive values"""
    runs: List[List[int]] = []
    for index in indices:
        if runs and index == runs[-1][-1] + 1:
            runs[-1].append(index)
        else:
            runs.append([index])
    return runs


def segment_series(values: Sequence[int], axis_max: int) -> List[PolylineSegment]:
    """One polyline per run of non-zero values; gaps are never bridged"""
    total = len(values)
    nonzero = [i for i, value in enumerate(values) if value > 0]
    return [
        PolylineSegment(points=[
            PolylinePoint(
                index=i,
                x=x_percent(i, total),
                y=y_percent(values[i], axis_max),
                value=values[i],
                label=str(values[i]),
            )
            for i in run
        ])
        for run in contiguous_runs(nonzero)
    ]


def build_chart(
    buckets: Sequence[TimeSeriesBucket],
    min_bar_percent: float = 3.0,
    platforms: Sequence[Platform] = CANONICAL_PLATFORMS,
) -> ChartGeometry:
    """Combination chart: per-platform count bars plus per-platform likes lines"""
    max_count = max((b.tally(p).count for b in buckets for p in platforms), default=0)
    max_likes = max((b.tally(p).likes for b in buckets for p in platforms), default=0)
    bar_axis = count_axis(max_count)
    line_axis = likes_axis(max_likes)

    total = len(buckets)
    bucket_bars = []
    for index, bucket in enumerate(buckets):
        bars = []
        for platform in platforms:
            count = bucket.tally(platform).count
            bars.append(BarGeometry(
                platform=platform,
                value=count,
                height_percent=bar_height(count, bar_axis.max_value, min_bar_percent),
                is_placeholder=count == 0,
                title=f"{platform.value}: {count} posts",
            ))
        bucket_bars.append(BucketBars(
            key=bucket.key,
            label=bucket.label,
            x_percent=x_percent(index, total),
            bars=bars,
        ))

    lines = [
        PlatformLine(
            platform=platform,
            segments=segment_series([b.tally(platform).likes for b in buckets], line_axis.max_value),
        )
        for platform in platforms
    ]

    has_data = any(b.tally(p).count > 0 for b in buckets for p in platforms)
    return ChartGeometry(
        has_data=has_data,
        bar_axis=bar_axis,
        line_axis=line_axis,
        buckets=bucket_bars,
        lines=lines,
    )
