"""
Half-court diagram used as the backdrop for shot charts.

Coordinates are in feet with the center of the basket at (0, 0), x running
along the baseline and y running toward half court. Everything here is built
from fixed constants, so every call returns the same lines.
"""

import numpy as np
from dataclasses import dataclass
from typing import Tuple

# court dimensions (feet)
HALF_WIDTH = 25.0
BASELINE_Y = -4.75
HALF_COURT_Y = 42.25
BASKET_RADIUS = 0.75
BACKBOARD_HALF_WIDTH = 3.0
BACKBOARD_Y = -0.75
LANE_OUTER_HALF_WIDTH = 8.0
LANE_INNER_HALF_WIDTH = 6.0
FREE_THROW_Y = 14.25
FREE_THROW_RADIUS = 6.0
RESTRICTED_RADIUS = 4.0
THREE_RADIUS = 23.75
THREE_CORNER_X = 22.0
THREE_CORNER_TOP_Y = 9.25
THREE_ARC_DEGREES = (22.0, 158.0)
CENTER_OUTER_RADIUS = 6.0
CENTER_INNER_RADIUS = 2.0

# sampling resolution for curved lines
ARC_POINTS = 500
CIRCLE_POINTS = 100


@dataclass(frozen=True, eq=False)
class CourtLine:
    name: str
    x: np.ndarray
    y: np.ndarray


# this function samples points along a circle between two angles (degrees)
def _arc(name, center, radius, start_deg, end_deg, points):
    theta = np.radians(np.linspace(start_deg, end_deg, points))
    x = center[0] + radius * np.cos(theta)
    y = center[1] + radius * np.sin(theta)
    return CourtLine(name, x, y)


def _segment(name, start, end):
    return CourtLine(name, np.array([start[0], end[0]], dtype=float), np.array([start[1], end[1]], dtype=float))


# this function draws a rectangle from the baseline up to the free throw line as a closed polyline
def _lane(name, half_width):
    x = np.array([-half_width, -half_width, half_width, half_width, -half_width], dtype=float)
    y = np.array([BASELINE_Y, FREE_THROW_Y, FREE_THROW_Y, BASELINE_Y, BASELINE_Y], dtype=float)
    return CourtLine(name, x, y)


def court_lines() -> Tuple[CourtLine, ...]:
    """Return every line of the half court as (x, y) point arrays."""
    start_deg, end_deg = THREE_ARC_DEGREES
    return (
        # boundary
        _segment('baseline', (-HALF_WIDTH, BASELINE_Y), (HALF_WIDTH, BASELINE_Y)),
        _segment('left_sideline', (-HALF_WIDTH, BASELINE_Y), (-HALF_WIDTH, HALF_COURT_Y)),
        _segment('right_sideline', (HALF_WIDTH, BASELINE_Y), (HALF_WIDTH, HALF_COURT_Y)),
        _segment('half_court', (-HALF_WIDTH, HALF_COURT_Y), (HALF_WIDTH, HALF_COURT_Y)),
        # basket area
        _segment('backboard', (-BACKBOARD_HALF_WIDTH, BACKBOARD_Y), (BACKBOARD_HALF_WIDTH, BACKBOARD_Y)),
        _arc('basket', (0.0, 0.0), BASKET_RADIUS, 0.0, 360.0, CIRCLE_POINTS),
        _arc('restricted_area', (0.0, 0.0), RESTRICTED_RADIUS, 0.0, 180.0, CIRCLE_POINTS),
        # paint
        _lane('lane_outer', LANE_OUTER_HALF_WIDTH),
        _lane('lane_inner', LANE_INNER_HALF_WIDTH),
        _arc('free_throw_circle', (0.0, FREE_THROW_Y), FREE_THROW_RADIUS, 0.0, 360.0, CIRCLE_POINTS),
        # three point line
        _segment('left_corner_three', (-THREE_CORNER_X, BASELINE_Y), (-THREE_CORNER_X, THREE_CORNER_TOP_Y)),
        _segment('right_corner_three', (THREE_CORNER_X, BASELINE_Y), (THREE_CORNER_X, THREE_CORNER_TOP_Y)),
        _arc('three_point_arc', (0.0, 0.0), THREE_RADIUS, start_deg, end_deg, ARC_POINTS),
        # center court, only the half inside this end
        _arc('center_outer', (0.0, HALF_COURT_Y), CENTER_OUTER_RADIUS, 180.0, 360.0, CIRCLE_POINTS),
        _arc('center_inner', (0.0, HALF_COURT_Y), CENTER_INNER_RADIUS, 180.0, 360.0, CIRCLE_POINTS),
    )


def court_limits():
    """(xmin, xmax), (ymin, ymax) that frame the whole half court."""
    return (-HALF_WIDTH, HALF_WIDTH), (BASELINE_Y, HALF_COURT_Y)
