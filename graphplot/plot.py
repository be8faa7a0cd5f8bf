"""Graph state, sampling of the plotted function and layout of axes and crosshair."""

from __future__ import annotations

import math
import sys
from collections.abc import Collection, Sequence
from dataclasses import dataclass
from typing import Optional

from .expression import ExpressionError, Parser
from .textinput import Key

WIDTH = 600
HEIGHT = 600
ORIGIN_X = 300

PHASE_STEP = 5
AMPLITUDE_STEP = 1.5
Y_STEP = 2

GraphPoint = tuple[float, float]
Label = tuple[str, int, int]


@dataclass
class ViewState:
    """Horizontal shift, zoom, vertical offset and crosshair of the graph view."""

    phase: int = 0
    amplitude: float = 2.0
    y_position: int = HEIGHT // 2
    point: Optional[tuple[int, int]] = None

    def apply_keys(
        self,
        held: Collection[int],
        pressed: Collection[int] = (),
        mouse: Sequence[float] = (0, 0),
    ) -> bool:
        """Apply one frame of keyboard input; return True if the graph must be redrawn."""
        changed = False
        if Key.LEFT in held:
            self.phase += PHASE_STEP
            changed = True
        if Key.RIGHT in held:
            self.phase -= PHASE_STEP
            changed = True
        if Key.Z in held:
            self.amplitude += AMPLITUDE_STEP
            changed = True
        if Key.X in held and self.amplitude > 0:
            self.amplitude -= AMPLITUDE_STEP
            changed = True
        if Key.UP in held:
            self.y_position += Y_STEP
            changed = True
        if Key.DOWN in held:
            self.y_position -= Y_STEP
            changed = True
        if Key.SPACE in pressed:
            self.point = (int(mouse[0]), int(mouse[1]))
        return changed


def compute_graph_points(
    parser: Parser, phase: int, amplitude: float, y_position: int
) -> list[GraphPoint]:
    """Sample the parser's expression in ``X`` once per screen column.

    Points that fail to evaluate, or evaluate to a non-finite value, are
    drawn on the x axis.
    """
    if amplitude == 0:
        raise ValueError("amplitude must be non-zero")
    points: list[GraphPoint] = []
    reported = False
    for x_pos in range(WIDTH):
        graph_x = (x_pos - ORIGIN_X + phase) / amplitude
        try:
            value = parser.evaluate({"X": graph_x}) * amplitude
        except ExpressionError as exc:
            if not reported:
                print(f"Parser error: {exc}", file=sys.stderr)
                reported = True
            value = 0.0
        if not math.isfinite(value):
            value = 0.0
        points.append((float(x_pos), float(y_position - int(value))))
    return points


def format_label(value: float) -> str:
    """Format an axis value with one decimal place."""
    return f"{value:.1f}"


def axis_labels(
    y_position: int, num_labels: int = 10, amplitude: float = 2.0, phase: int = 0
) -> tuple[list[Label], list[Label]]:
    """Return the x-axis and y-axis labels as ``(text, x, y)`` screen positions.

    The y label at the middle index is left out so it does not overlap the origin.
    """
    x_spacing = WIDTH / num_labels
    y_spacing = HEIGHT / num_labels
    x_labels: list[Label] = []
    y_labels: list[Label] = []
    for i in range(num_labels + 1):
        x_pos = i * x_spacing
        y_pos = i * y_spacing
        x_value = (x_pos - ORIGIN_X + phase) / amplitude
        x_labels.append((format_label(x_value), int(x_pos), y_position + 5))
        if i != num_labels // 2:
            y_value = (y_position - y_pos) / amplitude
            y_labels.append((format_label(y_value), ORIGIN_X + 5 - phase, int(y_pos - 5)))
    return x_labels, y_labels


def crosshair_pixels(
    point: Optional[Sequence[float]], y_position: int, phase: int
) -> list[tuple[int, int]]:
    """Return the dotted guide pixels from both axes to the crosshair point."""
    if point is None:
        return []
    px, py = int(point[0]), int(point[1])
    axis_x = ORIGIN_X - phase
    h_step = 2 if px >= axis_x else -2
    v_step = 2 if py < y_position else -2
    horizontal = [(x, py) for x in range(axis_x, px, h_step)]
    vertical = [(px, y) for y in range(py, y_position, v_step)]
    return horizontal + vertical