# Copyright 2024 Gergely Bencsik
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#     http://www.apache.org/licenses/LICENSE-2.0
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import dataclasses
from abc import ABC, abstractmethod
from typing import NamedTuple, Optional
import numpy as np
from py_mecanum.defs import *

# If a dataclass tends to be user input, it should be named param.
# If a dataclass tends to be generated or manipulated by functions,
# it should be named data.


class InvalidParameterError(ValueError):
    """Raised for non-positive sizes, spacings and sample counts."""


def check_positive(**kwargs):
    """Raise InvalidParameterError if any of the keyword values is not > 0."""
    for name, value in kwargs.items():
        if not value > 0:
            raise InvalidParameterError(f"{name} must be positive, got {value}")


@dataclasses.dataclass(frozen=True)
class WheelFootprintParam:
    """Rectangular outline of a wheel seen from above, centered on the local origin.

    Attributes
    ----------
    width : float
        Extent along X.
    height : float
        Extent along Y, the rolling direction.
    """

    width: float = WHEEL_WIDTH
    height: float = WHEEL_HEIGHT

    def __post_init__(self):
        check_positive(width=self.width, height=self.height)


@dataclasses.dataclass(frozen=True)
class RollerSegmentData:
    """One roller groove as a line segment in wheel-local coordinates."""

    x0: float
    y0: float
    x1: float
    y1: float

    @property
    def start(self):
        return np.array((self.x0, self.y0, 0.0))

    @property
    def end(self):
        return np.array((self.x1, self.y1, 0.0))

    @property
    def length(self):
        return float(np.linalg.norm(self.end - self.start))

    def translated(self, dx, dy):
        """Return the same segment shifted by (dx, dy)."""
        return RollerSegmentData(self.x0 + dx, self.y0 + dy, self.x1 + dx, self.y1 + dy)


@dataclasses.dataclass(frozen=True)
class PhaseSampleData:
    """Values of the two phase-shifted signals at one angle.

    Attributes
    ----------
    y1 : float
        sin(angle - PI/4)
    y2 : float
        sin(angle + PI/4)
    """

    y1: float
    y2: float


@dataclasses.dataclass(frozen=True)
class DragGestureData:
    """Previous and current pointer position of a drag, canvas pixels."""

    previous_x: float
    previous_y: float
    current_x: float
    current_y: float

    @property
    def dx(self):
        return self.current_x - self.previous_x


@dataclasses.dataclass(frozen=True)
class RectData:
    """Axis aligned rectangle by its top-left corner and size."""

    x: float
    y: float
    width: float
    height: float

    def contains(self, x, y) -> bool:
        """Inclusive point test, the border belongs to the rectangle."""
        return (
            self.x <= x <= self.x + self.width and self.y <= y <= self.y + self.height
        )


@dataclasses.dataclass(frozen=True)
class GridLabelData:
    """Reduced fraction of PI used for grid labels.

    A numerator of None stands for an implicit 1, e.g. PI/4.
    """

    numerator: Optional[int]
    denominator: int


@dataclasses.dataclass(frozen=True)
class DiagramParam:
    """Layout and styling values of the wheel diagram.

    Attributes
    ----------
    wheel_width : float
        Width of the wheel schematic.
    wheel_height : float
        Height of the wheel schematic, also its diameter for the rotation offset.
    roller_spacing : float
        Vertical distance between roller grooves.
    ellipse_margin : float
        Empty space around the dial.
    dial_box_size : float
        Size of the square reserved for the dial including margins.
    graph_width : int
        Width of the reference plot, also the drag distance of a full turn.
    graph_height : int
        Height of the reference plot.
    canvas_height : int
        Height of the whole diagram.
    grid_divisions : int
        Grid lines are placed every PI / grid_divisions.
    title : str
        Text shown at the top of the diagram, empty string to hide it.
    """

    wheel_width: float = WHEEL_WIDTH
    wheel_height: float = WHEEL_HEIGHT
    roller_spacing: float = ROLLER_SPACING
    ellipse_margin: float = ELLIPSE_MARGIN
    dial_box_size: float = DIAL_BOX_SIZE
    graph_width: int = GRAPH_WIDTH
    graph_height: int = GRAPH_HEIGHT
    canvas_height: int = CANVAS_HEIGHT
    grid_divisions: int = GRID_DIVISIONS
    title: str = TITLE

    def __post_init__(self):
        check_positive(
            roller_spacing=self.roller_spacing,
            graph_width=self.graph_width,
            graph_height=self.graph_height,
            canvas_height=self.canvas_height,
            grid_divisions=self.grid_divisions,
            ellipse_size=self.ellipse_size,
        )

    @property
    def ellipse_size(self):
        return self.dial_box_size - 2 * self.ellipse_margin

    @property
    def canvas_width(self):
        return self.ellipse_size + 2 * self.ellipse_margin + self.graph_width

    @property
    def graph_x(self):
        """Left edge of the reference plot on the canvas."""
        return self.canvas_width - self.graph_width

    @property
    def dial_center(self):
        return np.array(
            (self.ellipse_size / 2 + self.ellipse_margin, self.canvas_height / 2, 0.0)
        )

    @property
    def canvas_region(self):
        return RectData(0, 0, self.canvas_width, self.canvas_height)

    @property
    def footprint(self):
        return WheelFootprintParam(width=self.wheel_width, height=self.wheel_height)


@dataclasses.dataclass
class FrameData:
    """Everything a renderer needs for one frame, canvas coordinates.

    Attributes
    ----------
    angle : float
        Selected angle in radians.
    marker_x : float
        X position of the angle marker over the reference plot.
    needle_end : np.ndarray
        Tip of the dial needle.
    rotation_offset : float
        Rotation offset used for the roller pattern.
    roller_segments : list of RollerSegmentData
        Roller grooves, already moved to the wheel position.
    phase : PhaseSampleData
        Signal values at the selected angle.
    """

    angle: float
    marker_x: float
    needle_end: np.ndarray
    rotation_offset: float
    roller_segments: list
    phase: PhaseSampleData


class Surface(ABC):
    """Drawing target of the diagram.

    Coordinates are pixels with y pointing down, colors are RGB tuples 0..255,
    thickness is in pixels.
    """

    @property
    @abstractmethod
    def size(self):
        """(width, height) of the surface in pixels."""

    @abstractmethod
    def set_background(self, color):
        pass

    @abstractmethod
    def draw_line(self, x0, y0, x1, y1, color, thickness=1):
        pass

    @abstractmethod
    def draw_filled_rect(self, cx, cy, w, h, color, thickness=1):
        pass

    @abstractmethod
    def draw_ellipse(self, cx, cy, w, h, color, thickness=1):
        pass

    @abstractmethod
    def draw_text(self, text, x, y, alignment=ALIGN_CENTER, size=LABEL_TEXT_SIZE):
        pass

    @abstractmethod
    def draw_image(self, image, x, y):
        pass


class DrawCommand(NamedTuple):
    name: str
    args: tuple


class RecordingSurface(Surface):
    """Surface that only records the issued drawing commands.

    Used for testing and as a headless image buffer: a recorded surface can be
    blitted onto another surface with draw_image().
    """

    def __init__(self, width, height):
        self._size = (width, height)
        self.commands = []

    @property
    def size(self):
        return self._size

    def _record(self, name, *args):
        self.commands.append(DrawCommand(name, args))

    def set_background(self, color):
        self._record("background", color)

    def draw_line(self, x0, y0, x1, y1, color, thickness=1):
        self._record("line", x0, y0, x1, y1, color, thickness)

    def draw_filled_rect(self, cx, cy, w, h, color, thickness=1):
        self._record("rect", cx, cy, w, h, color, thickness)

    def draw_ellipse(self, cx, cy, w, h, color, thickness=1):
        self._record("ellipse", cx, cy, w, h, color, thickness)

    def draw_text(self, text, x, y, alignment=ALIGN_CENTER, size=LABEL_TEXT_SIZE):
        self._record("text", text, x, y, alignment, size)

    def draw_image(self, image, x, y):
        self._record("image", image, x, y)

    def of_kind(self, name):
        """Recorded commands with the given name, in drawing order."""
        return [cmd for cmd in self.commands if cmd.name == name]
