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

from py_mecanum.function_generators import *
from py_mecanum.defs import *
from py_mecanum.base_classes import *
import logging
from typing import Optional


class AngleSelector:
    """Holds the selected angle and moves it with horizontal pointer drags.

    Dragging over track_width pixels turns the angle by a full 2 PI. The angle is
    clamped to [0, 2 PI], drags past either end do not wrap around.

    Parameters
    ----------
    track_width : float, optional
        Drag distance of a full turn in pixels. Default is GRAPH_WIDTH.
    region : RectData, optional
        Interactive region. Drags whose current position is outside of it are
        ignored. Default is None, meaning no dead zone.

    Examples
    --------
    >>> selector = AngleSelector(track_width=640)
    >>> selector.apply_drag(DragGestureData(100, 0, 420, 0))
    3.141592653589793
    >>> selector.apply_drag(DragGestureData(420, 0, -2000, 0))
    0.0
    """

    def __init__(
        self, track_width: float = GRAPH_WIDTH, region: Optional[RectData] = None
    ):
        check_positive(track_width=track_width)
        self.track_width = track_width
        self.region = region
        self._angle = 0.0

    @property
    def angle(self):
        return self._angle

    def current_angle(self):
        return self._angle

    def reset(self):
        self._angle = 0.0

    def apply_drag(self, gesture: DragGestureData, track_width=None):
        """Apply one drag step and return the new angle.

        Parameters
        ----------
        gesture : DragGestureData
            Previous and current pointer position.
        track_width : float, optional
            Overrides the drag distance of a full turn for this step.
        """
        if track_width is None:
            track_width = self.track_width
        else:
            check_positive(track_width=track_width)

        if self.region is not None and not self.region.contains(
            gesture.current_x, gesture.current_y
        ):
            logging.debug(
                f"Drag at ({gesture.current_x}, {gesture.current_y}) "
                f"ignored outside of {self.region}"
            )
            return self._angle

        angle = self._angle + gesture.dx / track_width * TWO_PI
        self._angle = float(min(max(angle, 0.0), TWO_PI))
        return self._angle


def generate_roller_segments(
    footprint: WheelFootprintParam, spacing: float, rotation_offset: float = 0
):
    """
    Generate the diagonal roller grooves of a mecanum wheel.

    Grooves run at 45 degrees, spacing apart vertically, and are clipped to the
    footprint rectangle. Changing the rotation offset scrolls the pattern
    vertically; only the offset modulo spacing affects the result.

    Parameters
    ----------
    footprint : WheelFootprintParam
        Wheel outline, centered on the local origin.
    spacing : float
        Vertical distance between grooves, must be positive.
    rotation_offset : float
        Accumulated spin of the wheel, any sign or magnitude.

    Returns
    -------
    list of RollerSegmentData
        Grooves ordered from the top (negative y) downwards.

    Examples
    --------
    >>> segments = generate_roller_segments(WheelFootprintParam(36, 96), 27)
    >>> len(segments)
    4
    >>> segments[0]
    RollerSegmentData(x0=-18.0, y0=-21.0, x1=9.0, y1=-48.0)
    """
    check_positive(spacing=spacing)
    half_width = footprint.width / 2
    half_height = footprint.height / 2

    diag_y = -half_height - positive_mod(rotation_offset, spacing) + spacing
    segments = []
    while diag_y < half_height + footprint.width:
        # lower end leaves through the bottom edge
        end_offset = 0.0
        if diag_y > half_height:
            end_offset = diag_y - half_height
        # upper end leaves through the top edge
        start_offset = 0.0
        if diag_y - footprint.width < -half_height:
            start_offset = diag_y - footprint.width + half_height
        segments.append(
            RollerSegmentData(
                x0=-half_width + end_offset,
                y0=diag_y - end_offset,
                x1=half_width + start_offset,
                y1=diag_y - footprint.width - start_offset,
            )
        )
        diag_y += spacing
    return segments


class RollerPatternGenerator:
    """Roller pattern of one wheel, regenerated for any rotation offset.

    Parameters
    ----------
    footprint : WheelFootprintParam, optional
        Wheel outline. Default is a WHEEL_WIDTH x WHEEL_HEIGHT rectangle.
    spacing : float, optional
        Vertical distance between grooves. Default is ROLLER_SPACING.
    """

    def __init__(
        self, footprint: Optional[WheelFootprintParam] = None, spacing=ROLLER_SPACING
    ):
        check_positive(spacing=spacing)
        self.footprint = footprint if footprint is not None else WheelFootprintParam()
        self.spacing = spacing

    def generate(self, rotation_offset=0):
        return generate_roller_segments(self.footprint, self.spacing, rotation_offset)

    def __call__(self, rotation_offset=0):
        return self.generate(rotation_offset)


class SpinDriver:
    """Constant velocity spin source for animating the wheel.

    The accumulated spin grows without bound, the roller pattern only uses it
    modulo the roller spacing.

    Parameters
    ----------
    velocity : float, optional
        Spin added per second, in the same unit as the rotation offset.
    """

    def __init__(self, velocity=0.0):
        self.velocity = velocity
        self.spin = 0.0

    def advance(self, dt):
        self.spin += self.velocity * dt
        return self.spin

    def reset(self):
        self.spin = 0.0
