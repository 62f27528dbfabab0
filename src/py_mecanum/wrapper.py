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

import time
import logging
from typing import Callable, Optional
from py_mecanum.core import *


class WheelDiagram:
    """Interactive mecanum wheel diagram.

    The diagram has a unit circle dial on the left with a needle at the selected
    angle, and a reference plot of the two wheel signals on the right with a
    marker at the selected angle. A schematic wheel sits in the middle of the
    dial, its rollers scroll as the angle changes.

    Parameters
    ----------
    param : DiagramParam, optional
        Layout and styling values. Default is DiagramParam().
    spin_driver : SpinDriver, optional
        Additional spin source for animating the wheel. Default is a driver with
        zero velocity.

    Methods
    -------
    drag(previous_x, previous_y, current_x, current_y)
        Feed a pointer drag step in canvas pixels.
    frame_data()
        Geometry of the current frame.
    draw_reference_plot(surface)
        Draw the static reference plot.
    draw_frame(surface)
        Draw the whole diagram for the current state.

    Examples
    --------
    >>> diagram = WheelDiagram()
    >>> diagram.drag(400, 200, 560, 200)
    1.5707963267948966
    >>> diagram.frame_data().marker_x
    510.0
    """

    def __init__(
        self,
        param: Optional[DiagramParam] = None,
        spin_driver: Optional[SpinDriver] = None,
    ):
        self.param = param if param is not None else DiagramParam()
        self.selector = AngleSelector(
            track_width=self.param.graph_width, region=self.param.canvas_region
        )
        self.roller_generator = RollerPatternGenerator(
            self.param.footprint, self.param.roller_spacing
        )
        self.spin_driver = spin_driver if spin_driver is not None else SpinDriver()
        self._reference_image = None

    @property
    def angle(self):
        return self.selector.current_angle()

    @property
    def wheel_center(self):
        return self.param.dial_center

    @property
    def rotation_offset(self):
        """Surface travel of the wheel for the selected angle plus external spin."""
        return self.angle * self.param.wheel_height / 2 + self.spin_driver.spin

    def drag(self, previous_x, previous_y, current_x, current_y):
        """Apply a pointer drag step, return the new angle."""
        return self.selector.apply_drag(
            DragGestureData(previous_x, previous_y, current_x, current_y)
        )

    def advance(self, dt):
        """Advance the spin driver by dt seconds."""
        return self.spin_driver.advance(dt)

    def curve_sampler(self):
        """One sample per pixel column of the reference plot."""
        return sample_curve(
            self.param.graph_width, self.param.graph_width, self.param.graph_height
        )

    def frame_data(self) -> FrameData:
        angle = self.angle
        center = self.wheel_center
        rotation_offset = self.rotation_offset
        segments = [
            segment.translated(center[0], center[1])
            for segment in self.roller_generator.generate(rotation_offset)
        ]
        return FrameData(
            angle=angle,
            marker_x=self.param.graph_x + marker_x(angle, self.param.graph_width),
            needle_end=dial_needle_end(
                self.param.dial_center, self.param.ellipse_size / 2, angle
            ),
            rotation_offset=rotation_offset,
            roller_segments=segments,
            phase=phase_signal_pair(angle),
        )

    def draw_reference_plot(self, surface: Surface):
        """Draw the axis, both signal curves and the grid onto the surface."""
        width = self.param.graph_width
        height = self.param.graph_height

        surface.draw_line(0, height / 2, width, height / 2, COLOR_AXIS, AXIS_WEIGHT)

        for previous, current in curve_segments(self.curve_sampler()):
            surface.draw_line(
                previous[0],
                previous[1],
                current[0],
                current[1],
                COLOR_SIGNAL_1,
                CURVE_WEIGHT,
            )
            surface.draw_line(
                previous[0],
                previous[2],
                current[0],
                current[2],
                COLOR_SIGNAL_2,
                CURVE_WEIGHT,
            )

        divisions = self.param.grid_divisions
        for index in range(grid_line_count(divisions)):
            x = grid_line_x(index, divisions, width)
            surface.draw_line(x, 0, x, height, COLOR_AXIS, GRID_WEIGHT)
            label = grid_label(index, divisions)
            if label is not None:
                surface.draw_text(
                    format_grid_label(label),
                    x,
                    height / 2 + LABEL_OFFSET,
                    ALIGN_CENTER,
                    LABEL_TEXT_SIZE,
                )

    def reference_plot(self, renderer: Optional[Callable] = None):
        """
        Return the pre-rendered reference plot, rendering it on first use.

        Parameters
        ----------
        renderer : callable, optional
            Called with the diagram, returns an image that the target surface's
            draw_image() accepts. By default the plot is recorded into a
            RecordingSurface.
        """
        if self._reference_image is None:
            start = time.time()
            if renderer is None:
                image = RecordingSurface(self.param.graph_width, self.param.graph_height)
                self.draw_reference_plot(image)
            else:
                image = renderer(self)
            self._reference_image = image
            logging.info(f"Reference plot rendered in {time.time()-start:.5f} seconds")
        return self._reference_image

    def draw_wheel(self, surface: Surface, segments):
        center = self.wheel_center
        surface.draw_filled_rect(
            center[0],
            center[1],
            self.param.wheel_width,
            self.param.wheel_height,
            COLOR_WHEEL,
            WHEEL_WEIGHT,
        )
        for segment in segments:
            surface.draw_line(
                segment.x0,
                segment.y0,
                segment.x1,
                segment.y1,
                COLOR_ROLLER,
                WHEEL_WEIGHT,
            )

    def draw_frame(self, surface: Surface, reference_image=None):
        """Draw the diagram for the current angle and spin, return the frame data."""
        if reference_image is None:
            reference_image = self.reference_plot()
        frame = self.frame_data()
        height = self.param.canvas_height
        center = self.param.dial_center
        size = self.param.ellipse_size

        surface.set_background(COLOR_BACKGROUND)
        surface.draw_image(reference_image, self.param.graph_x, 0)
        surface.draw_line(
            frame.marker_x, 0, frame.marker_x, height, COLOR_MARKER, MARKER_WEIGHT
        )

        surface.draw_ellipse(center[0], center[1], size, size, COLOR_AXIS, MARKER_WEIGHT)
        self.draw_wheel(surface, frame.roller_segments)
        surface.draw_line(
            center[0],
            center[1],
            frame.needle_end[0],
            frame.needle_end[1],
            COLOR_MARKER,
            MARKER_WEIGHT,
        )

        if self.param.title:
            surface.draw_text(
                self.param.title,
                self.param.canvas_width / 2,
                TITLE_OFFSET,
                ALIGN_CENTER,
                TITLE_TEXT_SIZE,
            )
        return frame
