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

from py_mecanum import *
import numpy as np
import logging

# These examples are meant to showcase the functionality of the library,
# and serve as manual testing templates for the developer.

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)


def diagram_snapshot():
    # a diagram with the angle dragged to 3/4 of a turn
    diagram = WheelDiagram()
    start_x = diagram.param.graph_x
    diagram.drag(start_x, 200, start_x + diagram.param.graph_width * 3 / 4, 200)

    # draw it into an off-screen figure, canvas pixels map 1:1 to figure pixels
    fig, ax = pixel_figure(diagram.param.canvas_width, diagram.param.canvas_height)
    surface = MatplotlibSurface(
        ax, diagram.param.canvas_width, diagram.param.canvas_height
    )
    reference = diagram.reference_plot(renderer=render_reference_plot_image)
    frame = diagram.draw_frame(surface, reference)
    logging.info(f"Angle: {frame.angle:.4f}, signals: {frame.phase}")
    return fig


def roller_pattern_strip():
    # the same wheel at increasing rotation offsets, side by side
    footprint = WheelFootprintParam(width=WHEEL_WIDTH, height=WHEEL_HEIGHT)
    offsets = np.linspace(0, ROLLER_SPACING, 6)
    width = 60 * len(offsets)
    height = 120
    fig, ax = pixel_figure(width, height)
    surface = MatplotlibSurface(ax, width, height)
    surface.set_background(COLOR_BACKGROUND)
    for k, offset in enumerate(offsets):
        cx = 30 + 60 * k
        cy = height / 2
        surface.draw_filled_rect(
            cx, cy, footprint.width, footprint.height, COLOR_WHEEL, WHEEL_WEIGHT
        )
        for segment in generate_roller_segments(footprint, ROLLER_SPACING, offset):
            s = segment.translated(cx, cy)
            surface.draw_line(s.x0, s.y0, s.x1, s.y1, COLOR_ROLLER, WHEEL_WEIGHT)
    return fig


def spinning_wheel():
    # wheel animated by a spin driver on top of the selected angle
    diagram = WheelDiagram(spin_driver=SpinDriver(velocity=2 * ROLLER_SPACING))
    dt = FRAME_INTERVAL_MS / 1000
    frames = []
    for _ in range(30):
        diagram.advance(dt)
        frames.append(diagram.frame_data())
    logging.info(f"Rotation offset after 30 frames: {frames[-1].rotation_offset:.3f}")
    return frames


def signal_table():
    # signal values at the labelled grid lines
    rows = []
    for index in range(grid_line_count(GRID_DIVISIONS) + 1):
        angle = index * PI / GRID_DIVISIONS
        label = grid_label(index, GRID_DIVISIONS)
        text = "0" if label is None else format_grid_label(label)
        sample = phase_signal_pair(angle)
        rows.append((text, sample.y1, sample.y2))
        logging.info(f"{text:>5}: {sample.y1:+.3f} {sample.y2:+.3f}")
    return rows


if __name__ == "__main__":
    diagram_snapshot().savefig("diagram_snapshot.png")
    roller_pattern_strip().savefig("roller_pattern_strip.png")
    signal_table()
