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
import numpy as np
from py_mecanum import *
from py_mecanum.base_classes import DrawCommand
from matplotlib.figure import Figure
from matplotlib.backends.backend_agg import FigureCanvasAgg
from types import SimpleNamespace
import pytest as pytest


def test_layout():
    param = DiagramParam()
    assert param.ellipse_size == 350 - 2 * 32
    assert param.canvas_width == 350 + 640
    assert param.graph_x == 350
    assert param.dial_center == pytest.approx(np.array((175, 200, 0)))
    assert param.canvas_region == RectData(0, 0, 990, 400)


@pytest.mark.parametrize(
    "kwargs",
    [{"roller_spacing": 0}, {"graph_width": 0}, {"dial_box_size": 64}],
)
def test_invalid_param(kwargs):
    with pytest.raises(InvalidParameterError):
        DiagramParam(**kwargs)


def test_drag_and_frame():
    diagram = WheelDiagram()
    frame = diagram.frame_data()
    assert frame.angle == 0
    assert frame.marker_x == 350
    assert frame.needle_end == pytest.approx(np.array((175 + 143, 200, 0)))

    diagram.drag(500, 100, 820, 100)
    frame = diagram.frame_data()
    assert frame.angle == pytest.approx(PI)
    assert frame.marker_x == pytest.approx(350 + 320)
    assert frame.rotation_offset == pytest.approx(PI * 48)
    assert frame.phase == phase_signal_pair(PI)

    # dead zone: pointer left the canvas
    diagram.drag(820, 100, 1200, 100)
    assert diagram.angle == pytest.approx(PI)


def test_frame_rollers_on_wheel():
    diagram = WheelDiagram()
    diagram.drag(0, 0, 123, 0)
    frame = diagram.frame_data()
    cx, cy = 175, 200
    local = diagram.roller_generator.generate(frame.rotation_offset)
    assert len(frame.roller_segments) == len(local)
    for seg, loc in zip(frame.roller_segments, local):
        assert seg.x0 == pytest.approx(loc.x0 + cx)
        assert seg.y1 == pytest.approx(loc.y1 + cy)
        assert cx - 18 - 1e-9 <= min(seg.x0, seg.x1)
        assert max(seg.x0, seg.x1) <= cx + 18 + 1e-9


def test_spin_driver_moves_rollers():
    diagram = WheelDiagram(spin_driver=SpinDriver(velocity=ROLLER_SPACING))
    before = diagram.frame_data().roller_segments
    diagram.advance(0.5)
    assert diagram.rotation_offset == pytest.approx(ROLLER_SPACING / 2)
    assert diagram.frame_data().roller_segments != before
    # one full roller spacing later the pattern repeats
    diagram.advance(0.5)
    after = diagram.frame_data().roller_segments
    assert [s.y0 for s in after] == pytest.approx([s.y0 for s in before])


def test_reference_plot_recording():
    diagram = WheelDiagram()
    surface = RecordingSurface(640, 400)
    diagram.draw_reference_plot(surface)
    lines = surface.of_kind("line")
    # axis + two curves + grid lines
    assert len(lines) == 1 + 2 * 639 + 8
    texts = [cmd.args[0] for cmd in surface.of_kind("text")]
    assert texts == ["π/4", "π/2", "3π/4", "π", "5π/4", "3π/2", "7π/4"]
    red = [cmd for cmd in lines if cmd.args[4] == COLOR_SIGNAL_1]
    assert len(red) == 639
    for cmd in red:
        assert cmd.args[2] - cmd.args[0] == pytest.approx(1)


def test_reference_plot_cached():
    diagram = WheelDiagram()
    calls = []

    def renderer(d):
        calls.append(d)
        return "image"

    assert diagram.reference_plot(renderer) == "image"
    assert diagram.reference_plot(renderer) == "image"
    assert len(calls) == 1


def test_draw_frame_recording():
    diagram = WheelDiagram()
    diagram.drag(0, 0, 160, 0)
    surface = RecordingSurface(990, 400)
    frame = diagram.draw_frame(surface)
    names = [cmd.name for cmd in surface.commands]
    assert names[0] == "background"
    assert names[1] == "image"
    assert surface.commands[1].args[1:] == (350, 0)
    marker = surface.commands[2]
    assert marker == DrawCommand(
        "line", (frame.marker_x, 0, frame.marker_x, 400, COLOR_MARKER, MARKER_WEIGHT)
    )
    assert frame.marker_x == pytest.approx(350 + 160)
    assert len(surface.of_kind("ellipse")) == 1
    assert len(surface.of_kind("rect")) == 1
    assert surface.of_kind("text")[-1].args[0] == TITLE


def test_param_frozen():
    """Layout values are fixed once a diagram is built from them."""
    diagram = WheelDiagram()
    with pytest.raises(dataclasses.FrozenInstanceError):
        diagram.param.graph_width = 320
    diagram.drag(400, 200, 560, 200)
    assert diagram.angle == pytest.approx(PI / 2)
    assert diagram.frame_data().marker_x == pytest.approx(350 + 160)


def test_no_title():
    diagram = WheelDiagram(DiagramParam(title=""))
    surface = RecordingSurface(990, 400)
    diagram.draw_frame(surface)
    assert surface.of_kind("text") == []


def test_reference_plot_image():
    diagram = WheelDiagram()
    image = render_reference_plot_image(diagram)
    assert image.shape == (400, 640, 4)
    assert image.dtype == np.uint8
    # the axis line is dark, the corners are background
    assert image[200, 20, :3].max() < 128
    assert image[5, 630, :3].min() > 200


def test_matplotlib_surface_replay():
    fig, ax = pixel_figure(990, 400)
    surface = MatplotlibSurface(ax, 990, 400)
    diagram = WheelDiagram()
    diagram.draw_frame(surface)
    # recorded reference plot is replayed, so all curve lines are present
    assert len(ax.lines) > 2 * 639
    assert ax.get_xlim() == (0, 990)
    assert ax.get_ylim() == (400, 0)


def make_event(app, x, y, button=1):
    dx, dy = app.ax.transData.transform((x, y))
    return SimpleNamespace(x=dx, y=dy, button=button, inaxes=app.ax)


def test_app_drag():
    fig = Figure()
    FigureCanvasAgg(fig)
    app = MecanumDiagramApp(fig=fig)
    assert app.reference_image.shape == (400, 640, 4)

    app.on_motion(make_event(app, 500, 200))
    assert app.diagram.angle == 0

    app.on_press(make_event(app, 400, 200))
    app.on_motion(make_event(app, 480, 200))
    app.on_motion(make_event(app, 560, 200))
    assert app.diagram.angle == pytest.approx(PI / 2)
    app.on_release(make_event(app, 560, 200))
    app.on_motion(make_event(app, 900, 200))
    assert app.diagram.angle == pytest.approx(PI / 2)

    app.update(0)
    fig.canvas.draw()


def test_app_right_button_ignored():
    fig = Figure()
    FigureCanvasAgg(fig)
    app = MecanumDiagramApp(fig=fig)
    app.on_press(make_event(app, 400, 200, button=3))
    app.on_motion(make_event(app, 560, 200))
    assert app.diagram.angle == 0
