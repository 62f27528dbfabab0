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

import numpy as np
import logging
from py_mecanum.wrapper import *
from matplotlib.figure import Figure
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.patches import Rectangle, Ellipse
from matplotlib.animation import FuncAnimation

DEFAULT_DPI = 100


def to_mpl_color(color):
    return tuple(c / 255 for c in color)


class MatplotlibSurface(Surface):
    """Surface drawing onto a matplotlib Axes in y-down pixel coordinates.

    The axes are expected to fill their figure, so that one data unit is one
    pixel of the figure at its dpi. Artists get increasing z-order in call
    order, matplotlib would otherwise draw patches below lines below text.

    Parameters
    ----------
    ax : matplotlib.axes.Axes
        Target axes.
    width, height : float
        Size of the surface in pixels.
    """

    def __init__(self, ax, width, height):
        self.ax = ax
        self._size = (width, height)
        self._zorder = 0
        self._reset_view()

    @property
    def size(self):
        return self._size

    def _reset_view(self):
        width, height = self._size
        self.ax.set_xlim(0, width)
        self.ax.set_ylim(height, 0)
        self.ax.set_axis_off()

    def _next_z(self):
        self._zorder += 1
        return self._zorder

    def px_to_pt(self, value):
        return value * 72 / self.ax.figure.dpi

    def set_background(self, color):
        # a new background starts a new frame
        self.ax.clear()
        self._zorder = 0
        self._reset_view()
        self.ax.figure.patch.set_facecolor(to_mpl_color(color))
        self.ax.set_facecolor(to_mpl_color(color))

    def draw_line(self, x0, y0, x1, y1, color, thickness=1):
        self.ax.plot(
            [x0, x1],
            [y0, y1],
            color=to_mpl_color(color),
            linewidth=self.px_to_pt(thickness),
            solid_capstyle="round",
            zorder=self._next_z(),
        )

    def draw_filled_rect(self, cx, cy, w, h, color, thickness=1):
        self.ax.add_patch(
            Rectangle(
                (cx - w / 2, cy - h / 2),
                w,
                h,
                facecolor=to_mpl_color(color),
                edgecolor=to_mpl_color(COLOR_AXIS),
                linewidth=self.px_to_pt(thickness),
                zorder=self._next_z(),
            )
        )

    def draw_ellipse(self, cx, cy, w, h, color, thickness=1):
        self.ax.add_patch(
            Ellipse(
                (cx, cy),
                w,
                h,
                facecolor=to_mpl_color(COLOR_BACKGROUND),
                edgecolor=to_mpl_color(color),
                linewidth=self.px_to_pt(thickness),
                zorder=self._next_z(),
            )
        )

    def draw_text(self, text, x, y, alignment=ALIGN_CENTER, size=LABEL_TEXT_SIZE):
        self.ax.text(
            x,
            y,
            text,
            ha=alignment,
            va="top",
            fontsize=self.px_to_pt(size),
            color=to_mpl_color(COLOR_TEXT),
            zorder=self._next_z(),
        )

    def draw_image(self, image, x, y):
        if isinstance(image, RecordingSurface):
            self.replay(image, x, y)
            return
        height, width = image.shape[:2]
        self.ax.imshow(
            image,
            extent=(x, x + width, y + height, y),
            aspect="auto",
            interpolation="nearest",
            zorder=self._next_z(),
        )
        # imshow rescales the view
        self._reset_view()

    def replay(self, recording: RecordingSurface, dx=0, dy=0):
        """Draw the commands of a recording, shifted by (dx, dy)."""
        for name, args in recording.commands:
            if name == "line":
                x0, y0, x1, y1, color, thickness = args
                self.draw_line(x0 + dx, y0 + dy, x1 + dx, y1 + dy, color, thickness)
            elif name in ("rect", "ellipse"):
                cx, cy, w, h, color, thickness = args
                draw = self.draw_filled_rect if name == "rect" else self.draw_ellipse
                draw(cx + dx, cy + dy, w, h, color, thickness)
            elif name == "text":
                text, x, y, alignment, size = args
                self.draw_text(text, x + dx, y + dy, alignment, size)
            elif name == "image":
                image, x, y = args
                self.draw_image(image, x + dx, y + dy)
            elif name == "background":
                width, height = recording.size
                self.draw_filled_rect(
                    dx + width / 2, dy + height / 2, width, height, args[0], 0
                )
            else:
                raise ValueError(f"Unknown draw command: {name}")


def pixel_figure(width, height, dpi=DEFAULT_DPI, fig=None):
    """Create or resize a figure to width x height pixels with one full axes."""
    if fig is None:
        fig = Figure(dpi=dpi)
        FigureCanvasAgg(fig)
    fig.set_dpi(dpi)
    fig.set_size_inches(width / dpi, height / dpi)
    ax = fig.add_axes((0, 0, 1, 1))
    return fig, ax


def render_reference_plot_image(diagram: WheelDiagram, dpi=DEFAULT_DPI):
    """
    Render the reference plot of the diagram off-screen.

    Returns
    -------
    np.ndarray
        RGBA image of shape (graph_height, graph_width, 4), dtype uint8.
    """
    width = diagram.param.graph_width
    height = diagram.param.graph_height
    fig, ax = pixel_figure(width, height, dpi=dpi)
    surface = MatplotlibSurface(ax, width, height)
    surface.set_background(COLOR_BACKGROUND)
    diagram.draw_reference_plot(surface)
    fig.canvas.draw()
    image = np.asarray(fig.canvas.buffer_rgba()).copy()
    logging.debug(f"Reference plot image size: {image.shape}")
    return image


class MecanumDiagramApp:
    """Interactive matplotlib viewer of a WheelDiagram.

    Dragging with the left mouse button changes the selected angle, the
    diagram is redrawn on every animation frame.

    Parameters
    ----------
    diagram : WheelDiagram, optional
        Diagram to show. Default is WheelDiagram().
    fig : matplotlib.figure.Figure, optional
        Figure to draw into. Default is a new pyplot figure.
    interval : int, optional
        Frame interval in milliseconds. Default is FRAME_INTERVAL_MS.
    dpi : float, optional
        Resolution used to map canvas pixels to figure size.
    """

    def __init__(
        self,
        diagram: Optional[WheelDiagram] = None,
        fig=None,
        interval=FRAME_INTERVAL_MS,
        dpi=DEFAULT_DPI,
    ):
        self.diagram = diagram if diagram is not None else WheelDiagram()
        self.interval = interval
        width = self.diagram.param.canvas_width
        height = self.diagram.param.canvas_height
        if fig is None:
            import matplotlib.pyplot as plt

            fig = plt.figure(dpi=dpi)
        self.fig, self.ax = pixel_figure(width, height, dpi=dpi, fig=fig)
        self.surface = MatplotlibSurface(self.ax, width, height)
        self.reference_image = self.diagram.reference_plot(
            renderer=lambda d: render_reference_plot_image(d, dpi=dpi)
        )
        self.animation = None
        self._pointer = None

        self.fig.canvas.mpl_connect("button_press_event", self.on_press)
        self.fig.canvas.mpl_connect("button_release_event", self.on_release)
        self.fig.canvas.mpl_connect("motion_notify_event", self.on_motion)
        self.draw()

    def to_canvas(self, event):
        """Canvas pixel position of a mouse event, also outside of the axes."""
        x, y = self.ax.transData.inverted().transform((event.x, event.y))
        return float(x), float(y)

    def on_press(self, event):
        if event.button == 1 and event.inaxes is self.ax:
            self._pointer = self.to_canvas(event)

    def on_release(self, event):
        self._pointer = None

    def on_motion(self, event):
        if self._pointer is None:
            return
        current = self.to_canvas(event)
        self.diagram.drag(*self._pointer, *current)
        self._pointer = current

    def draw(self):
        return self.diagram.draw_frame(self.surface, self.reference_image)

    def update(self, frame_index):
        self.diagram.advance(self.interval / 1000)
        self.draw()
        return []

    def start(self):
        """Start the redraw loop."""
        self.animation = FuncAnimation(
            self.fig,
            self.update,
            interval=self.interval,
            blit=False,
            cache_frame_data=False,
        )
        return self.animation

    def show(self):
        import matplotlib.pyplot as plt

        self.start()
        plt.show()
