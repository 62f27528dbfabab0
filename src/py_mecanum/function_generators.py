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

import itertools
import numpy as np
from py_mecanum.defs import *
from py_mecanum.base_classes import *
from scipy.spatial.transform import Rotation as scp_Rotation


def rotate_vector(v, angle):
    rot1 = scp_Rotation.from_euler("z", angles=angle)
    return rot1.apply(v)


def positive_mod(value, modulus):
    """
    Floored modulo, the result is always in [0, modulus) for a positive modulus.

    >>> positive_mod(-5, 27)
    22.0
    >>> positive_mod(54, 27)
    0.0
    """
    check_positive(modulus=modulus)
    remainder = float(np.mod(value, modulus))
    # np.mod(-1e-20, 27) rounds up to 27.0
    if remainder >= modulus:
        remainder = 0.0
    return remainder


def phase_signal_pair(angle) -> PhaseSampleData:
    """
    Evaluate the two wheel signals, lagging and leading the angle by PI/4.

    >>> phase_signal_pair(PI / 4)
    PhaseSampleData(y1=0.0, y2=1.0)
    """
    return PhaseSampleData(
        y1=float(np.sin(angle - PHASE_SHIFT)), y2=float(np.sin(angle + PHASE_SHIFT))
    )


def signal_to_pixel(value, plot_height):
    """Map a signal value in [-1, 1] to a y-down pixel row of the plot."""
    return plot_height / 2 - value * plot_height * SIGNAL_SCALE


class CurveSampler:
    """
    Lazy, restartable sampling of both signals across the reference plot.

    Iterating yields (pixel_x, y1_pixel, y2_pixel) tuples. Sample i sits at
    pixel_x = i * plot_width / total_samples, and the signals are evaluated at
    the angle pixel_x / plot_width * 2 PI.

    Parameters
    ----------
    total_samples : int
        Number of samples, spread evenly over [0, plot_width).
    plot_width : float
        Width of the plot in pixels, one full turn.
    plot_height : float
        Height of the plot in pixels.
    """

    def __init__(self, total_samples, plot_width, plot_height):
        if int(total_samples) != total_samples:
            raise InvalidParameterError(
                f"total_samples must be a whole number, got {total_samples}"
            )
        check_positive(
            total_samples=total_samples, plot_width=plot_width, plot_height=plot_height
        )
        self.total_samples = int(total_samples)
        self.plot_width = plot_width
        self.plot_height = plot_height

    def __len__(self):
        return self.total_samples

    def sample(self, i):
        pixel_x = i * self.plot_width / self.total_samples
        values = phase_signal_pair(pixel_x / self.plot_width * TWO_PI)
        return (
            pixel_x,
            signal_to_pixel(values.y1, self.plot_height),
            signal_to_pixel(values.y2, self.plot_height),
        )

    def __iter__(self):
        return (self.sample(i) for i in range(self.total_samples))


def sample_curve(total_samples, plot_width, plot_height) -> CurveSampler:
    """Sample the signal pair for the reference plot, see CurveSampler."""
    return CurveSampler(total_samples, plot_width, plot_height)


def curve_segments(samples):
    """
    Fold consecutive curve samples into polyline segments.

    Yields (previous, current) pairs of (pixel_x, y1_pixel, y2_pixel) samples,
    one pair less than the number of samples.
    """
    return itertools.pairwise(samples)


def marker_x(angle, plot_width):
    """
    Horizontal position of the angle marker on the reference plot.

    >>> marker_x(PI, 640)
    320.0
    """
    return angle / TWO_PI * plot_width


def grid_label(index, total_divisions):
    """
    Reduced fraction label of a grid line at index * PI / total_divisions.

    Both numerator and denominator are halved while both are even. A numerator
    of 1 is returned as None, index 0 has no label at all.

    >>> grid_label(2, 4)
    GridLabelData(numerator=None, denominator=2)
    >>> grid_label(6, 4)
    GridLabelData(numerator=3, denominator=2)
    >>> grid_label(0, 4) is None
    True
    """
    check_positive(total_divisions=total_divisions)
    if index == 0:
        return None
    numerator = int(index)
    denominator = int(total_divisions)
    while numerator % 2 == 0 and denominator % 2 == 0:
        numerator //= 2
        denominator //= 2
    if numerator == 1:
        return GridLabelData(numerator=None, denominator=denominator)
    return GridLabelData(numerator=numerator, denominator=denominator)


def format_grid_label(label: GridLabelData) -> str:
    """
    Text of a grid label.

    >>> format_grid_label(grid_label(4, 4))
    'π'
    >>> format_grid_label(grid_label(3, 4))
    '3π/4'
    """
    numerator = "" if label.numerator is None else str(label.numerator)
    if label.denominator == 1:
        return f"{numerator}π"
    return f"{numerator}π/{label.denominator}"


def grid_line_count(total_divisions):
    """Number of grid lines covering [0, 2 PI)."""
    return 2 * total_divisions


def grid_line_x(index, total_divisions, plot_width):
    """Horizontal position of grid line index, lines are PI / total_divisions apart."""
    return index / grid_line_count(total_divisions) * plot_width


def dial_needle_end(center, radius, angle):
    """Tip of the dial needle in y-down canvas coordinates.

    Parameters
    ----------
    center : np.ndarray
        Center of the dial, shape (3,).
    radius : float
        Needle length.
    angle : float
        Needle angle in radians, counter-clockwise on screen.
    """
    v = rotate_vector(RIGHT * radius, angle)
    return np.asarray(center) + v * np.array((1.0, -1.0, 1.0))
