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
from py_mecanum.defs import *
from py_mecanum.base_classes import *
from py_mecanum.function_generators import positive_mod
from py_mecanum.core import (
    generate_roller_segments,
    RollerPatternGenerator,
    SpinDriver,
)
import pytest as pytest
import shapely as shp

FOOTPRINT = WheelFootprintParam(width=36, height=96)


def as_array(segments):
    return np.array([[s.x0, s.y0, s.x1, s.y1] for s in segments])


def test_first_segment():
    segments = generate_roller_segments(FOOTPRINT, 27, 0)
    # the first groove starts one spacing below the top edge
    assert segments[0].y0 == pytest.approx(-21)
    assert segments[0].x0 == pytest.approx(-18)
    assert len(segments) == 4


def test_idempotent():
    seg1 = generate_roller_segments(FOOTPRINT, 27, 13.3)
    seg2 = generate_roller_segments(FOOTPRINT, 27, 13.3)
    assert seg1 == seg2


@pytest.mark.parametrize("offset", np.linspace(-60, 60, 13))
@pytest.mark.parametrize("periods", [-2, -1, 1, 3])
def test_periodic(offset, periods):
    """Spinning by whole roller spacings gives the same pattern."""
    seg1 = generate_roller_segments(FOOTPRINT, 27, offset)
    seg2 = generate_roller_segments(FOOTPRINT, 27, offset + periods * 27)
    assert len(seg1) == len(seg2)
    assert as_array(seg1) == pytest.approx(as_array(seg2), rel=1e-9, abs=1e-9)


@pytest.mark.parametrize(
    "width, height, spacing",
    [(36, 96, 27), (36, 96, 5), (80, 40, 13), (10, 200, 50), (50, 50, 100)],
)
@pytest.mark.parametrize("offset", np.linspace(-100, 100, 21))
def test_clipped_to_footprint(width, height, spacing, offset, enable_plotting=False):
    """
    Every groove lies inside the wheel outline and runs at 45 degrees.
    """
    footprint = WheelFootprintParam(width=width, height=height)
    segments = generate_roller_segments(footprint, spacing, offset)

    if enable_plotting:
        import matplotlib.pyplot as plt

        ax = plt.axes()
        ax.add_patch(plt.Rectangle((-width / 2, -height / 2), width, height, fill=False))
        for s in segments:
            ax.plot([s.x0, s.x1], [s.y0, s.y1])
        ax.axis("equal")
        plt.show()

    outline = shp.box(-width / 2, -height / 2, width / 2, height / 2).buffer(1e-9)
    for s in segments:
        assert outline.covers(shp.LineString([(s.x0, s.y0), (s.x1, s.y1)]))
        assert s.x1 - s.x0 == pytest.approx(s.y0 - s.y1, abs=1e-9)
        assert s.x1 >= s.x0 - 1e-9


@pytest.mark.parametrize("offset", np.linspace(0, 27, 7, endpoint=False))
def test_scroll_direction(offset):
    """Increasing the offset moves the grooves up (towards negative y)."""
    seg0 = generate_roller_segments(FOOTPRINT, 27, 0)
    seg1 = generate_roller_segments(FOOTPRINT, 27, offset)
    # unclipped lower end of the groove: y0 + x-shift
    diag0 = seg0[0].y0 + (seg0[0].x0 + 18)
    diag1 = seg1[0].y0 + (seg1[0].x0 + 18)
    assert diag1 == pytest.approx(diag0 - offset)


@pytest.mark.parametrize("offset", [-1e-20, -5, -27, -27.5, -1000.25])
def test_negative_offset(offset):
    spacing = 27
    remainder = positive_mod(offset, spacing)
    assert 0 <= remainder < spacing
    segments = generate_roller_segments(FOOTPRINT, spacing, offset)
    assert segments[0].y0 + segments[0].x0 + 18 == pytest.approx(-21 - remainder)


def test_ordered_top_down():
    segments = generate_roller_segments(FOOTPRINT, 27, 7)
    diag = [s.y0 + s.x0 + 18 for s in segments]
    assert np.diff(diag) == pytest.approx(27)


@pytest.mark.parametrize("spacing", [0, -27])
def test_invalid_spacing(spacing):
    with pytest.raises(InvalidParameterError):
        generate_roller_segments(FOOTPRINT, spacing, 0)
    with pytest.raises(InvalidParameterError):
        RollerPatternGenerator(FOOTPRINT, spacing)


@pytest.mark.parametrize("width, height", [(0, 96), (36, 0), (-36, 96)])
def test_invalid_footprint(width, height):
    with pytest.raises(InvalidParameterError):
        WheelFootprintParam(width=width, height=height)


def test_generator_class():
    generator = RollerPatternGenerator()
    assert generator(5) == generate_roller_segments(
        WheelFootprintParam(WHEEL_WIDTH, WHEEL_HEIGHT), ROLLER_SPACING, 5
    )


def test_spin_driver():
    driver = SpinDriver(velocity=10)
    driver.advance(0.5)
    driver.advance(0.5)
    assert driver.spin == pytest.approx(10)
    driver.reset()
    assert driver.spin == 0
