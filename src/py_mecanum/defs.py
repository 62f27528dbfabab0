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

# angle constants
PI = np.pi
TWO_PI = 2 * np.pi

# the two wheel signals lag and lead the selected angle by this much
PHASE_SHIFT = PI / 4

# Dimension and shape conventions
# Points are 3D row vectors, shape(3), the diagram lives in the XY plane (z=0).
# Canvas coordinates are pixels, x to the right, y DOWN.
VSHAPE = 3

# Geometry: directions
RIGHT = np.array((1.0, 0.0, 0.0)).reshape(VSHAPE)
"""One unit step in the positive X direction."""

# Mecanum wheel schematic, pixels
WHEEL_WIDTH = 36.0
WHEEL_HEIGHT = 96.0
ROLLER_SPACING = 27.0

# Dial (unit circle) layout, pixels
ELLIPSE_MARGIN = 32
DIAL_BOX_SIZE = 350

# Reference plot layout, pixels
GRAPH_WIDTH = 640
GRAPH_HEIGHT = 400
CANVAS_HEIGHT = 400
# grid lines every PI / GRID_DIVISIONS
GRID_DIVISIONS = 4
# signal amplitude 1 maps to this fraction of the plot height
SIGNAL_SCALE = 1 / 3
LABEL_OFFSET = 4

# Text
LABEL_TEXT_SIZE = 16
TITLE_TEXT_SIZE = 24
TITLE_OFFSET = 8
TITLE = "Work in progress!"

# Stroke weights, pixels
AXIS_WEIGHT = 3
CURVE_WEIGHT = 3
GRID_WEIGHT = 1
MARKER_WEIGHT = 4
WHEEL_WEIGHT = 3

# Colors, RGB 0..255
COLOR_BACKGROUND = (255, 255, 255)
COLOR_AXIS = (0, 0, 0)
COLOR_SIGNAL_1 = (255, 0, 0)
COLOR_SIGNAL_2 = (0, 0, 255)
COLOR_MARKER = (0, 255, 0)
COLOR_WHEEL = (127, 127, 127)
COLOR_ROLLER = (0, 0, 0)
COLOR_TEXT = (0, 0, 0)

# Animation
FRAME_INTERVAL_MS = 33

# Text alignment keywords
ALIGN_LEFT = "left"
ALIGN_CENTER = "center"
ALIGN_RIGHT = "right"
