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

import py_mecanum as pmc
import logging

# Interactive version of the diagram: drag with the left mouse button to change
# the angle, the wheel spins slowly on its own.

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)

diagram = pmc.WheelDiagram(spin_driver=pmc.SpinDriver(velocity=pmc.ROLLER_SPACING / 4))
app = pmc.MecanumDiagramApp(diagram)
app.show()
