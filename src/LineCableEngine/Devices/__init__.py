# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0

from LineCableEngine.Devices.cable_system import (ConductorGroup, InsulatorGroup, CableComponent, CableDesign,
                                                 CablePosition, LineCableSystem)
from LineCableEngine.Devices.earth_model import EarthFrequencyDependence, CPEarth, EarthLayer, EarthModel
