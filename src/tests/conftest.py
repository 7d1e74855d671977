# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
from pathlib import Path

import pytest
import LineCableEngine.api as lce

ROOT_PATH = Path(__file__).parent

RHO_AL = 2.8264e-8


@pytest.fixture
def root_path():
    return ROOT_PATH


@pytest.fixture
def frequencies():
    return [50.0, 1000.0]


@pytest.fixture
def single_core():
    """
    Single core cable: solid copper core, XLPE, aluminium sheath and PE jacket
    """
    core = lce.CableComponent(name='core',
                              conductor=lce.ConductorGroup(r_in=0.0, r_ext=0.0195, rho=lce.RHO_CU, alpha=0.00393),
                              insulator=lce.InsulatorGroup(r_in=0.0195, r_ext=0.0345, eps_r=2.3))

    sheath = lce.CableComponent(name='sheath',
                                conductor=lce.ConductorGroup(r_in=0.0345, r_ext=0.0365, rho=RHO_AL, alpha=0.00429),
                                insulator=lce.InsulatorGroup(r_in=0.0365, r_ext=0.0405, eps_r=2.3))

    return lce.CableDesign(name='single core', components=[core, sheath])


@pytest.fixture
def bare_wire():
    """
    Bare solid copper conductor
    """
    wire = lce.CableComponent(name='wire',
                              conductor=lce.ConductorGroup(r_in=0.0, r_ext=0.01, rho=lce.RHO_CU),
                              insulator=lce.InsulatorGroup(r_in=0.01, r_ext=0.01))
    return lce.CableDesign(name='bare wire', components=[wire])


@pytest.fixture
def buried_system(single_core):
    """
    Three single core cables in flat formation, 1 m deep, sheaths grounded
    """
    system = lce.LineCableSystem(name='buried')
    for i in range(3):
        system.add_cable(single_core, horz=(i - 1) * 0.25, vert=-1.0, conn=[i + 1, 0])
    return system


@pytest.fixture
def overhead_system(bare_wire):
    """
    Three bare conductors in flat formation, 10 m high
    """
    system = lce.LineCableSystem(name='overhead')
    for i in range(3):
        system.add_cable(bare_wire, horz=(i - 1) * 1.0, vert=10.0, conn=[i + 1])
    return system


@pytest.fixture
def earth_model(frequencies):
    return lce.EarthModel(frequencies=frequencies, rho_g=100.0, eps_r=10.0, mu_r=1.0)


@pytest.fixture
def overhead_formulations():
    """
    Carson kernel and electrostatic images
    """
    return lce.FormulationSet(earth_impedance=lce.CarsonZ(), earth_admittance=lce.Images())
