# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
"""
Flattened geometry / material description of a cable system as seen by the engine.

Every property may be a plain number or an uncertainties UFloat.
A cable is a set of coaxial components (core, sheath, armour...) and every component has
a conductor group surrounded by an insulation group.
"""
from __future__ import annotations

from typing import List, Any, Union
import numpy as np

from LineCableEngine.constants import T_0


class ConductorGroup:
    """
    Aggregated conductor layer of a cable component
    """

    def __init__(self, r_in: Any, r_ext: Any, rho: Any, mu_r: Any = 1.0, eps_r: Any = 1.0,
                 alpha: Any = 0.0, name: str = 'conductor'):
        """
        Conductor group
        :param r_in: inner radius [m] (0 for solid conductors)
        :param r_ext: outer radius [m]
        :param rho: equivalent resistivity at T_0 [Ohm.m]
        :param mu_r: relative permeability [-]
        :param eps_r: relative permittivity [-]
        :param alpha: temperature coefficient of the resistivity [1/°C]
        :param name: name
        """
        self.name = name
        self.r_in = r_in
        self.r_ext = r_ext
        self.rho = rho
        self.mu_r = mu_r
        self.eps_r = eps_r
        self.alpha = alpha

    def __str__(self):
        return f"{self.name} [{self.r_in}, {self.r_ext}] m"


class InsulatorGroup:
    """
    Aggregated insulation layer of a cable component
    """

    def __init__(self, r_in: Any, r_ext: Any, eps_r: Any = 1.0, mu_r: Any = 1.0, tan_delta: Any = 0.0,
                 rho: Any = np.inf, name: str = 'insulation'):
        """
        Insulator group
        :param r_in: inner radius [m], must match the outer radius of the conductor it covers
        :param r_ext: outer radius [m] (equal to r_in for bare conductors)
        :param eps_r: relative permittivity [-]
        :param mu_r: relative permeability [-]
        :param tan_delta: dielectric loss tangent [-]
        :param rho: resistivity [Ohm.m]
        :param name: name
        """
        self.name = name
        self.r_in = r_in
        self.r_ext = r_ext
        self.eps_r = eps_r
        self.mu_r = mu_r
        self.tan_delta = tan_delta
        self.rho = rho

    def __str__(self):
        return f"{self.name} [{self.r_in}, {self.r_ext}] m"


class CableComponent:
    """
    Conductor group plus its insulation
    """

    def __init__(self, name: str, conductor: ConductorGroup, insulator: InsulatorGroup):
        """

        :param name: name (core, sheath, armour...)
        :param conductor: ConductorGroup
        :param insulator: InsulatorGroup
        """
        self.name = name
        self.conductor = conductor
        self.insulator = insulator

    def __str__(self):
        return self.name


class CableDesign:
    """
    Ordered list of coaxial components, from the inside out
    """

    def __init__(self, name: str, components: Union[List[CableComponent], None] = None):
        """

        :param name: design name
        :param components: list of CableComponent
        """
        self.name = name
        self.components: List[CableComponent] = list() if components is None else list(components)

    def add_component(self, component: CableComponent) -> "CableDesign":
        """
        Add the next (outer) component
        :param component: CableComponent
        :return: self
        """
        self.components.append(component)
        return self

    @property
    def n_components(self) -> int:
        return len(self.components)

    @property
    def outer_radius(self) -> Any:
        """
        Outermost radius of the cable [m]
        """
        return self.components[-1].insulator.r_ext

    def __str__(self):
        return self.name


class CablePosition:
    """
    Cable design placed in the cross-section
    """

    def __init__(self, design: CableDesign, horz: Any, vert: Any, conn: List[int]):
        """

        :param design: CableDesign
        :param horz: horizontal coordinate [m]
        :param vert: vertical coordinate [m] (positive above ground, negative below)
        :param conn: phase label of every component (0 -> grounded / eliminated, 1..n -> phase)
        """
        self.design = design
        self.horz = horz
        self.vert = vert
        self.conn = list(conn)

    def __str__(self):
        return f"{self.design.name} @ ({self.horz}, {self.vert})"


class LineCableSystem:
    """
    Collection of cables laid in parallel
    """

    def __init__(self, name: str = 'System', cables: Union[List[CablePosition], None] = None,
                 temperature: Any = T_0):
        """

        :param name: system name
        :param cables: list of CablePosition
        :param temperature: operating temperature [°C]
        """
        self.name = name
        self.cables: List[CablePosition] = list() if cables is None else list(cables)
        self.temperature = temperature

    def add_cable(self, design: CableDesign, horz: Any, vert: Any,
                  conn: Union[List[int], None] = None) -> CablePosition:
        """
        Place a cable
        :param design: CableDesign
        :param horz: horizontal coordinate [m]
        :param vert: vertical coordinate [m]
        :param conn: phase labels per component, if None the components are numbered consecutively
        :return: CablePosition
        """
        if conn is None:
            n0 = self.n_phases
            conn = [n0 + k + 1 for k in range(design.n_components)]

        pos = CablePosition(design=design, horz=horz, vert=vert, conn=conn)
        self.cables.append(pos)
        return pos

    @property
    def n_cables(self) -> int:
        return len(self.cables)

    @property
    def n_phases(self) -> int:
        """
        Number of matrix phases (one per component of every cable)
        """
        return sum(c.design.n_components for c in self.cables)

    @property
    def phase_map(self) -> List[int]:
        """
        Phase label of every matrix phase
        """
        return [p for c in self.cables for p in c.conn]

    def __str__(self):
        return f"{self.name}: {self.n_cables} cables, {self.n_phases} phases"
