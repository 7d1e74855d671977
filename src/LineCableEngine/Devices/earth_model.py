# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
"""
Earth layer stack, from the air downwards.

Typical earth resistivity values:
    10 Ohm.m    swampy ground
    100 Ohm.m   average damp earth
    1000 Ohm.m  dry earth
"""
from __future__ import annotations

from typing import List, Any, Tuple, Union
import numpy as np

from LineCableEngine.constants import EPS_0, MU_0
from LineCableEngine.basic_structures import Vec, NumVec
from LineCableEngine.Utils.uncertain import has_uncertainty


class EarthFrequencyDependence:
    """
    Base of the frequency dependent earth models: per frequency properties of a layer
    """
    name = 'Earth frequency dependence'

    def __call__(self, frequencies: Vec, rho: Any, eps_r: Any, mu_r: Any) -> Tuple[NumVec, NumVec, NumVec]:
        """
        Evaluate the layer properties at every frequency
        :param frequencies: frequencies [Hz]
        :param rho: resistivity [Ohm.m]
        :param eps_r: relative permittivity [-]
        :param mu_r: relative permeability [-]
        :return: resistivity [Ohm.m], permittivity [F/m], permeability [H/m] vectors
        """
        raise NotImplementedError()

    def __str__(self):
        return self.name


class CPEarth(EarthFrequencyDependence):
    """
    Constant parameters earth: the layer properties do not depend on the frequency
    """
    name = 'Constant properties (CP)'

    def __call__(self, frequencies: Vec, rho: Any, eps_r: Any, mu_r: Any) -> Tuple[NumVec, NumVec, NumVec]:
        """
        Broadcast the layer properties over the frequencies
        :param frequencies: frequencies [Hz]
        :param rho: resistivity [Ohm.m]
        :param eps_r: relative permittivity [-]
        :param mu_r: relative permeability [-]
        :return: resistivity [Ohm.m], permittivity [F/m], permeability [H/m] vectors
        """
        nf = len(frequencies)
        dtype = object if has_uncertainty([rho, eps_r, mu_r]) else float
        return (np.full(nf, rho, dtype=dtype),
                np.full(nf, eps_r * EPS_0, dtype=dtype),
                np.full(nf, mu_r * MU_0, dtype=dtype))


class EarthLayer:
    """
    One layer of the stack with its per frequency properties
    """

    def __init__(self, frequencies: Vec, rho: Any, eps_r: Any, mu_r: Any, thickness: Any = np.inf,
                 freq_dependence: Union[EarthFrequencyDependence, None] = None, name: str = ''):
        """

        :param frequencies: frequencies [Hz]
        :param rho: resistivity [Ohm.m]
        :param eps_r: relative permittivity [-]
        :param mu_r: relative permeability [-]
        :param thickness: layer thickness [m], inf for the last layer
        :param freq_dependence: frequency dependence formulation (CPEarth by default)
        :param name: name
        """
        self.name = name
        self.base_rho = rho
        self.base_eps_r = eps_r
        self.base_mu_r = mu_r
        self.thickness = thickness
        self.freq_dependence = CPEarth() if freq_dependence is None else freq_dependence
        self.rho_g, self.eps_g, self.mu_g = self.freq_dependence(frequencies, rho, eps_r, mu_r)

    def __str__(self):
        return f"{self.name}: rho={self.base_rho}, eps_r={self.base_eps_r}, mu_r={self.base_mu_r}, t={self.thickness}"


class EarthModel:
    """
    Earth model. Layer 1 is always the air, layer 2 is the first earth layer and so on.
    """

    def __init__(self, frequencies: Vec, rho_g: Any, eps_r: Any = 1.0, mu_r: Any = 1.0, thickness: Any = np.inf,
                 freq_dependence: Union[EarthFrequencyDependence, None] = None):
        """

        :param frequencies: frequencies [Hz]
        :param rho_g: resistivity of the first earth layer [Ohm.m]
        :param eps_r: relative permittivity of the first earth layer [-]
        :param mu_r: relative permeability of the first earth layer [-]
        :param thickness: thickness of the first earth layer [m]
        :param freq_dependence: frequency dependence formulation (CPEarth by default)
        """
        self.frequencies = np.asarray(frequencies, dtype=float)
        self.freq_dependence = CPEarth() if freq_dependence is None else freq_dependence

        # the air properties never depend on the frequency
        air = EarthLayer(self.frequencies, rho=np.inf, eps_r=1.0, mu_r=1.0, thickness=np.inf,
                         freq_dependence=CPEarth(), name='air')

        self.layers: List[EarthLayer] = [air]
        self.add_layer(rho_g, eps_r, mu_r, thickness)

    def add_layer(self, rho: Any, eps_r: Any = 1.0, mu_r: Any = 1.0, thickness: Any = np.inf) -> EarthLayer:
        """
        Append a layer below the existing ones
        :param rho: resistivity [Ohm.m]
        :param eps_r: relative permittivity [-]
        :param mu_r: relative permeability [-]
        :param thickness: thickness [m]
        :return: EarthLayer
        """
        layer = EarthLayer(self.frequencies, rho=rho, eps_r=eps_r, mu_r=mu_r, thickness=thickness,
                           freq_dependence=self.freq_dependence, name=f'earth {len(self.layers)}')
        self.layers.append(layer)
        return layer

    @property
    def n_layers(self) -> int:
        """
        Number of layers, air included
        """
        return len(self.layers)

    @property
    def n_frequencies(self) -> int:
        return len(self.frequencies)

    def __str__(self):
        return f"Earth model with {self.n_layers - 1} earth layers ({self.freq_dependence})"
