# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
from __future__ import annotations

from typing import Tuple
import numpy as np

from LineCableEngine.basic_structures import NumMat
from LineCableEngine.exceptions import EhemLayerIndexError


class EHEMFormulation:
    """
    Base of the equivalent homogeneous earth models
    """
    name = 'EHEM'

    def __call__(self, rho_g: NumMat, eps_g: NumMat, mu_g: NumMat) -> Tuple[NumMat, NumMat, NumMat]:
        """
        Reduce the layer stack to the air plus one earth layer
        :param rho_g: resistivity (layers x frequencies) [Ohm.m]
        :param eps_g: permittivity (layers x frequencies) [F/m]
        :param mu_g: permeability (layers x frequencies) [H/m]
        :return: rho, eps, mu with 2 rows (air, earth)
        """
        raise NotImplementedError()

    def __str__(self):
        return self.name

    def __repr__(self):
        return self.name


class EnforceLayer(EHEMFormulation):
    """
    Take the properties of one layer as if the earth were homogeneous.
    Layers are numbered from 1 (air); -1 selects the bottom layer.
    """
    name = 'Enforce layer'

    def __init__(self, layer: int = -1):
        """

        :param layer: layer index (2 ... n_layers, or -1 for the last one)
        """
        self.layer = layer

    def layer_index(self, n_layers: int) -> int:
        """
        Zero based row of the selected layer
        :param n_layers: number of layers, air included
        :return: row index
        """
        layer = n_layers if self.layer == -1 else self.layer

        if layer < 2 or layer > n_layers:
            raise EhemLayerIndexError(self.layer, n_layers)

        return layer - 1

    def __call__(self, rho_g, eps_g, mu_g):
        k = self.layer_index(rho_g.shape[0])
        rows = [0, k]
        return np.array(rho_g[rows, :]), np.array(eps_g[rows, :]), np.array(mu_g[rows, :])

    def __str__(self):
        return f"{self.name} {self.layer}"
