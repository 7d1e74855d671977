# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
"""
Earth return potential coefficients [m/F].

The assembly adds these coefficients to the potential matrix of the cables and inverts it,
so the formulations return P_e rather than an admittance:

    P_e = jw / (2 pi (sigma_s + jw eps_s)) [ K0(g_s d) - K0(g_s D) + 2 int_0^inf (F + G) cos(y l) dl ]

    F = mu_o exp(-a_s H) / (a_s mu_o + a_o mu_s)
    G = mu_o mu_s a_s (g_s^2 - g_o^2) exp(-a_s H) / ((a_s mu_o + a_o mu_s) (a_s g_o^2 mu_s + a_o g_s^2 mu_o))

Only conductors in the same layer are supported.
"""
from __future__ import annotations

from typing import Any
import numpy as np
import numba as nb

from LineCableEngine.constants import TOL
from LineCableEngine.enumerations import CouplingTerm, PropagationConstant
from LineCableEngine.exceptions import LayerMismatchError, ConfigurationError
import LineCableEngine.Utils.uncertain as um
from LineCableEngine.Simulations.LineParameters.Formulations.earth_impedance import (get_layer, sigma_nominal,
                                                                                     bessel_difference, distances,
                                                                                     integrate_semi_infinite,
                                                                                     AIR, EARTH)


@nb.njit(cache=True)
def potential_integrand(lam, H, y, gs2, go2, kx2, mu_s, mu_o):
    """
    (F(l) + G(l)) cos(y l)
    """
    a_s = np.sqrt(lam * lam + gs2 + kx2)
    a_o = np.sqrt(lam * lam + go2 + kx2)
    e = np.exp(-a_s * H)
    den = a_s * mu_o + a_o * mu_s
    F = mu_o * e / den
    G = mu_o * mu_s * a_s * (gs2 - go2) * e / (den * (a_s * go2 * mu_s + a_o * gs2 * mu_o))
    return (F + G) * np.cos(y * lam)


class EarthAdmittanceFormulation:
    """
    Base of the earth return admittance formulations (potential coefficient form)
    """
    name = 'Earth admittance'

    def __init__(self,
                 s: int = EARTH,
                 t: int = EARTH,
                 kx: PropagationConstant = PropagationConstant.Lossless,
                 air_propagation: bool = True,
                 earth_propagation: bool = True,
                 epsabs: float = 1e-12,
                 epsrel: float = 1e-8,
                 limit: int = 200):
        """

        :param s: layer of the source conductor (1: air, 2: earth)
        :param t: layer of the target conductor, must be equal to s
        :param kx: longitudinal propagation constant assumption
        :param air_propagation: use the air propagation constant (False: 0)
        :param earth_propagation: use the earth propagation constant (False: 0)
        :param epsabs: absolute tolerance of the quadrature
        :param epsrel: relative tolerance of the quadrature
        :param limit: maximum number of subintervals of the quadrature
        """
        if s not in (AIR, EARTH) or t not in (AIR, EARTH):
            raise ConfigurationError(f"Layers must be 1 (air) or 2 (earth), got s={s}, t={t}")
        if s != t:
            raise ConfigurationError(f"Earth admittance across the interface is not supported (s={s}, t={t})")

        self.s = s
        self.t = t
        self.kx = kx
        self.air_propagation = air_propagation
        self.earth_propagation = earth_propagation
        self.epsabs = epsabs
        self.epsrel = epsrel
        self.limit = limit
        self._evaluate = um.wrap_complex(self.nominal)

    def __call__(self, term: CouplingTerm, h_i: Any, h_j: Any, y_ij: Any, r_ext: Any,
                 rho_g: Any, eps_g: Any, mu_g: Any, freq: float) -> Any:
        """
        Earth return potential coefficient
        :param term: CouplingTerm
        :param h_i: vertical coordinate of the source conductor [m]
        :param h_j: vertical coordinate of the target conductor [m]
        :param y_ij: horizontal separation [m]
        :param r_ext: outermost radius of the source conductor [m]
        :param rho_g: resistivity per layer, air first [Ohm.m]
        :param eps_g: permittivity per layer [F/m]
        :param mu_g: permeability per layer [H/m]
        :param freq: frequency [Hz]
        :return: potential coefficient [m/F]
        """
        li = get_layer(h_i, 'i')
        lj = get_layer(h_j, 'j')
        if li != self.s:
            raise LayerMismatchError('i', li, self.s)
        if lj != self.t:
            raise LayerMismatchError('j', lj, self.t)

        return self._evaluate(term == CouplingTerm.Self, h_i, h_j, y_ij, r_ext,
                              rho_g[1], eps_g[0], eps_g[1], mu_g[0], mu_g[1], freq)

    def nominal(self, is_self: bool, h_i: float, h_j: float, y_ij: float, r_ext: float,
                rho_e: float, eps_a: float, eps_e: float, mu_a: float, mu_e: float, freq: float) -> complex:
        """
        Nominal evaluation, see EarthImpedanceFormulation.nominal for the arguments
        :return: potential coefficient [m/F]
        """
        jw = 2j * np.pi * freq

        g_air = np.sqrt(jw * mu_a * (jw * eps_a)) if self.air_propagation else 0j
        g_earth = np.sqrt(jw * mu_e * (sigma_nominal(rho_e) + jw * eps_e)) if self.earth_propagation else 0j

        if self.s == AIR:
            g_s, g_o, mu_s, mu_o, eps_s, sigma_s = g_air, g_earth, mu_a, mu_e, eps_a, 0.0
        else:
            g_s, g_o, mu_s, mu_o, eps_s, sigma_s = g_earth, g_air, mu_e, mu_a, eps_e, sigma_nominal(rho_e)

        term = CouplingTerm.Self if is_self else CouplingTerm.Mutual
        d, D = distances(term, h_i, h_j, y_ij, r_ext)
        lam_ij = bessel_difference(g_s, d, D)

        if self.s == EARTH and abs(g_s) < TOL:
            # equipotential earth around buried conductors
            return 0j

        if self.s == AIR and self.kx == PropagationConstant.Lossless and abs(g_o) < TOL:
            # perfectly conducting earth: electrostatic images
            return lam_ij / (2.0 * np.pi * eps_a) + 0j

        if self.kx == PropagationConstant.Air:
            kx2 = -g_air * g_air
        elif self.kx == PropagationConstant.SourceLayer:
            kx2 = -g_s * g_s
        else:
            kx2 = 0j

        H = abs(h_i) + abs(h_j)
        integral = integrate_semi_infinite(potential_integrand,
                                           (H, y_ij, g_s * g_s, g_o * g_o, kx2, mu_s, mu_o),
                                           self.epsabs, self.epsrel, self.limit)

        return jw / (2.0 * np.pi * (sigma_s + jw * eps_s)) * (lam_ij + 2.0 * integral)

    def __getstate__(self):
        state = self.__dict__.copy()
        del state['_evaluate']
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)
        self._evaluate = um.wrap_complex(self.nominal)

    def __str__(self):
        return self.name

    def __repr__(self):
        return self.name


class Images(EarthAdmittanceFormulation):
    """
    Overhead conductors over a perfectly conducting earth: ln(D / d) / (2 pi eps_0)
    """
    name = 'Images'

    def __init__(self):
        EarthAdmittanceFormulation.__init__(self, s=AIR, t=AIR, kx=PropagationConstant.Lossless,
                                            air_propagation=True, earth_propagation=False)


class Pollaczek(EarthAdmittanceFormulation):
    """
    Buried conductors with a quasi static earth: the earth is equipotential and adds no coefficient
    """
    name = 'Pollaczek'

    def __init__(self):
        EarthAdmittanceFormulation.__init__(self, s=EARTH, t=EARTH, kx=PropagationConstant.Lossless,
                                            air_propagation=False, earth_propagation=False)


class Papadopoulos(EarthAdmittanceFormulation):
    """
    Full wave potential coefficients with the propagation constants of both media
    """
    name = 'Papadopoulos'

    def __init__(self, s: int = EARTH, t: int = EARTH, kx: PropagationConstant = PropagationConstant.Lossless,
                 epsabs: float = 1e-12, epsrel: float = 1e-8, limit: int = 200):
        EarthAdmittanceFormulation.__init__(self, s=s, t=t, kx=kx,
                                            air_propagation=True, earth_propagation=True,
                                            epsabs=epsabs, epsrel=epsrel, limit=limit)
