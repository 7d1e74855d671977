# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
"""
Internal (surface) impedance of tubular and solid conductors.

Every formulation returns, per unit length [Ohm/m]:
    ConductorTerm.Inner   impedance seen from the inner surface (0 for solid conductors)
    ConductorTerm.Outer   impedance seen from the outer surface
    ConductorTerm.Mutual  transfer impedance between both surfaces (0 for solid conductors)
"""
from __future__ import annotations

from typing import Any
import numpy as np

from LineCableEngine.constants import MU_0, TOL, DERI_ALPHA_MAX
from LineCableEngine.enumerations import ConductorTerm
import LineCableEngine.Utils.uncertain as um
from LineCableEngine.Utils.bessel import besseli, besselix, besselkx


def to_sigma(rho: Any) -> Any:
    """
    Conductivity from resistivity, with inf -> 0 and 0 -> inf
    :param rho: resistivity [Ohm.m]
    :return: conductivity [S/m]
    """
    rho0 = um.nominal(rho)
    if np.isinf(rho0):
        return 0.0
    if rho0 == 0.0:
        return np.inf
    return 1.0 / rho


def is_solid(r_in: Any) -> bool:
    """
    A bore smaller than TOL does not exist
    :param r_in: inner radius [m]
    :return: bool
    """
    return um.isapprox(r_in, 0.0, atol=TOL)


def dc_resistance(r_in: Any, r_ex: Any, rho: Any) -> Any:
    """
    DC resistance per unit length of a tube or a solid conductor
    :param r_in: inner radius [m]
    :param r_ex: outer radius [m]
    :param rho: resistivity [Ohm.m]
    :return: resistance [Ohm/m]
    """
    if is_solid(r_in):
        area = np.pi * r_ex ** 2
    else:
        area = np.pi * (r_ex ** 2 - r_in ** 2)
    return rho / area


class InternalImpedanceFormulation:
    """
    Base of the internal impedance formulations
    """
    name = 'Internal impedance'

    def __call__(self, term: ConductorTerm, r_in: Any, r_ex: Any, rho_c: Any, mu_r: Any, jw: complex) -> Any:
        """
        Evaluate one of the three terms
        :param term: ConductorTerm
        :param r_in: inner radius [m]
        :param r_ex: outer radius [m]
        :param rho_c: resistivity [Ohm.m]
        :param mu_r: relative permeability [-]
        :param jw: complex angular frequency j*2*pi*f [rad/s]
        :return: impedance [Ohm/m]
        """
        if term == ConductorTerm.Inner:
            return self.inner(r_in, r_ex, rho_c, mu_r, jw)
        elif term == ConductorTerm.Outer:
            return self.outer(r_in, r_ex, rho_c, mu_r, jw)
        elif term == ConductorTerm.Mutual:
            return self.mutual(r_in, r_ex, rho_c, mu_r, jw)
        else:
            raise ValueError(f"Unknown internal impedance term: {term}")

    def inner(self, r_in, r_ex, rho_c, mu_r, jw):
        raise NotImplementedError()

    def outer(self, r_in, r_ex, rho_c, mu_r, jw):
        raise NotImplementedError()

    def mutual(self, r_in, r_ex, rho_c, mu_r, jw):
        raise NotImplementedError()

    def __str__(self):
        return self.name

    def __repr__(self):
        return self.name


class ScaledBessel(InternalImpedanceFormulation):
    """
    Schelkunoff surface impedances of a tubular conductor written with exponentially scaled
    modified Bessel functions, stable for large |m r| (high frequency, thick conductors).

    With m = sqrt(jw mu sigma), w_in = m r_in and w_ex = m r_ex, the exponential factors of
    I(w) = Ix(w) exp(|Re w|) and K(w) = Kx(w) exp(-w) are collected in

        sc_in = exp(|Re w_in| - w_ex)
        sc_ex = exp(|Re w_ex| - w_in)
        sc = sc_in / sc_ex

    so that only ratios of bounded quantities are ever formed.
    """
    name = 'Scaled Bessel (Schelkunoff)'

    @staticmethod
    def _arguments(r_in, r_ex, rho_c, mu_r, jw):
        mu_c = MU_0 * um.lift(mu_r)
        sigma_c = um.lift(to_sigma(rho_c))
        m = um.sqrt(jw * mu_c * sigma_c)
        return mu_c, sigma_c, m, m * um.lift(r_ex)

    @staticmethod
    def _scales(w_in, w_ex):
        sc_in = um.exp(um.fabs(um.real(w_in)) - w_ex)
        sc_ex = um.exp(um.fabs(um.real(w_ex)) - w_in)
        return sc_in, sc_ex, sc_in / sc_ex

    def inner(self, r_in, r_ex, rho_c, mu_r, jw):
        if is_solid(r_in):
            # the bore does not exist
            return 0j

        mu_c, sigma_c, m, w_ex = self._arguments(r_in, r_ex, rho_c, mu_r, jw)
        w_in = m * um.lift(r_in)
        sc_in, sc_ex, sc = self._scales(w_in, w_ex)

        N = besselkx(0, w_in) * besselix(1, w_ex) + sc * besselix(0, w_in) * besselkx(1, w_ex)
        D = besselkx(1, w_in) * besselix(1, w_ex) - sc * besselix(1, w_in) * besselkx(1, w_ex)

        return (jw * mu_c / (2.0 * np.pi)) * (1.0 / w_in) * (N / D)

    def outer(self, r_in, r_ex, rho_c, mu_r, jw):
        mu_c, sigma_c, m, w_ex = self._arguments(r_in, r_ex, rho_c, mu_r, jw)

        if is_solid(r_in):
            N = besselix(0, w_ex)
            D = besselix(1, w_ex)
        else:
            w_in = m * um.lift(r_in)
            sc_in, sc_ex, sc = self._scales(w_in, w_ex)
            N = besselix(0, w_ex) * besselkx(1, w_in) + sc * besselkx(0, w_ex) * besselix(1, w_in)
            D = besselix(1, w_ex) * besselkx(1, w_in) - sc * besselkx(1, w_ex) * besselix(1, w_in)

        return (jw * mu_c / (2.0 * np.pi)) * (1.0 / w_ex) * (N / D)

    def mutual(self, r_in, r_ex, rho_c, mu_r, jw):
        if is_solid(r_in):
            return 0j

        mu_c, sigma_c, m, w_ex = self._arguments(r_in, r_ex, rho_c, mu_r, jw)
        w_in = m * um.lift(r_in)
        sc_in, sc_ex, sc = self._scales(w_in, w_ex)

        N = 1.0 / sc_ex
        D = besselix(1, w_ex) * besselkx(1, w_in) - sc * besselix(1, w_in) * besselkx(1, w_ex)

        return (1.0 / (2.0 * np.pi * um.lift(r_in) * um.lift(r_ex) * sigma_c)) * (N / D)


class SimpleSkin(InternalImpedanceFormulation):
    """
    Low frequency approximation, uniform current density:
    Rdc + jw mu / 8 pi on the outer surface.
    Tubes return Rdc for the inner and transfer terms, which is their DC limit.
    """
    name = 'Simple skin (uniform current)'

    def inner(self, r_in, r_ex, rho_c, mu_r, jw):
        if is_solid(r_in) or um.nominal(rho_c) == 0.0:
            return 0j
        return um.lift(dc_resistance(r_in, r_ex, rho_c)) + 0j

    def outer(self, r_in, r_ex, rho_c, mu_r, jw):
        if um.nominal(rho_c) == 0.0:
            return 0j
        rdc = um.lift(dc_resistance(r_in, r_ex, rho_c))
        return rdc + jw * MU_0 * um.lift(mu_r) / (8.0 * np.pi)

    def mutual(self, r_in, r_ex, rho_c, mu_r, jw):
        return self.inner(r_in, r_ex, rho_c, mu_r, jw)


class DeriSkin(SimpleSkin):
    """
    Deri style approximation: the conductor is replaced by a solid one with the same DC resistance,
    alpha = sqrt(jw mu / (pi Rdc)) and Z = Rdc alpha I0(alpha) / (2 I1(alpha)).
    The Bessel ratio tends to 1 for |alpha| > 35.
    Inner and transfer terms are the DC limits, as in SimpleSkin.
    """
    name = 'Deri skin (equivalent solid conductor)'

    def outer(self, r_in, r_ex, rho_c, mu_r, jw):
        if um.nominal(rho_c) == 0.0:
            return 0j

        rdc = um.lift(dc_resistance(r_in, r_ex, rho_c))
        mu_c = MU_0 * um.lift(mu_r)
        alpha = um.sqrt(jw * mu_c / (np.pi * rdc))

        if abs(um.nominal(alpha)) > DERI_ALPHA_MAX:
            ratio = 1.0
        else:
            i1 = besseli(1, alpha)
            ratio = 1.0 if um.nominal(i1) == 0 else besseli(0, alpha) / i1

        return alpha * rdc * ratio / 2.0
