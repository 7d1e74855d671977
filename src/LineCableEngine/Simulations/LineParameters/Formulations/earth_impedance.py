# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
"""
Earth return impedance formulations.

Geometry convention: h > 0 above ground (air, layer 1), h < 0 below ground (earth, layer 2).
The earth properties are the per layer vectors of one frequency, air first, as left by the EHEM reduction.

The integral kernels (Papadopoulos, Pollaczek, Carson) are the reference. They evaluate

    same layer:   Z = (jw mu_s / 2 pi) [ K0(g_s d) - K0(g_s D) + 2 int_0^inf F(l) cos(y l) dl ]
                  F = mu_o exp(-a_s H) / (a_s mu_o + a_o mu_s)
    cross layer:  Z = (jw mu_s mu_o / pi) int_0^inf exp(-a_s h_s - a_o h_o) / (a_s mu_o + a_o mu_s) cos(y l) dl

with a = sqrt(l^2 + g^2 + kx^2). The closed forms (SimpleCarson, FullCarson, DeriEarth) are algebraic,
valid for overhead conductors above a homogeneous earth only, and lose accuracy with respect to the kernels
as the frequency or the conductor height grow.
"""
from __future__ import annotations

from typing import Any, Tuple
import numpy as np
import numba as nb
from scipy.integrate import quad

from LineCableEngine.constants import MU_0, BESSEL_SMALL_ARG
from LineCableEngine.enumerations import CouplingTerm, PropagationConstant
from LineCableEngine.exceptions import LayerMismatchError, InterfaceConductorError, ConfigurationError
import LineCableEngine.Utils.uncertain as um
from LineCableEngine.Utils.bessel import besselk

AIR = 1
EARTH = 2


def get_layer(h: Any, which: str = '') -> int:
    """
    Layer hosting a conductor
    :param h: vertical coordinate [m]
    :param which: conductor identifier for the error message
    :return: 1 (air) or 2 (earth)
    """
    h0 = um.nominal(h)
    if h0 > 0:
        return AIR
    elif h0 < 0:
        return EARTH
    else:
        raise InterfaceConductorError(which)


def sigma_nominal(rho: float) -> float:
    """
    Conductivity with inf -> 0 and 0 -> inf
    """
    if np.isinf(rho):
        return 0.0
    if rho == 0.0:
        return np.inf
    return 1.0 / rho


def bessel_difference(gamma: complex, d: float, D: float) -> complex:
    """
    Perfect conductor term K0(gamma d) - K0(gamma D), ln(D / d) in the quasi static limit
    :param gamma: propagation constant of the source layer [1/m]
    :param d: conductor to conductor distance [m]
    :param D: conductor to image distance [m]
    :return: complex
    """
    if abs(gamma) * max(d, D) < BESSEL_SMALL_ARG:
        return complex(np.log(D / d))
    return besselk.nominal(0, gamma * d) - besselk.nominal(0, gamma * D)


def distances(term: CouplingTerm, h_i: float, h_j: float, y_ij: float, r_ext: float) -> Tuple[float, float]:
    """
    Direct and image distances
    :param term: CouplingTerm
    :param h_i: vertical coordinate of conductor i [m]
    :param h_j: vertical coordinate of conductor j [m]
    :param y_ij: horizontal separation [m]
    :param r_ext: outermost radius of conductor i (self term only) [m]
    :return: d, D
    """
    hi = abs(h_i)
    hj = abs(h_j)
    if term == CouplingTerm.Self:
        return r_ext, hi + hj
    return np.hypot(y_ij, hi - hj), np.hypot(y_ij, hi + hj)


@nb.njit(cache=True)
def same_layer_integrand(lam, H, y, gs2, go2, kx2, mu_s, mu_o):
    """
    F(l) cos(y l) for conductors in the same layer
    """
    a_s = np.sqrt(lam * lam + gs2 + kx2)
    a_o = np.sqrt(lam * lam + go2 + kx2)
    return mu_o * np.exp(-a_s * H) / (a_s * mu_o + a_o * mu_s) * np.cos(y * lam)


@nb.njit(cache=True)
def cross_layer_integrand(lam, h_s, h_o, y, gs2, go2, kx2, mu_s, mu_o):
    """
    Kernel for a source and a target on opposite sides of the interface
    """
    a_s = np.sqrt(lam * lam + gs2 + kx2)
    a_o = np.sqrt(lam * lam + go2 + kx2)
    return np.exp(-a_s * h_s - a_o * h_o) / (a_s * mu_o + a_o * mu_s) * np.cos(y * lam)


def integrate_semi_infinite(func, args, epsabs: float, epsrel: float, limit: int) -> complex:
    """
    int_0^inf func(l, *args) dl for a complex valued func, real and imaginary parts integrated apart
    :param func: integrand
    :param args: extra arguments
    :param epsabs: absolute tolerance
    :param epsrel: relative tolerance
    :param limit: maximum number of subintervals
    :return: complex
    """
    re = quad(lambda lam: func(lam, *args).real, 0.0, np.inf, epsabs=epsabs, epsrel=epsrel, limit=limit)[0]
    im = quad(lambda lam: func(lam, *args).imag, 0.0, np.inf, epsabs=epsabs, epsrel=epsrel, limit=limit)[0]
    return complex(re, im)


class EarthImpedanceFormulation:
    """
    Base of the earth return impedance formulations.

    Subclasses implement the nominal evaluation on plain floats; uncertain inputs are propagated
    around it with numerical partial derivatives (see wrap_complex).
    """
    name = 'Earth impedance'

    def __init__(self):
        self._evaluate = um.wrap_complex(self.nominal)

    def __call__(self, term: CouplingTerm, h_i: Any, h_j: Any, y_ij: Any, r_ext: Any,
                 rho_g: Any, eps_g: Any, mu_g: Any, freq: float) -> Any:
        """
        Earth return impedance
        :param term: CouplingTerm (Self: h_i == h_j, y_ij = 0)
        :param h_i: vertical coordinate of the source conductor [m]
        :param h_j: vertical coordinate of the target conductor [m]
        :param y_ij: horizontal separation [m]
        :param r_ext: outermost radius of the source conductor [m]
        :param rho_g: resistivity per layer, air first [Ohm.m]
        :param eps_g: permittivity per layer [F/m]
        :param mu_g: permeability per layer [H/m]
        :param freq: frequency [Hz]
        :return: impedance [Ohm/m]
        """
        self.check_layers(h_i, h_j)
        return self._evaluate(term == CouplingTerm.Self, h_i, h_j, y_ij, r_ext,
                              rho_g[1], eps_g[0], eps_g[1], mu_g[0], mu_g[1], freq)

    def check_layers(self, h_i: Any, h_j: Any) -> None:
        """
        Validate the conductor layers against the formulation configuration
        """
        pass

    def nominal(self, is_self: bool, h_i: float, h_j: float, y_ij: float, r_ext: float,
                rho_e: float, eps_a: float, eps_e: float, mu_a: float, mu_e: float, freq: float) -> complex:
        """
        Nominal evaluation
        :param is_self: self (True) or mutual (False) term
        :param h_i: vertical coordinate of the source conductor [m]
        :param h_j: vertical coordinate of the target conductor [m]
        :param y_ij: horizontal separation [m]
        :param r_ext: outermost radius of the source conductor [m]
        :param rho_e: earth resistivity [Ohm.m]
        :param eps_a: air permittivity [F/m]
        :param eps_e: earth permittivity [F/m]
        :param mu_a: air permeability [H/m]
        :param mu_e: earth permeability [H/m]
        :param freq: frequency [Hz]
        :return: impedance [Ohm/m]
        """
        raise NotImplementedError()

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


class HomogeneousEarthKernel(EarthImpedanceFormulation):
    """
    Semi-infinite integral kernel for a homogeneous earth under an air half space
    """
    name = 'Homogeneous earth kernel'

    def __init__(self,
                 s: int = EARTH,
                 t: int = EARTH,
                 kx: PropagationConstant = PropagationConstant.Lossless,
                 air_propagation: bool = True,
                 earth_permittivity: bool = True,
                 earth_permeability: bool = True,
                 epsabs: float = 1e-12,
                 epsrel: float = 1e-8,
                 limit: int = 200):
        """

        :param s: layer of the source conductor (1: air, 2: earth)
        :param t: layer of the target conductor (1: air, 2: earth)
        :param kx: longitudinal propagation constant assumption
        :param air_propagation: use the air propagation constant (False: quasi static air)
        :param earth_permittivity: include the displacement currents of the earth
        :param earth_permeability: use the earth permeability (False: mu_0)
        :param epsabs: absolute tolerance of the quadrature
        :param epsrel: relative tolerance of the quadrature
        :param limit: maximum number of subintervals of the quadrature
        """
        if s not in (AIR, EARTH) or t not in (AIR, EARTH):
            raise ConfigurationError(f"Layers must be 1 (air) or 2 (earth), got s={s}, t={t}")

        EarthImpedanceFormulation.__init__(self)
        self.s = s
        self.t = t
        self.kx = kx
        self.air_propagation = air_propagation
        self.earth_permittivity = earth_permittivity
        self.earth_permeability = earth_permeability
        self.epsabs = epsabs
        self.epsrel = epsrel
        self.limit = limit

    def check_layers(self, h_i, h_j):
        li = get_layer(h_i, 'i')
        lj = get_layer(h_j, 'j')
        if li != self.s:
            raise LayerMismatchError('i', li, self.s)
        if lj != self.t:
            raise LayerMismatchError('j', lj, self.t)

    def media(self, rho_e, eps_a, eps_e, mu_a, mu_e, freq):
        """
        Propagation constants and permeabilities of the air and the earth
        :return: gamma_air, gamma_earth, mu_air, mu_earth
        """
        w = 2.0 * np.pi * freq
        jw = 1j * w
        mu_e = mu_e if self.earth_permeability else MU_0
        eps_e = eps_e if self.earth_permittivity else 0.0

        g_air = np.sqrt(jw * mu_a * (jw * eps_a)) if self.air_propagation else 0j
        g_earth = np.sqrt(jw * mu_e * (sigma_nominal(rho_e) + jw * eps_e))
        return g_air, g_earth, mu_a, mu_e

    def kx2(self, g_air, g_s):
        if self.kx == PropagationConstant.Air:
            return -g_air * g_air
        elif self.kx == PropagationConstant.SourceLayer:
            return -g_s * g_s
        return 0j

    def nominal(self, is_self, h_i, h_j, y_ij, r_ext, rho_e, eps_a, eps_e, mu_a, mu_e, freq):
        g_air, g_earth, mu_air, mu_earth = self.media(rho_e, eps_a, eps_e, mu_a, mu_e, freq)
        jw = 2j * np.pi * freq

        gamma = {AIR: g_air, EARTH: g_earth}
        mu = {AIR: mu_air, EARTH: mu_earth}
        o = AIR if self.s == EARTH else EARTH
        g_s, g_o = gamma[self.s], gamma[o]
        mu_s, mu_o = mu[self.s], mu[o]
        kx2 = self.kx2(g_air, g_s)

        if self.s == self.t:
            term = CouplingTerm.Self if is_self else CouplingTerm.Mutual
            d, D = distances(term, h_i, h_j, y_ij, r_ext)
            lam_ij = bessel_difference(g_s, d, D)
            H = abs(h_i) + abs(h_j)
            integral = integrate_semi_infinite(same_layer_integrand,
                                               (H, y_ij, g_s * g_s, g_o * g_o, kx2, mu_s, mu_o),
                                               self.epsabs, self.epsrel, self.limit)
            return (jw * mu_s / (2.0 * np.pi)) * (lam_ij + 2.0 * integral)
        else:
            integral = integrate_semi_infinite(cross_layer_integrand,
                                               (abs(h_i), abs(h_j), y_ij, g_s * g_s, g_o * g_o, kx2, mu_s, mu_o),
                                               self.epsabs, self.epsrel, self.limit)
            return (jw * mu_s * mu_o / np.pi) * integral


class Papadopoulos(HomogeneousEarthKernel):
    """
    Full wave kernel: propagation constants of both media with displacement currents
    """
    name = 'Papadopoulos'

    def __init__(self, s: int = EARTH, t: int = EARTH, kx: PropagationConstant = PropagationConstant.Lossless,
                 epsabs: float = 1e-12, epsrel: float = 1e-8, limit: int = 200):
        HomogeneousEarthKernel.__init__(self, s=s, t=t, kx=kx,
                                        air_propagation=True, earth_permittivity=True, earth_permeability=True,
                                        epsabs=epsabs, epsrel=epsrel, limit=limit)


class Pollaczek(HomogeneousEarthKernel):
    """
    Quasi static kernel for buried conductors: no air propagation, no earth displacement currents, mu_0 earth
    """
    name = 'Pollaczek'

    def __init__(self, s: int = EARTH, t: int = EARTH,
                 epsabs: float = 1e-12, epsrel: float = 1e-8, limit: int = 200):
        HomogeneousEarthKernel.__init__(self, s=s, t=t, kx=PropagationConstant.Lossless,
                                        air_propagation=False, earth_permittivity=False, earth_permeability=False,
                                        epsabs=epsabs, epsrel=epsrel, limit=limit)


class Carson(HomogeneousEarthKernel):
    """
    Carson integral for overhead conductors (quasi static)
    """
    name = 'Carson'

    def __init__(self, epsabs: float = 1e-12, epsrel: float = 1e-8, limit: int = 200):
        HomogeneousEarthKernel.__init__(self, s=AIR, t=AIR, kx=PropagationConstant.Lossless,
                                        air_propagation=False, earth_permittivity=False, earth_permeability=False,
                                        epsabs=epsabs, epsrel=epsrel, limit=limit)


class OverheadClosedForm(EarthImpedanceFormulation):
    """
    Base of the algebraic earth return formulas. They are derived for conductors above a homogeneous
    earth, so both conductors must be in the air.
    """
    name = 'Overhead closed form'

    def check_layers(self, h_i, h_j):
        for which, h in (('i', h_i), ('j', h_j)):
            layer = get_layer(h, which)
            if layer != AIR:
                raise LayerMismatchError(which, layer, AIR)


class SimpleCarson(OverheadClosedForm):
    """
    Simplified Carson: wμ0/8 + j wμ0/2π ln(De / d) with De = 658.5 sqrt(rho / f).
    Homogeneous earth, low frequency only.
    """
    name = 'Simple Carson'

    def nominal(self, is_self, h_i, h_j, y_ij, r_ext, rho_e, eps_a, eps_e, mu_a, mu_e, freq):
        w = 2.0 * np.pi * freq
        De = 658.5 * np.sqrt(rho_e / freq)
        term = CouplingTerm.Self if is_self else CouplingTerm.Mutual
        d, D = distances(term, h_i, h_j, y_ij, r_ext)
        return w * MU_0 / 8.0 + 1j * (w * MU_0 / (2.0 * np.pi)) * np.log(De / d)


class FullCarson(OverheadClosedForm):
    """
    Carson series (EMTP theory book, eq. 4.10 - 4.14) on top of the lossless image term.
    The series is summed until the increment is below err_tol; for a > 5 the asymptotic expansion is used.
    """
    name = 'Full Carson'

    def __init__(self, err_tol: float = 1e-9, max_terms: int = 1000):
        """

        :param err_tol: convergence tolerance of the series
        :param max_terms: maximum number of terms
        """
        OverheadClosedForm.__init__(self)
        self.err_tol = err_tol
        self.max_terms = max_terms

    def correction(self, a: float, phi: float) -> Tuple[float, float]:
        """
        Carson correction terms P and Q
        :param a: 4 pi sqrt(5) 1e-4 D sqrt(f / rho)
        :param phi: angle between the image line and the vertical [rad]
        :return: P, Q
        """
        if a > 5.0:
            s2 = np.sqrt(2.0)
            P = (np.cos(phi) / s2 / a - np.cos(2 * phi) / a ** 2 + np.cos(3 * phi) / s2 / a ** 3
                 + 3 * np.cos(5 * phi) / s2 / a ** 5)
            Q = (np.cos(phi) / s2 / a - np.cos(3 * phi) / s2 / a ** 3 + 3 * np.cos(5 * phi) / s2 / a ** 5)
            return P, Q

        ln_a = np.log(a)
        b = {1: np.sqrt(2.0) / 6.0, 2: 1.0 / 16.0}
        c = {2: 1.3659315}

        P = np.pi / 8.0 - b[1] * a * np.cos(phi)
        Q = 0.5 * (0.6159315 - ln_a) + b[1] * a * np.cos(phi)

        sign = 1.0
        for i in range(2, self.max_terms):
            if i > 2:
                if i % 4 == 1:
                    sign = -sign
                b[i] = sign * b[i - 2] / (i * (i + 2))
            if i % 2 == 0 and i > 2:
                c[i] = c[i - 2] + 1.0 / i + 1.0 / (i + 2)
            d_i = np.pi / 4.0 * b[i]

            ai_cos = a ** i * np.cos(i * phi)
            ai_sin = a ** i * np.sin(i * phi)

            k = i % 4
            if k == 1:
                dP = -b[i] * ai_cos
                dQ = b[i] * ai_cos
            elif k == 2:
                dP = b[i] * ((c[i] - ln_a) * ai_cos + phi * ai_sin)
                dQ = -d_i * ai_cos
            elif k == 3:
                dP = b[i] * ai_cos
                dQ = b[i] * ai_cos
            else:
                dP = -d_i * ai_cos
                dQ = -b[i] * ((c[i] - ln_a) * ai_cos + phi * ai_sin)

            P += dP
            Q += dQ

            if np.hypot(dP, dQ) < self.err_tol:
                break

        return P, Q

    def nominal(self, is_self, h_i, h_j, y_ij, r_ext, rho_e, eps_a, eps_e, mu_a, mu_e, freq):
        w = 2.0 * np.pi * freq
        term = CouplingTerm.Self if is_self else CouplingTerm.Mutual
        d, D = distances(term, h_i, h_j, y_ij, r_ext)
        phi = 0.0 if is_self else np.arccos((abs(h_i) + abs(h_j)) / D)
        a = 4.0 * np.pi * np.sqrt(5.0) * 1e-4 * D * np.sqrt(freq / rho_e)
        P, Q = self.correction(a, phi)
        return 1j * (w * MU_0 / (2.0 * np.pi)) * np.log(D / d) + (w * MU_0 / np.pi) * (P + 1j * Q)


class DeriEarth(OverheadClosedForm):
    """
    Complex penetration depth p = sqrt(rho / (jw mu)): the earth is replaced by a perfect conductor
    at depth p, Z = j w mu0 / 2 pi ln(D' / d) with images at 2 (h + p)
    """
    name = 'Deri earth (complex depth)'

    def nominal(self, is_self, h_i, h_j, y_ij, r_ext, rho_e, eps_a, eps_e, mu_a, mu_e, freq):
        w = 2.0 * np.pi * freq
        p = np.sqrt(rho_e / (1j * w * mu_e))
        term = CouplingTerm.Self if is_self else CouplingTerm.Mutual
        d, D = distances(term, h_i, h_j, y_ij, r_ext)
        D_c = np.sqrt((abs(h_i) + abs(h_j) + 2.0 * p) ** 2 + y_ij ** 2)
        return 1j * (w * MU_0 / (2.0 * np.pi)) * np.log(D_c / d)
