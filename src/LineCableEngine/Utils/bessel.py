# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
"""
Bessel functions accepting plain or uncertain arguments.

Every function has two entry points:

    besseli.nominal(nu, z)  -> plain scipy evaluation, no propagation whatsoever
    besseli(nu, z)          -> same value, plus the first order propagated uncertainty if z carries any

For an uncertain complex argument the function is evaluated at the nominal point and linearized with the
four numerical partial derivatives of (Re f, Im f) with respect to (Re z, Im z), computed by uncertainties.wrap.
For an uncertain real argument a single numerical derivative is used.

The scaled variants follow the scipy convention:
    besselix(nu, z) = I_nu(z) * exp(-|Re z|)
    besselkx(nu, z) = K_nu(z) * exp(z)
"""
from __future__ import annotations

from typing import Any, Callable
import numpy as np
import scipy.special as sp
import uncertainties
from uncertainties import UFloat

from LineCableEngine.Utils.uncertain import UComplex, nominal


class BesselFunction:
    """
    Uncertainty aware wrapper of a scipy Bessel function f(nu, z)
    """

    def __init__(self, name: str, func: Callable):
        """

        :param name: function name for display
        :param func: scipy.special function of (order, argument)
        """
        self.name = name
        self.func = func

        # real argument with real result
        self._real = uncertainties.wrap(self._eval_real)

        # complex argument split in its two real coordinates
        self._re = uncertainties.wrap(self._eval_re)
        self._im = uncertainties.wrap(self._eval_im)

    def _eval_real(self, nu, x) -> float:
        return float(np.real(self.func(nu, x)))

    def _eval_re(self, nu, x, y) -> float:
        return float(np.real(self.func(nu, complex(x, y))))

    def _eval_im(self, nu, x, y) -> float:
        return float(np.imag(self.func(nu, complex(x, y))))

    def nominal(self, nu: float, z: Any) -> Any:
        """
        Plain evaluation at the nominal value of the argument
        :param nu: order
        :param z: argument
        :return: float or complex
        """
        return self.func(nu, nominal(z))

    def __call__(self, nu: float, z: Any) -> Any:
        """
        Evaluation with first order uncertainty propagation
        :param nu: order
        :param z: float, complex, UFloat or UComplex argument
        :return: float, complex or UComplex
        """
        if isinstance(z, UComplex):
            x, y = z.real, z.imag
            if not isinstance(x, UFloat) and not isinstance(y, UFloat):
                return self.func(nu, complex(x, y))
            return UComplex(self._re(nu, x, y), self._im(nu, x, y))

        if isinstance(z, UFloat):
            if z.std_dev == 0.0:
                return self.func(nu, z.nominal_value)
            return self._real(nu, z)

        return self.func(nu, z)

    def __repr__(self):
        return self.name


besseli = BesselFunction('I', sp.iv)
besselk = BesselFunction('K', sp.kv)
besselix = BesselFunction('Ix', sp.ive)
besselkx = BesselFunction('Kx', sp.kve)
