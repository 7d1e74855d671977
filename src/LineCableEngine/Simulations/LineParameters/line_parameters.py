# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
from __future__ import annotations

from typing import Union, List
import numpy as np
import pandas as pd

from LineCableEngine.basic_structures import Vec, NumTensor, Logger, CxTensor
from LineCableEngine.enumerations import LengthUnit, ParameterMode
from LineCableEngine.exceptions import ShapeMismatchError
import LineCableEngine.Utils.uncertain as um


class LineParameters:
    """
    Per unit length series impedance and shunt admittance of a multi-conductor system,
    n x n x n_frequencies, with the frequency vector.
    """

    def __init__(self, Z: NumTensor, Y: NumTensor, f: Vec,
                 logger: Union[Logger, None] = None,
                 names: Union[List[str], None] = None):
        """

        :param Z: series impedance [Ohm/m] (n x n x nf)
        :param Y: shunt admittance [S/m] (n x n x nf)
        :param f: frequencies [Hz] (nf)
        :param logger: diagnostics produced while computing the parameters
        :param names: name of every phase
        """
        f = np.atleast_1d(np.asarray(f, dtype=float))

        if (Z.ndim != 3 or Y.ndim != 3 or Z.shape[0] != Z.shape[1] or Y.shape[0] != Y.shape[1]
                or Z.shape != Y.shape or Z.shape[2] != len(f)):
            raise ShapeMismatchError(Z.shape, Y.shape, len(f))

        self.Z: NumTensor = Z
        self.Y: NumTensor = Y
        self.f: Vec = f
        self.logger: Logger = Logger() if logger is None else logger
        self.names: List[str] = ([f"{i + 1}" for i in range(Z.shape[0])] if names is None
                                 else [str(n) for n in names])

    @property
    def n_phases(self) -> int:
        return self.Z.shape[0]

    @property
    def n_frequencies(self) -> int:
        return len(self.f)

    @property
    def is_uncertain(self) -> bool:
        return self.Z.dtype == object

    def __len__(self):
        return self.n_frequencies

    def __getitem__(self, item) -> "LineParameters":
        """
        Frequency slicing: lp[k], lp[a:b] or lp[[i, j]] give a LineParameters with the selected frequencies
        """
        if isinstance(item, (int, np.integer)):
            item = slice(item, item + 1) if item != -1 else slice(item, None)
        return LineParameters(Z=self.Z[:, :, item], Y=self.Y[:, :, item], f=self.f[item],
                              logger=self.logger, names=self.names)

    def nominal(self) -> "LineParameters":
        """
        Nominal values
        :return: LineParameters of complex arrays
        """
        return LineParameters(Z=um.to_nominal(self.Z).astype(complex), Y=um.to_nominal(self.Y).astype(complex),
                              f=self.f, logger=self.logger, names=self.names)

    def std(self) -> "LineParameters":
        """
        Standard deviations, the real and imaginary deviations packed as a complex number
        :return: LineParameters of complex arrays
        """
        return LineParameters(Z=um.to_std(self.Z).astype(complex), Y=um.to_std(self.Y).astype(complex),
                              f=self.f, logger=self.logger, names=self.names)

    def get_rlcg(self, unit: LengthUnit = LengthUnit.PerKilometer, std: bool = False):
        """
        Resistance, inductance, conductance and capacitance arrays
        :param unit: LengthUnit
        :param std: return the standard deviations instead of the nominal values
        :return: R [Ohm/unit], L [H/unit], G [S/unit], C [F/unit] (n x n x nf)
        """
        data = self.std() if std else self.nominal()
        w = 2.0 * np.pi * self.f[np.newaxis, np.newaxis, :]
        factor = unit.factor
        Z: CxTensor = data.Z * factor
        Y: CxTensor = data.Y * factor
        return Z.real, Z.imag / w, Y.real, Y.imag / w

    def to_df(self, k: int = 0, mode: ParameterMode = ParameterMode.RLCG,
              unit: LengthUnit = LengthUnit.PerKilometer, std: bool = False) -> pd.DataFrame:
        """
        Table of the parameters of one frequency, one row per phase pair
        :param k: frequency index
        :param mode: ParameterMode (ZY or RLCG)
        :param unit: LengthUnit
        :param std: show the standard deviations instead of the nominal values
        :return: DataFrame
        """
        n = self.n_phases
        idx = [f"{self.names[i]}-{self.names[j]}" for i in range(n) for j in range(n)]
        u = 'km' if unit == LengthUnit.PerKilometer else 'm'

        if mode == ParameterMode.ZY:
            data = self.std() if std else self.nominal()
            Z = data.Z[:, :, k] * unit.factor
            Y = data.Y[:, :, k] * unit.factor
            return pd.DataFrame(data={f'Z [Ohm/{u}]': Z.ravel(), f'Y [S/{u}]': Y.ravel()}, index=idx)

        R, L, G, C = self.get_rlcg(unit=unit, std=std)
        return pd.DataFrame(data={f'R [Ohm/{u}]': R[:, :, k].ravel(),
                                  f'L [mH/{u}]': L[:, :, k].ravel() * 1e3,
                                  f'G [S/{u}]': G[:, :, k].ravel(),
                                  f'C [uF/{u}]': C[:, :, k].ravel() * 1e6},
                            index=idx)

    def __str__(self):
        kind = 'uncertain' if self.is_uncertain else 'nominal'
        return f"LineParameters ({kind}): {self.n_phases} phases, {self.n_frequencies} frequencies"
