# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0

from enum import Enum


class LogSeverity(Enum):
    """
    Enumeration of logs severities
    """
    Error = 'Error'
    Warning = 'Warning'
    Information = 'Information'

    def __str__(self):
        return self.value

    def __repr__(self):
        return str(self)

    @staticmethod
    def argparse(s):
        """

        :param s:
        :return:
        """
        try:
            return LogSeverity[s]
        except KeyError:
            return s


class NumericKind(Enum):
    """
    Numeric representation used for a whole computation
    """
    Float = 'Float'  # plain float / complex numpy arrays
    Uncertain = 'Uncertain'  # object arrays of uncertain floats / complex pairs

    def __str__(self):
        return self.value

    def __repr__(self):
        return str(self)

    @staticmethod
    def argparse(s):
        """

        :param s:
        :return:
        """
        try:
            return NumericKind[s]
        except KeyError:
            return s


class ConductorTerm(Enum):
    """
    Surface impedance terms of a tubular conductor
    """
    Inner = 'inner'  # inner surface impedance
    Outer = 'outer'  # outer surface impedance
    Mutual = 'mutual'  # transfer impedance between both surfaces

    def __str__(self):
        return self.value

    def __repr__(self):
        return str(self)

    @staticmethod
    def argparse(s):
        """

        :param s:
        :return:
        """
        try:
            return ConductorTerm[s]
        except KeyError:
            return s


class CouplingTerm(Enum):
    """
    Earth return terms
    """
    Self = 'self'
    Mutual = 'mutual'

    def __str__(self):
        return self.value

    def __repr__(self):
        return str(self)

    @staticmethod
    def argparse(s):
        """

        :param s:
        :return:
        """
        try:
            return CouplingTerm[s]
        except KeyError:
            return s


class PropagationConstant(Enum):
    """
    Longitudinal propagation constant assumed by the earth return kernels
    """
    Lossless = 0  # kx = 0
    Air = 1  # kx from the air layer
    SourceLayer = 2  # kx from the layer hosting the source conductor

    def __str__(self):
        return self.name

    def __repr__(self):
        return str(self)

    @staticmethod
    def argparse(s):
        """

        :param s:
        :return:
        """
        try:
            return PropagationConstant[s]
        except KeyError:
            return s


class LengthUnit(Enum):
    """
    Per unit length reference of the displayed parameters
    """
    PerMeter = 'per_m'
    PerKilometer = 'per_km'

    def __str__(self):
        return self.value

    def __repr__(self):
        return str(self)

    @property
    def factor(self) -> float:
        """
        Multiplier that passes from per metre values to this unit
        :return: float
        """
        return 1000.0 if self == LengthUnit.PerKilometer else 1.0

    @staticmethod
    def argparse(s):
        """

        :param s:
        :return:
        """
        try:
            return LengthUnit[s]
        except KeyError:
            return s


class ParameterMode(Enum):
    """
    Display mode of the line parameters
    """
    ZY = 'ZY'  # complex impedance and admittance
    RLCG = 'RLCG'  # resistance, inductance, conductance and capacitance

    def __str__(self):
        return self.value

    def __repr__(self):
        return str(self)

    @staticmethod
    def argparse(s):
        """

        :param s:
        :return:
        """
        try:
            return ParameterMode[s]
        except KeyError:
            return s
