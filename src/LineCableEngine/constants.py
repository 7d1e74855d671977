# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
"""
Physical constants and engine wide defaults
"""
import numpy as np

MU_0 = 4.0 * np.pi * 1e-7  # magnetic constant [H/m]
EPS_0 = 8.8541878128e-12  # electric constant [F/m]
RHO_CU = 1.724e-8  # annealed copper resistivity [Ohm.m]
T_0 = 20.0  # reference temperature of the material properties [°C]
DELTA_T_MAX = 150.0  # maximum deviation from T_0 accepted by the validation [°C]
F_WARN = 1e8  # frequencies above this are flagged as suspicious [Hz]

# radii closer than this are considered equal (solid conductors, bare conductors) [m]
TOL = 1e-6

# nominal value of |gamma| * distance below which K0 differences are replaced by logarithms
BESSEL_SMALL_ARG = 1e-6

# Bessel ratio saturation used by the Deri skin effect approximation
DERI_ALPHA_MAX = 35.0
