# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
from __future__ import annotations

from typing import Any, Union
import numpy as np

from LineCableEngine.basic_structures import Logger, Vec
from LineCableEngine.constants import T_0, DELTA_T_MAX, F_WARN, TOL
from LineCableEngine.exceptions import InputValidationError
from LineCableEngine.Devices.cable_system import LineCableSystem
from LineCableEngine.Devices.earth_model import EarthModel
from LineCableEngine.Utils.uncertain import nominal


def _finite(value: Any) -> bool:
    return bool(np.isfinite(nominal(value)))


class LineParametersProblem:
    """
    Cable system, earth model and frequencies of a line parameters computation
    """

    def __init__(self, system: LineCableSystem, earth_model: EarthModel, frequencies: Union[Vec, None] = None):
        """

        :param system: LineCableSystem
        :param earth_model: EarthModel
        :param frequencies: frequencies [Hz], if None the earth model frequencies are used
        """
        self.system = system
        self.earth_model = earth_model
        self.frequencies = (earth_model.frequencies if frequencies is None
                            else np.atleast_1d(np.asarray(frequencies, dtype=float)))

    @property
    def temperature(self) -> Any:
        return self.system.temperature

    def check(self, logger: Union[Logger, None] = None) -> None:
        """
        Validate the problem before any formulation runs.
        Hard errors raise InputValidationError, suspicious values are logged as warnings.
        :param logger: Logger (a new one if None)
        """
        logger = Logger() if logger is None else logger
        self.check_frequencies(logger)
        self.check_system()
        self.check_earth()

    def check_frequencies(self, logger: Logger) -> None:
        f = self.frequencies

        if len(f) == 0:
            raise InputValidationError('frequencies', '[]', "At least one frequency is required")

        if np.any(~np.isfinite(f)) or np.any(f <= 0):
            raise InputValidationError('frequencies', f, "Frequencies must be positive and finite")

        if len(f) > 1 and np.any(np.diff(f) <= 0):
            raise InputValidationError('frequencies', f, "Frequencies must be sorted in increasing order")

        for fk in f:
            if fk > F_WARN:
                logger.add_warning("Frequency beyond the validity of the quasi-TEM formulations",
                                   device='frequencies', value=fk, expected_value=f"<={F_WARN}",
                                   frequency=fk)

    def check_system(self) -> None:
        system = self.system

        if system.n_cables == 0:
            raise InputValidationError('cables', 0, "The system has no cables")

        n_phases = system.n_phases
        phase_map = np.array(system.phase_map, dtype=int)

        if len(phase_map) != n_phases:
            raise InputValidationError('conn', list(phase_map),
                                       f"Every component needs a phase label ({n_phases} components)")

        if not np.any(phase_map > 0):
            raise InputValidationError('conn', list(phase_map), "At least one phase label must be positive")

        if np.any(phase_map < 0) or np.any(phase_map > n_phases):
            raise InputValidationError('conn', list(phase_map),
                                       f"Phase labels must lie between 0 and {n_phases}")

        dT = nominal(system.temperature) - T_0
        if abs(dT) >= DELTA_T_MAX:
            raise InputValidationError('temperature', system.temperature,
                                       f"The operating temperature must lie within {T_0} +/- {DELTA_T_MAX} °C")

        for c, cable in enumerate(system.cables):
            design = cable.design

            if design.n_components == 0:
                raise InputValidationError(f'cable {c}', design.name, "The cable has no components")

            if not _finite(cable.horz) or not _finite(cable.vert):
                raise InputValidationError(f'cable {c} position', (cable.horz, cable.vert),
                                           "Cable coordinates must be finite")

            if len(cable.conn) != design.n_components:
                raise InputValidationError(f'cable {c} conn', cable.conn,
                                           f"One phase label per component is required ({design.n_components})")

            r_prev = 0.0
            for k, comp in enumerate(design.components):
                self.check_component(f'cable {c} component {k} ({comp.name})', comp, r_prev)
                r_prev = nominal(comp.insulator.r_ext)

        # cables must not overlap
        for a in range(system.n_cables):
            ca = system.cables[a]
            for b in range(a + 1, system.n_cables):
                cb = system.cables[b]
                d = np.hypot(nominal(ca.horz) - nominal(cb.horz), nominal(ca.vert) - nominal(cb.vert))
                r = nominal(ca.design.outer_radius) + nominal(cb.design.outer_radius)
                if d < r - TOL:
                    raise InputValidationError(f'cables {a} and {b}', d,
                                               f"The cables overlap (the centre distance must be at least {r})")

    @staticmethod
    def check_component(field: str, comp, r_prev: float) -> None:
        """
        Geometry and material checks of one component
        :param field: name of the component for the messages
        :param comp: CableComponent
        :param r_prev: outer radius of the previous component [m]
        """
        cond = comp.conductor
        ins = comp.insulator

        values = [cond.r_in, cond.r_ext, cond.rho, cond.mu_r, cond.eps_r, cond.alpha,
                  ins.r_in, ins.r_ext, ins.eps_r, ins.mu_r, ins.tan_delta]
        if not all(_finite(v) for v in values):
            raise InputValidationError(field, values, "Non finite geometric or material value")

        if nominal(cond.r_in) < 0:
            raise InputValidationError(f'{field} conductor r_in', cond.r_in, "Radii cannot be negative")

        if nominal(cond.r_ext) <= nominal(cond.r_in):
            raise InputValidationError(f'{field} conductor r_ext', cond.r_ext,
                                       "The outer radius must be larger than the inner radius")

        if abs(nominal(ins.r_in) - nominal(cond.r_ext)) > TOL:
            raise InputValidationError(f'{field} insulator r_in', ins.r_in,
                                       f"The insulation must start at the conductor outer radius ({cond.r_ext})")

        if nominal(ins.r_ext) < nominal(ins.r_in):
            raise InputValidationError(f'{field} insulator r_ext', ins.r_ext,
                                       "The outer radius cannot be smaller than the inner radius")

        if nominal(cond.r_in) < r_prev - TOL:
            raise InputValidationError(f'{field} conductor r_in', cond.r_in,
                                       f"The component overlaps the previous one (outer radius {r_prev})")

        if nominal(cond.rho) <= 0:
            raise InputValidationError(f'{field} conductor rho', cond.rho, "The resistivity must be positive")

        if nominal(cond.mu_r) <= 0:
            raise InputValidationError(f'{field} conductor mu_r', cond.mu_r, "The permeability must be positive")

        if nominal(cond.eps_r) < 0:
            raise InputValidationError(f'{field} conductor eps_r', cond.eps_r,
                                       "The permittivity cannot be negative")

        if nominal(ins.mu_r) <= 0:
            raise InputValidationError(f'{field} insulator mu_r', ins.mu_r, "The permeability must be positive")

        if nominal(ins.eps_r) <= 0:
            raise InputValidationError(f'{field} insulator eps_r', ins.eps_r, "The permittivity must be positive")

        if nominal(ins.tan_delta) < 0:
            raise InputValidationError(f'{field} insulator tan_delta', ins.tan_delta,
                                       "The loss tangent cannot be negative")

    def check_earth(self) -> None:
        earth = self.earth_model
        nf = len(self.frequencies)

        if earth.n_layers < 2:
            raise InputValidationError('earth layers', earth.n_layers, "At least one earth layer is required")

        for i, layer in enumerate(earth.layers):
            for prop in ('rho_g', 'eps_g', 'mu_g'):
                values = getattr(layer, prop)
                if len(values) != nf:
                    raise InputValidationError(f'earth layer {i + 1} {prop}', len(values),
                                               f"The earth properties must have one value per frequency ({nf})")

            if i == 0:
                continue

            for k in range(nf):
                rho = nominal(layer.rho_g[k])
                if not np.isfinite(rho) or rho <= 0:
                    raise InputValidationError(f'earth layer {i + 1} rho', layer.rho_g[k],
                                               "The earth resistivity must be positive and finite")
                if nominal(layer.eps_g[k]) < 0:
                    raise InputValidationError(f'earth layer {i + 1} eps', layer.eps_g[k],
                                               "The earth permittivity cannot be negative")
                if nominal(layer.mu_g[k]) <= 0:
                    raise InputValidationError(f'earth layer {i + 1} mu', layer.mu_g[k],
                                               "The earth permeability must be positive")

            if i < earth.n_layers - 1 and not nominal(layer.thickness) > 0:
                raise InputValidationError(f'earth layer {i + 1} thickness', layer.thickness,
                                           "The thickness of the intermediate layers must be positive")
