# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
from __future__ import annotations

from typing import Any, List, Union
import numpy as np

from LineCableEngine.basic_structures import IntVec, Vec, NumVec, NumMat, ObjVec, Logger
from LineCableEngine.constants import T_0
from LineCableEngine.enumerations import NumericKind
from LineCableEngine.Simulations.LineParameters.line_parameters_problem import LineParametersProblem
from LineCableEngine.Simulations.LineParameters.line_parameters_options import LineParametersOptions
from LineCableEngine.Simulations.LineParameters.Formulations.formulation_set import FormulationSet
import LineCableEngine.Utils.uncertain as um


class NumericWorkspace:
    """
    Flat arrays of a cable system, one entry per phase (cable component).
    Every numeric array shares the numeric kind decided at construction.
    """

    def __init__(self, nphase: int, ncable: int, nfreq: int, kind: NumericKind = NumericKind.Float):
        """
        Workspace arrays
        :param nphase: number of phases (components of all the cables)
        :param ncable: number of cables
        :param nfreq: number of frequencies
        :param kind: NumericKind
        """
        self.nphase: int = nphase
        self.ncable: int = ncable
        self.nfreq: int = nfreq
        self.kind: NumericKind = kind

        self.names: ObjVec = np.empty(nphase, dtype=object)

        self.freq: Vec = np.zeros(nfreq, dtype=float)

        # position of the cable hosting every phase [m]
        self.horz: NumVec = um.zeros(nphase, kind, cx=False)
        self.vert: NumVec = um.zeros(nphase, kind, cx=False)

        # conductor group
        self.r_in: NumVec = um.zeros(nphase, kind, cx=False)
        self.r_ext: NumVec = um.zeros(nphase, kind, cx=False)
        self.rho_cond: NumVec = um.zeros(nphase, kind, cx=False)
        self.alpha_cond: NumVec = um.zeros(nphase, kind, cx=False)
        self.mu_cond: NumVec = um.zeros(nphase, kind, cx=False)
        self.eps_cond: NumVec = um.zeros(nphase, kind, cx=False)

        # insulator group
        self.r_ins_in: NumVec = um.zeros(nphase, kind, cx=False)
        self.r_ins_ext: NumVec = um.zeros(nphase, kind, cx=False)
        self.rho_ins: NumVec = um.zeros(nphase, kind, cx=False)
        self.mu_ins: NumVec = um.zeros(nphase, kind, cx=False)
        self.eps_ins: NumVec = um.zeros(nphase, kind, cx=False)
        self.tan_ins: NumVec = um.zeros(nphase, kind, cx=False)

        # phase label, hosting cable and position inside the cable (0 = innermost)
        self.phase_map: IntVec = np.zeros(nphase, dtype=int)
        self.cable_map: IntVec = np.zeros(nphase, dtype=int)
        self.comp_map: IntVec = np.zeros(nphase, dtype=int)

        # earth properties (layers x frequencies), air first, after the EHEM reduction
        self.rho_g: NumMat = um.zeros((2, nfreq), kind, cx=False)
        self.eps_g: NumMat = um.zeros((2, nfreq), kind, cx=False)
        self.mu_g: NumMat = um.zeros((2, nfreq), kind, cx=False)

        self.temp: Any = T_0

    @property
    def n_phases(self) -> int:
        return self.nphase

    @property
    def n_cables(self) -> int:
        return self.ncable

    @property
    def n_frequencies(self) -> int:
        return self.nfreq

    @property
    def is_uncertain(self) -> bool:
        return self.kind == NumericKind.Uncertain

    def cable_phases(self, c: int) -> IntVec:
        """
        Phases of a cable sorted from the inside out
        :param c: cable index
        :return: phase indices
        """
        idx = np.where(self.cable_map == c)[0]
        return idx[np.argsort(self.comp_map[idx])]

    def outer_radius(self, c: int) -> Any:
        """
        Outermost radius of a cable
        :param c: cable index
        :return: radius [m]
        """
        return self.r_ins_ext[self.cable_phases(c)[-1]]

    def apply_temperature_correction(self) -> None:
        """
        rho(T) = rho(T_0) (1 + alpha (T - T_0))
        """
        dT = self.temp - T_0
        for i in range(self.nphase):
            self.rho_cond[i] = self.rho_cond[i] * (1.0 + self.alpha_cond[i] * dT)

    def __str__(self):
        return (f"NumericWorkspace ({self.kind}): {self.nphase} phases, {self.ncable} cables, "
                f"{self.nfreq} frequencies")


def _earth_matrix(rows: List[Any], kind: NumericKind) -> NumMat:
    """
    Stack the per layer property vectors (layers x frequencies)
    """
    if kind == NumericKind.Float:
        return np.array([[float(um.nominal(v)) for v in row] for row in rows], dtype=float)

    mat = np.empty((len(rows), len(rows[0])), dtype=object)
    for i, row in enumerate(rows):
        for k, v in enumerate(row):
            mat[i, k] = v
    return mat


def build_workspace(problem: LineParametersProblem,
                    formulations: Union[FormulationSet, None] = None,
                    options: Union[LineParametersOptions, None] = None,
                    logger: Union[Logger, None] = None) -> NumericWorkspace:
    """
    Flatten a cable system, its earth model and the frequencies into a NumericWorkspace
    :param problem: LineParametersProblem (already checked)
    :param formulations: FormulationSet (EHEM reduction of the earth)
    :param options: LineParametersOptions (temperature correction)
    :param logger: Logger (a new one if None)
    :return: NumericWorkspace
    """
    logger = Logger() if logger is None else logger
    formulations = FormulationSet() if formulations is None else formulations
    options = LineParametersOptions() if options is None else options

    system = problem.system
    earth = problem.earth_model

    cols = {key: list() for key in ('horz', 'vert', 'r_in', 'r_ext', 'rho_cond', 'alpha_cond', 'mu_cond',
                                    'eps_cond', 'r_ins_in', 'r_ins_ext', 'rho_ins', 'mu_ins', 'eps_ins', 'tan_ins')}
    names = list()
    phase_map = list()
    cable_map = list()
    comp_map = list()

    for c, cable in enumerate(system.cables):
        for k, comp in enumerate(cable.design.components):
            cond = comp.conductor
            ins = comp.insulator
            names.append(f"{cable.design.name}[{c}].{comp.name}")
            cols['horz'].append(cable.horz)
            cols['vert'].append(cable.vert)
            cols['r_in'].append(cond.r_in)
            cols['r_ext'].append(cond.r_ext)
            cols['rho_cond'].append(cond.rho)
            cols['alpha_cond'].append(cond.alpha)
            cols['mu_cond'].append(cond.mu_r)
            cols['eps_cond'].append(cond.eps_r)
            cols['r_ins_in'].append(ins.r_in)
            cols['r_ins_ext'].append(ins.r_ext)
            cols['rho_ins'].append(ins.rho)
            cols['mu_ins'].append(ins.mu_r)
            cols['eps_ins'].append(ins.eps_r)
            cols['tan_ins'].append(ins.tan_delta)
            phase_map.append(cable.conn[k])
            cable_map.append(c)
            comp_map.append(k)

    earth_rows = {'rho_g': [layer.rho_g for layer in earth.layers],
                  'eps_g': [layer.eps_g for layer in earth.layers],
                  'mu_g': [layer.mu_g for layer in earth.layers]}

    # the numeric kind is decided once, looking at every input
    kind = um.resolve_numeric_kind(*cols.values(), *earth_rows.values(), system.temperature)

    ws = NumericWorkspace(nphase=len(names), ncable=system.n_cables, nfreq=len(problem.frequencies), kind=kind)
    ws.names[:] = names
    ws.freq[:] = problem.frequencies
    for key, values in cols.items():
        setattr(ws, key, um.as_kind(values, kind))
    ws.phase_map[:] = phase_map
    ws.cable_map[:] = cable_map
    ws.comp_map[:] = comp_map
    ws.temp = system.temperature if kind == NumericKind.Uncertain else float(um.nominal(system.temperature))

    ws.rho_g, ws.eps_g, ws.mu_g = formulations.ehem(_earth_matrix(earth_rows['rho_g'], kind),
                                                    _earth_matrix(earth_rows['eps_g'], kind),
                                                    _earth_matrix(earth_rows['mu_g'], kind))

    if options.temperature_correction:
        ws.apply_temperature_correction()
        if um.nominal(ws.temp) != T_0:
            logger.add_info("Conductor resistivities corrected", device='temperature', value=um.nominal(ws.temp),
                            expected_value=T_0)

    return ws
