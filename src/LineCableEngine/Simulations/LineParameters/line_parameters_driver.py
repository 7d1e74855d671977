# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
from __future__ import annotations

from typing import Callable, List, Union
from multiprocessing import Pool
import numpy as np

from LineCableEngine.Simulations.driver_template import DriverTemplate
from LineCableEngine.Simulations.LineParameters.line_parameters_problem import LineParametersProblem
from LineCableEngine.Simulations.LineParameters.line_parameters_options import LineParametersOptions
from LineCableEngine.Simulations.LineParameters.line_parameters import LineParameters
from LineCableEngine.Simulations.LineParameters.line_parameters_worker import solve_frequency
from LineCableEngine.Simulations.LineParameters.workspace import NumericWorkspace, build_workspace
from LineCableEngine.Simulations.LineParameters.reduction import reorder_indices, kron_plan, split_indices
from LineCableEngine.Simulations.LineParameters.Formulations.formulation_set import FormulationSet


class LineParametersDriver(DriverTemplate):
    name = 'Line parameters'

    def __init__(self,
                 problem: LineParametersProblem,
                 formulations: Union[FormulationSet, None] = None,
                 options: Union[LineParametersOptions, None] = None,
                 progress_func: Union[Callable[[float], None], None] = None,
                 text_func: Union[Callable[[str], None], None] = None):
        """
        LineParametersDriver class constructor
        :param problem: LineParametersProblem
        :param formulations: FormulationSet (defaults for buried cables if None)
        :param options: LineParametersOptions
        :param progress_func: function receiving the progress in % (optional)
        :param text_func: function receiving the progress messages (optional)
        """
        DriverTemplate.__init__(self, progress_func=progress_func, text_func=text_func)

        self.problem: LineParametersProblem = problem

        self.formulations: FormulationSet = FormulationSet() if formulations is None else formulations

        # Options to use
        self.options: LineParametersOptions = LineParametersOptions() if options is None else options

        self.workspace: Union[NumericWorkspace, None] = None

        self.results: Union[LineParameters, None] = None

    def reduced_names(self, ws: NumericWorkspace) -> List[str]:
        """
        Names of the conductors that survive the reductions, in the output order
        :param ws: NumericWorkspace
        :return: list of names
        """
        perm = reorder_indices(ws.phase_map)
        map_r = ws.phase_map[perm]
        plan = kron_plan(map_r, reduce_bundle=self.options.reduce_bundle, kron_reduction=self.options.kron_reduction)

        if plan is None:
            return [ws.names[i] for i in perm]

        # fails early if nothing survives
        split_indices(plan)

        return [f"phase {p}" if p > 0 else ws.names[i] for i, p, q in zip(perm, map_r, plan) if q != 0]

    def run(self):
        """
        Run the line parameters computation
        """
        self.tic()
        self.report_text('Checking the inputs...')
        self.problem.check(self.logger)

        self.report_text('Building the workspace...')
        ws = build_workspace(problem=self.problem,
                             formulations=self.formulations,
                             options=self.options,
                             logger=self.logger)
        self.workspace = ws
        names = self.reduced_names(ws)
        n = len(names)
        nf = ws.nfreq

        n_workers = self.options.n_workers
        if n_workers > 1 and ws.is_uncertain:
            # the correlations between frequencies would be lost across processes
            self.logger.add_warning("Uncertain computations run serially", device='n_workers',
                                    value=n_workers, expected_value=1)
            n_workers = 1

        self.report_text('Computing the line parameters...')
        if n_workers > 1 and nf > 1:
            with Pool(processes=n_workers) as pool:
                slices = pool.starmap(solve_frequency,
                                      [(ws, k, self.formulations, self.options) for k in range(nf)])
            self.report_progress(100.0)
        else:
            slices = list()
            for k in range(nf):
                slices.append(solve_frequency(ws, k, self.formulations, self.options))
                self.report_progress2(k, nf)

                if self.is_cancel():
                    self.logger.add_warning("Cancelled", value=ws.freq[k])
                    return

        dtype = object if ws.is_uncertain else complex
        Z = np.zeros((n, n, nf), dtype=dtype)
        Y = np.zeros((n, n, nf), dtype=dtype)
        for k, (Zk, Yk, logger_k) in enumerate(slices):
            Z[:, :, k] = Zk
            Y[:, :, k] = Yk
            self.logger += logger_k

        self.results = LineParameters(Z=Z, Y=Y, f=ws.freq, logger=self.logger, names=names)

        self.toc()
        self.report_text('Done!')

        if self.options.verbose:
            print(self.results)
            self.logger.print()
