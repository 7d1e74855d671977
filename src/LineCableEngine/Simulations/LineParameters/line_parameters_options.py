# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0


class LineParametersOptions:
    """
    Line parameters options
    """

    def __init__(self,
                 reduce_bundle: bool = True,
                 kron_reduction: bool = True,
                 ideal_transposition: bool = False,
                 temperature_correction: bool = True,
                 symmetrize: bool = True,
                 n_workers: int = 1,
                 verbose: int = 0):
        """

        :param reduce_bundle: merge the conductors that share a phase label into one equivalent conductor
        :param kron_reduction: eliminate the grounded conductors (phase label 0)
        :param ideal_transposition: replace the reduced matrices by their circulant projection
        :param temperature_correction: correct the conductor resistivities to the operating temperature
        :param symmetrize: enforce reciprocity by averaging every slice with its transpose
        :param n_workers: number of processes used to sweep the frequencies (1 -> serial)
        :param verbose: Verbosity level
        """
        self.reduce_bundle: bool = reduce_bundle

        self.kron_reduction: bool = kron_reduction

        self.ideal_transposition: bool = ideal_transposition

        self.temperature_correction: bool = temperature_correction

        self.symmetrize: bool = symmetrize

        self.n_workers: int = n_workers

        self.verbose: int = verbose

    def __str__(self):
        return (f"LineParametersOptions(reduce_bundle={self.reduce_bundle}, kron_reduction={self.kron_reduction}, "
                f"ideal_transposition={self.ideal_transposition}, "
                f"temperature_correction={self.temperature_correction}, symmetrize={self.symmetrize}, "
                f"n_workers={self.n_workers})")
