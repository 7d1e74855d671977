# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.
# SPDX-License-Identifier: MPL-2.0
import warnings
import numpy as np
import pytest
from uncertainties import ufloat

import LineCableEngine.api as lce


def test_buried_three_phase(buried_system, earth_model, frequencies):
    """
    Three single core cables with grounded sheaths
    """
    lp = lce.line_parameters(buried_system, earth_model)

    assert lp.Z.shape == (3, 3, 2)
    assert lp.names == ['phase 1', 'phase 2', 'phase 3']
    assert lp.logger.warning_count() == 0
    assert np.allclose(lp.f, frequencies)

    for k in range(2):
        Z = lp.Z[:, :, k]
        Y = lp.Y[:, :, k]
        assert np.allclose(Z, Z.T)
        assert np.all(Z.diagonal().real > 0)
        assert np.all(Z.diagonal().imag > 0)

        # the sheaths screen the cores: only the core insulation remains
        jw = 2j * np.pi * frequencies[k]
        y_core = jw * 2.0 * np.pi * lce.EPS_0 * 2.3 / np.log(0.0345 / 0.0195)
        assert np.allclose(Y.diagonal(), y_core, rtol=1e-9)
        assert np.allclose(Y - np.diag(Y.diagonal()), 0.0, atol=1e-15)

    # skin effect
    assert lp.Z[0, 0, 1].real > lp.Z[0, 0, 0].real


def test_without_kron_reduction(buried_system, earth_model):
    lp = lce.line_parameters(buried_system, earth_model)

    options = lce.LineParametersOptions(kron_reduction=False)
    lp_full = lce.line_parameters(buried_system, earth_model, options=options)

    assert lp_full.Z.shape == (6, 6, 2)
    assert lp_full.names[:3] == ['phase 1', 'phase 2', 'phase 3']
    assert lp_full.names[3] == 'single core[0].sheath'

    # eliminating the sheaths afterwards gives the same result
    for k in range(2):
        Zr = lce.kron_reduction(lp_full.Z[:, :, k], [1, 2, 3, 0, 0, 0])
        assert np.allclose(Zr, lp.Z[:, :, k], rtol=1e-9)


def test_without_any_reduction(buried_system, earth_model):
    options = lce.LineParametersOptions(kron_reduction=False, reduce_bundle=False)
    lp = lce.line_parameters(buried_system, earth_model, options=options)

    assert lp.Z.shape == (6, 6, 2)
    assert lp.names[0] == 'single core[0].core'
    assert lp.names[3] == 'single core[0].sheath'


def test_overhead_line(overhead_system, earth_model, overhead_formulations):
    lp = lce.line_parameters(overhead_system, earth_model, formulations=overhead_formulations)

    assert lp.Z.shape == (3, 3, 2)
    for k in range(2):
        Z = lp.Z[:, :, k]
        Y = lp.Y[:, :, k]
        assert np.isclose(Z[0, 0], Z[2, 2])
        assert np.isclose(Z[0, 1], Z[1, 2])
        assert np.all(Y.diagonal().imag > 0)
        assert Y[0, 1].imag < 0

    # the same line with the Carson series
    formulations = lce.FormulationSet(earth_impedance=lce.FullCarson(), earth_admittance=lce.Images())
    lp2 = lce.line_parameters(overhead_system, earth_model, formulations=formulations)
    assert np.allclose(lp.Z, lp2.Z, rtol=1e-3)
    assert np.allclose(lp.Y, lp2.Y)


def test_overhead_needs_overhead_formulations(overhead_system, earth_model):
    # the defaults are for buried cables
    with pytest.raises(lce.LayerMismatchError):
        lce.line_parameters(overhead_system, earth_model)


def test_sequence_parameters(overhead_system, earth_model, overhead_formulations):
    lp = lce.line_parameters(overhead_system, earth_model, formulations=overhead_formulations)

    # a flat formation is not symmetric
    F, seq = lce.sequence_parameters(lp)
    assert seq.logger.warning_count() > 0

    options = lce.LineParametersOptions(ideal_transposition=True)
    lp_t = lce.line_parameters(overhead_system, earth_model, formulations=overhead_formulations, options=options)
    F, seq_t = lce.sequence_parameters(lp_t)

    assert seq_t.logger.warning_count() == 0
    assert seq_t.Z.shape == (3, 3, 2)
    assert np.isclose(seq_t.Z[1, 1, 0], seq_t.Z[2, 2, 0])
    # the zero sequence sees the earth return
    assert seq_t.Z[0, 0, 0].real > seq_t.Z[1, 1, 0].real


def test_two_phase_symmetric_cables(single_core, earth_model):
    system = lce.LineCableSystem()
    system.add_cable(single_core, horz=-0.25, vert=-1.0, conn=[1, 0])
    system.add_cable(single_core, horz=0.25, vert=-1.0, conn=[2, 0])

    lp = lce.line_parameters(system, earth_model)
    F, seq = lce.sequence_parameters(lp)

    assert seq.logger.warning_count() == 0
    assert np.isclose(seq.Z[0, 0, 0], lp.Z[0, 0, 0] + lp.Z[0, 1, 0])
    assert np.isclose(seq.Z[1, 1, 0], lp.Z[0, 0, 0] - lp.Z[0, 1, 0])


def test_sequence_parameters_keep_the_phase_logger(single_core, earth_model, overhead_system,
                                                   overhead_formulations):
    system = lce.LineCableSystem()
    system.add_cable(single_core, horz=-0.25, vert=-1.0, conn=[1, 0])
    system.add_cable(single_core, horz=0.25, vert=-1.0, conn=[2, 0])

    lp = lce.line_parameters(system, earth_model)
    lp.logger.add_warning("Phase domain warning", device='test')
    n_entries = len(lp.logger)

    F, seq = lce.sequence_parameters(lp)

    assert seq.logger is not lp.logger
    assert seq.logger.warning_count() == 0
    assert len(lp.logger) == n_entries

    # the warnings of an asymmetric system stay in the sequence results
    lp_flat = lce.line_parameters(overhead_system, earth_model, formulations=overhead_formulations)
    n_entries = len(lp_flat.logger)
    F, seq_flat = lce.sequence_parameters(lp_flat)

    assert seq_flat.logger.warning_count() > 0
    assert len(lp_flat.logger) == n_entries


def test_bundled_conductors(bare_wire, earth_model, overhead_formulations):
    single = lce.LineCableSystem()
    single.add_cable(bare_wire, horz=-1.0, vert=10.0, conn=[1])
    single.add_cable(bare_wire, horz=1.0, vert=10.0, conn=[2])

    bundled = lce.LineCableSystem()
    bundled.add_cable(bare_wire, horz=-1.2, vert=10.0, conn=[1])
    bundled.add_cable(bare_wire, horz=-0.8, vert=10.0, conn=[1])
    bundled.add_cable(bare_wire, horz=0.8, vert=10.0, conn=[2])
    bundled.add_cable(bare_wire, horz=1.2, vert=10.0, conn=[2])

    lp1 = lce.line_parameters(single, earth_model, formulations=overhead_formulations)
    lp2 = lce.line_parameters(bundled, earth_model, formulations=overhead_formulations)

    assert lp2.Z.shape == (2, 2, 2)
    assert lp2.names == ['phase 1', 'phase 2']

    # two conductors in parallel: less resistance and less inductance, more capacitance
    assert lp2.Z[0, 0, 0].real < lp1.Z[0, 0, 0].real
    assert lp2.Z[0, 0, 0].imag < lp1.Z[0, 0, 0].imag
    assert lp2.Y[0, 0, 0].imag > lp1.Y[0, 0, 0].imag


def test_uncertain_resistivity(bare_wire, earth_model, overhead_formulations):
    lp0 = lce.line_parameters(lce.LineCableSystem(cables=[lce.CablePosition(bare_wire, 0.0, 10.0, [1])]),
                              earth_model, formulations=overhead_formulations)

    bare_wire.components[0].conductor.rho = ufloat(lce.RHO_CU, lce.RHO_CU * 0.02)
    system = lce.LineCableSystem(cables=[lce.CablePosition(bare_wire, 0.0, 10.0, [1])])

    # uncertain computations are always serial
    options = lce.LineParametersOptions(n_workers=2)
    lp = lce.line_parameters(system, earth_model, formulations=overhead_formulations, options=options)

    assert lp.is_uncertain
    assert lp.Z.dtype == object
    assert lp.logger.warning_count() == 1

    std = lp.std()
    assert np.all(std.Z.real > 0)
    assert np.all(std.Y == 0)
    assert np.allclose(lp.nominal().Z, lp0.Z, rtol=1e-7)
    assert np.allclose(lp.nominal().Y, lp0.Y, rtol=1e-7)

    df = lp.to_df(std=True)
    assert df['R [Ohm/km]'].iloc[0] > 0


def test_parallel_frequency_sweep(buried_system, earth_model):
    lp1 = lce.line_parameters(buried_system, earth_model)

    options = lce.LineParametersOptions(n_workers=2)
    lp2 = lce.line_parameters(buried_system, earth_model, options=options)

    assert np.allclose(lp1.Z, lp2.Z)
    assert np.allclose(lp1.Y, lp2.Y)


def test_driver_progress(buried_system, earth_model):
    progress = list()
    messages = list()
    problem = lce.LineParametersProblem(buried_system, earth_model)
    driver = lce.LineParametersDriver(problem, progress_func=progress.append, text_func=messages.append)
    driver.run()

    assert progress == [50.0, 100.0]
    assert messages[-1] == 'Done!'
    assert driver.results.n_frequencies == 2
    assert driver.logger.info_count() == 2
    assert driver.elapsed > 0


def test_uncertain_run_is_free_of_library_warnings(buried_system, frequencies):
    """
    Exact inputs stay plain floats and absolute values go through umath, so the uncertainties
    package has nothing to complain about
    """
    buried_system.cables[0].design.components[0].conductor.rho = ufloat(lce.RHO_CU, lce.RHO_CU * 0.01)
    buried_system.cables[1].horz = ufloat(0.0, 0.01)
    earth = lce.EarthModel(frequencies=frequencies, rho_g=100.0, eps_r=10.0)

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        lp = lce.line_parameters(buried_system, earth)

    assert lp.is_uncertain
    messages = [str(w.message) for w in caught]
    assert not any('std_dev==0' in msg for msg in messages)
    assert not any('__abs__' in msg for msg in messages)
