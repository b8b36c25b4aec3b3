import math

import numpy as np
import pytest

from linopt.circuit import Circuit
from linopt.errors import WrongSize
from linopt.fock import Basis, Execution, Fock
from linopt.matrix import hurwitz
from linopt.state import State


def _random_unitary(modes, seed):
    rng = np.random.default_rng(seed)
    return hurwitz(rng.random(modes * modes))


def test_single_photon_amplitudes_are_unitary_column():
    u = _random_unitary(3, 1)
    c = Circuit()
    c.unitary = u
    c.input_state = Fock((0, 1, 0))
    c.output_basis = Basis.generate(1, 3)
    out = c.output_state()
    assert out[(1, 0, 0)] == pytest.approx(u[0, 1])
    assert out[(0, 1, 0)] == pytest.approx(u[1, 1])
    assert out[(0, 0, 1)] == pytest.approx(u[2, 1])


def test_hong_ou_mandel_dip():
    c = Circuit()
    c.unitary = np.array([[1, 1], [1, -1]]) / math.sqrt(2)
    c.input_state = Fock((1, 1))
    c.output_basis = Basis.generate(2, 2)
    out = c.output_state()
    assert abs(out[(1, 1)]) < 1e-12
    assert abs(out[(2, 0)]) ** 2 == pytest.approx(0.5)
    assert abs(out[(0, 2)]) ** 2 == pytest.approx(0.5)


def test_norm_preserved_over_full_basis():
    c = Circuit()
    c.unitary = _random_unitary(4, 7)
    c.input_state = Fock((1, 1, 1, 0))
    c.output_basis = Basis.generate(3, 4)
    assert c.output_state().norm() == pytest.approx(1.0)


def test_superposition_is_linear():
    u = _random_unitary(3, 3)
    basis = Basis.generate(2, 3)

    def run(state):
        c = Circuit()
        c.unitary = u
        c.output_basis = basis
        c.input_state = state
        return c.output_state()

    a = run(State(Fock((2, 0, 0))))
    b = run(State(Fock((0, 1, 1))))
    both = run(State(Fock((2, 0, 0))) + State(Fock((0, 1, 1))) * 1j)
    for fock in basis:
        assert both[fock] == pytest.approx(a[fock] + 1j * b[fock])


def test_states_with_other_photon_number_get_zero():
    c = Circuit()
    c.unitary = _random_unitary(2, 5)
    c.input_state = Fock((1, 0))
    c.output_basis = Basis([(1, 0), (1, 1), (0, 2)])
    out = c.output_state()
    assert out[(1, 1)] == 0
    assert out[(0, 2)] == 0
    assert len(out) == 3


def test_output_is_cached_and_invalidated():
    c = Circuit()
    c.unitary = np.eye(2)
    c.input_state = Fock((1, 0))
    c.output_basis = Basis.generate(1, 2)
    first = c.output_state()
    assert first == c.output_state()
    c.unitary = np.array([[0, 1], [1, 0]])
    second = c.output_state()
    assert second[(0, 1)] == pytest.approx(1.0)
    assert second[(1, 0)] == pytest.approx(0.0)


def test_parallel_matches_sequential():
    u = _random_unitary(4, 11)
    results = []
    for policy in (Execution.SEQ, Execution.PAR):
        c = Circuit()
        c.unitary = u
        c.input_state = State(Fock((1, 1, 0, 0))) + State(Fock((0, 0, 1, 1)))
        c.output_basis = Basis.generate(2, 4)
        results.append(c.output_state(policy))
    seq, par = results
    assert list(seq) == list(par)
    for fock in seq:
        assert par[fock] == pytest.approx(seq[fock])


def test_properties_round_trip():
    c = Circuit()
    basis = Basis.generate(2, 2)
    c.output_basis = basis
    c.input_state = Fock((1, 1))
    c.unitary = np.eye(2)
    assert c.output_basis == basis
    assert c.input_state == State(Fock((1, 1)))
    assert np.allclose(c.unitary, np.eye(2))


def test_unitary_getter_returns_copy():
    c = Circuit()
    c.unitary = np.eye(2)
    u = c.unitary
    u[0, 0] = 5
    assert c.unitary[0, 0] == 1


def test_vacuum_output_raises():
    c = Circuit()
    c.unitary = np.eye(2)
    c.input_state = Fock((0, 0))
    c.output_basis = Basis([(0, 0)])
    with pytest.raises(WrongSize):
        c.output_state()