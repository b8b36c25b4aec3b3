import math

import pytest

from linopt.errors import NotSupported, WrongSize
from linopt.fock import Basis, Execution, Fock
from linopt.state import State, dot


@pytest.fixture
def pair():
    return State({(1, 0): 3, (0, 1): 4j})


def test_fock_constructor_has_unit_amplitude():
    s = State(Fock([1, 0]))
    assert len(s) == 1
    assert s[Fock([1, 0])] == 1


def test_basis_constructor_has_zero_amplitudes():
    b = Basis.generate(2, 2)
    s = State(b)
    assert len(s) == len(b)
    assert all(a == 0 for a in s.amplitudes())
    assert s.basis() == b


def test_copy_constructor_is_independent(pair):
    copy = State(pair)
    copy[(1, 0)] = 7
    assert pair[(1, 0)] == 3
    assert copy != pair


def test_setitem_zero_removes(pair):
    pair[(1, 0)] = 0
    assert (1, 0) not in pair
    assert len(pair) == 1


def test_missing_keys_raise(pair):
    with pytest.raises(KeyError):
        pair[(2, 0)]
    with pytest.raises(KeyError):
        del pair[(2, 0)]
    assert len(pair) == 2
    assert pair[(1, 0)] == 3
    assert pair[(0, 1)] == 4j


def test_delitem(pair):
    del pair[(0, 1)]
    assert list(pair) == [Fock((1, 0))]


def test_iteration_is_sorted(pair):
    assert list(pair) == [Fock((0, 1)), Fock((1, 0))]
    assert list(reversed(pair)) == [Fock((1, 0)), Fock((0, 1))]
    assert pair.items() == [(Fock((0, 1)), 4j), (Fock((1, 0)), 3)]


def test_add_merges_amplitudes():
    a = State({(1, 0): 1, (0, 1): 2})
    b = State({(0, 1): 3, (2, 0): 5})
    s = a + b
    assert s[(1, 0)] == 1
    assert s[(0, 1)] == 5
    assert s[(2, 0)] == 5
    c = State(a)
    c += b
    assert c == s


def test_subtract_self_gives_zero(pair):
    diff = pair - pair
    assert len(diff) == len(pair)
    assert diff.norm() == 0
    c = State(pair)
    c -= pair
    assert c == diff


def test_negation(pair):
    neg = -pair
    assert neg[(1, 0)] == -pair[(1, 0)]
    assert neg + pair == pair - pair


def test_tensor_product():
    s = State(Fock([1])) * State(Fock([0, 2]))
    assert s == State(Fock([1, 0, 2]))
    t = State(Fock([1]))
    t *= State(Fock([0, 2]))
    assert t == s


def test_scalar_multiplication_and_division(pair):
    scaled = pair * 2j
    assert scaled[(1, 0)] == pair[(1, 0)] * 2j
    assert 2j * pair == scaled
    assert scaled / 2j == pair
    c = State(pair)
    c *= 2
    c /= 2
    assert c == pair


def test_norm_and_normalize(pair):
    assert pair.norm() == pytest.approx(5)
    returned = pair.normalize()
    assert returned is pair
    assert pair.norm() == pytest.approx(1)


def test_dot_products(pair):
    other = State({(0, 1): 1, (2, 0): 1})
    assert dot(pair, pair) == pytest.approx(pair.norm() ** 2)
    assert pair.dot(other) == pytest.approx(pair[(0, 1)].conjugate())
    assert other.dot(pair) == pytest.approx(pair.dot(other).conjugate())


def test_postselect_fock():
    s = State({(1, 0, 1): 1, (1, 1, 0): 2, (0, 2, 0): 3})
    assert s.postselect(Fock([1])) == State({(0, 1): 1, (1, 0): 2})
    assert s.postselect([2]) == State()


def test_postselect_modes():
    s = State({(1, 0, 1): 1, (1, 1, 0): 2, (0, 2, 0): 3})
    res = s.postselect(1)
    assert set(res) == {Fock([0]), Fock([1])}
    assert res[Fock([0])] == State({(2, 0): 3})
    assert res[Fock([1])] == s.postselect(Fock([1]))


def test_postselect_basis():
    s = State({(1, 0, 1): 1, (1, 1, 0): 2, (0, 2, 0): 3})
    res = s.postselect(Basis([(1,), (2,)]))
    assert res[Fock([1])] == s.postselect(Fock([1]))
    assert res[Fock([2])] == State()
    assert s.postselect(Basis()) == {Fock(): s}


def test_set_amplitudes_from_sequence():
    s = State(Basis.generate(1, 2))
    s.set_amplitudes([1, 2])
    assert s.amplitudes() == [1, 2]
    with pytest.raises(WrongSize):
        s.set_amplitudes([1, 2, 3])
    with pytest.raises(NotSupported):
        s.set_amplitudes([1, 2], Execution.PAR)


def test_set_amplitudes_from_function_parallel_matches_sequential():
    basis = Basis.generate(3, 3)
    seq = State(basis)
    par = State(basis)
    seq.set_amplitudes(lambda f: f[0] + 1j * f.total())
    par.set_amplitudes(lambda f: f[0] + 1j * f.total(), Execution.PAR)
    assert seq == par
    assert seq[(3, 0, 0)] == 3 + 3j


def test_apply_function_builds_state():
    basis = Basis.generate(1, 2)
    s = basis.apply_function(lambda f: f[1])
    assert s.basis() == basis
    assert s[(0, 1)] == 1


def test_as_dict(pair):
    d = pair.as_dict()
    assert d == {Fock((0, 1)): 4j, Fock((1, 0)): 3}
    assert State(d) == pair


def test_str_and_repr():
    s = State({(1, 0): 1, (0, 1): 0.5j})
    assert str(s) == "{(0,1): 0+0.5j,\n(1,0): 1+0j}"
    assert repr(s) == "State(" + str(s) + ")"
    assert str(State()) == "{}"


def test_clear_and_contains(pair):
    assert (1, 0) in pair
    pair.clear()
    assert len(pair) == 0
    assert (1, 0) not in pair
    assert math.isclose(pair.norm(), 0)