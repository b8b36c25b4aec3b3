"""Linear-optical circuit: evolves an input state through a unitary network."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable

import numpy as np

from .fock import Basis, Execution, Fock
from .matrix import permanent
from .state import State


def _columns_on_input(u: np.ndarray, fin: Fock) -> np.ndarray:
    """Repeat column ``m`` of ``u`` as many times as mode ``m`` is occupied."""
    return u[:, np.repeat(np.arange(len(fin)), list(fin))]


def _rows_on_output(u: np.ndarray, fout: Fock) -> np.ndarray:
    """Repeat row ``m`` of ``u`` as many times as mode ``m`` is occupied."""
    return u[np.repeat(np.arange(len(fout)), list(fout)), :]


class Circuit:
    """A unitary transformation of photon creation operators acting on an input state.

    The output state is computed over ``output_basis`` and cached until the
    input state, the output basis or the unitary changes.
    """

    def __init__(self) -> None:
        self._input = State()
        self._unitary = np.zeros((0, 0), dtype=complex)
        self._output = State()
        self._valid = True

    @property
    def input_state(self) -> State:
        """The input state."""
        return State(self._input)

    @input_state.setter
    def input_state(self, state) -> None:
        self._valid = False
        self._input = State(state)

    @property
    def output_basis(self) -> Basis:
        """The basis of Fock states over which the output state is computed."""
        return self._output.basis()

    @output_basis.setter
    def output_basis(self, basis: Iterable[Iterable[int]]) -> None:
        self._valid = False
        self._output = State(basis if isinstance(basis, Basis) else Basis(basis))

    @property
    def unitary(self) -> np.ndarray:
        """Unitary matrix transforming creation operators of photons in modes."""
        return self._unitary.copy()

    @unitary.setter
    def unitary(self, u) -> None:
        self._valid = False
        self._unitary = np.array(u, dtype=complex)

    def _fock_amplitude(self, fout: Fock) -> complex:
        uout = _rows_on_output(self._unitary, fout)
        tot = fout.total()
        out_fact = fout.prod_fact()
        amp = 0j
        for fin, in_amp in self._input.items():
            if fin.total() != tot:
                continue
            amp += (
                permanent(_columns_on_input(uout, fin))
                * in_amp
                / math.sqrt(out_fact * fin.prod_fact())
            )
        return amp

    def _single_input_amplitude(self) -> Callable[[Fock], complex]:
        ((fin, in_amp),) = self._input.items()
        uin = _columns_on_input(self._unitary, fin)
        tot = fin.total()
        mult = in_amp / math.sqrt(fin.prod_fact())

        def amplitude(fout: Fock) -> complex:
            if fout.total() != tot:
                return 0j
            return permanent(_rows_on_output(uin, fout)) * mult / math.sqrt(
                fout.prod_fact()
            )

        return amplitude

    def output_state(self, exec_policy: Execution = Execution.SEQ) -> State:
        """Return the output state over the output basis."""
        if not self._valid:
            if len(self._input) == 1:
                func = self._single_input_amplitude()
            else:
                func = self._fock_amplitude
            self._output.set_amplitudes(func, exec_policy)
            self._valid = True
        return State(self._output)