"""Cost functions for optimizing linear-optical circuits towards target states."""

from __future__ import annotations

import abc
from collections.abc import Iterable

import numpy as np

from .circuit import Circuit
from .fock import Basis, Fock
from .matrix import exp_hermite, hurwitz
from .state import State, dot


class CostFunctor(abc.ABC):
    """Scores how well a parametrized circuit produces the target states.

    The circuit acts on ``input_state`` and is evaluated over ``full_basis``.
    The output is postselected on every Fock state of ``ancilla_basis``
    (the ancilla occupies the first modes). Each normalized postselected
    state is compared with every target state, and the comparisons are
    weighted by the probability of observing the ancilla.
    """

    def __init__(
        self,
        full_basis: Basis,
        ancilla_basis: Basis,
        input_state: Iterable[int],
        target_states: Iterable[State],
    ) -> None:
        self.target_states = [State(t) for t in target_states]
        self.ancilla_basis = Basis(ancilla_basis)
        self._circuit = Circuit()
        self._circuit.output_basis = full_basis
        self._circuit.input_state = Fock(input_state)

    @abc.abstractmethod
    def _unitary(self, x: Iterable[float]) -> np.ndarray:
        """Return the circuit unitary for the parameters ``x``."""

    @abc.abstractmethod
    def _score(self, probability: float, fidelity: float) -> float:
        """Return the contribution of one postselected state and one target."""

    def __call__(self, x: Iterable[float]) -> float:
        """Return the cost of the circuit parametrized by ``x``."""
        self._circuit.unitary = self._unitary(x)
        out = self._circuit.output_state()
        result = 0.0
        for ancilla in self.ancilla_basis:
            postselected = out.postselect(ancilla)
            amplitude = postselected.norm()
            if amplitude == 0.0:
                continue
            postselected /= amplitude
            probability = amplitude * amplitude
            for target in self.target_states:
                fidelity = abs(dot(postselected, target)) ** 2
                result += self._score(probability, fidelity)
        return result


class StanisicFunctor(CostFunctor):
    """Probability-weighted sum of the fifth power of fidelities.

    The unitary is built with the exponential-Hermitian parametrization.
    """

    def _unitary(self, x: Iterable[float]) -> np.ndarray:
        return exp_hermite(x)

    def _score(self, probability: float, fidelity: float) -> float:
        return probability * fidelity**5

    def __call__(self, x: Iterable[float]) -> float:
        """Return the sum of p * F^5 over ancillas and targets."""
        return super().__call__(x)


class LogFunctor(CostFunctor):
    """Probability-weighted sum of eps / (1 + eps - F) with eps = 0.01.

    The unitary is built with the Hurwitz parametrization.
    """

    EPSILON = 1e-2

    def _unitary(self, x: Iterable[float]) -> np.ndarray:
        return hurwitz(x)

    def _score(self, probability: float, fidelity: float) -> float:
        eps = self.EPSILON
        return eps * probability / (1.0 + eps - fidelity)

    def __call__(self, x: Iterable[float]) -> float:
        """Return the sum of eps * p / (1 + eps - F) over ancillas and targets."""
        return super().__call__(x)