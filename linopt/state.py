"""Linear-optical states: superpositions of Fock states with complex amplitudes."""

from __future__ import annotations

import math
import os
from collections.abc import Callable, Iterable, Iterator, Mapping
from concurrent.futures import ThreadPoolExecutor
from numbers import Number

from .errors import NotSupported, WrongSize
from .fock import Basis, Execution, Fock


def _format_complex(z: complex) -> str:
    sign = "+" if z.imag >= 0 else ""
    return f"{z.real:g}{sign}{z.imag:g}j"


class State:
    """A mapping from Fock states to complex amplitudes, iterated in lexicographic order.

    ``State()`` is empty, ``State(fock)`` holds ``fock`` with unit amplitude,
    ``State(basis)`` holds every Fock state of ``basis`` with zero amplitude and
    ``State(mapping)`` copies amplitudes from a mapping (or another state).
    """

    def __init__(self, source=None) -> None:
        self._data: dict[Fock, complex] = {}
        self._keys: list[Fock] | None = None
        if source is None:
            return
        if isinstance(source, State):
            self._data = dict(source._data)
        elif isinstance(source, Basis):
            self._data = {f: 0j for f in source}
        elif isinstance(source, Mapping):
            self._data = {Fock(f): complex(a) for f, a in source.items()}
        else:
            self._data = {Fock(source): 1 + 0j}

    @classmethod
    def _from_dict(cls, data: dict[Fock, complex]) -> "State":
        state = cls()
        state._data = data
        return state

    @property
    def _sorted(self) -> list[Fock]:
        if self._keys is None:
            self._keys = sorted(self._data)
        return self._keys

    def _add_amplitude(self, fock: Fock, amp: complex) -> None:
        if fock not in self._data:
            self._keys = None
            self._data[fock] = 0j
        self._data[fock] += amp

    def __len__(self) -> int:
        return len(self._data)

    def __getitem__(self, fock) -> complex:
        return self._data[Fock(fock)]

    def __setitem__(self, fock, amp) -> None:
        """Set an amplitude; a zero amplitude removes the Fock state."""
        fock = Fock(fock)
        amp = complex(amp)
        if amp == 0:
            if self._data.pop(fock, None) is not None:
                self._keys = None
            return
        if fock not in self._data:
            self._keys = None
        self._data[fock] = amp

    def __delitem__(self, fock) -> None:
        del self._data[Fock(fock)]
        self._keys = None

    def __iter__(self) -> Iterator[Fock]:
        return iter(list(self._sorted))

    def __reversed__(self) -> Iterator[Fock]:
        return reversed(list(self._sorted))

    def __contains__(self, fock) -> bool:
        return Fock(fock) in self._data

    def __eq__(self, other) -> bool:
        if not isinstance(other, State):
            return NotImplemented
        return self._data == other._data

    __hash__ = None

    def items(self) -> list[tuple[Fock, complex]]:
        """Return (Fock state, amplitude) pairs in lexicographic order."""
        return [(f, self._data[f]) for f in self._sorted]

    def clear(self) -> None:
        """Remove every Fock state."""
        self._data.clear()
        self._keys = None

    def __add__(self, other: "State") -> "State":
        """Return the superposition of two states."""
        if not isinstance(other, State):
            return NotImplemented
        result = State(self)
        result += other
        return result

    def __iadd__(self, other: "State") -> "State":
        if not isinstance(other, State):
            return NotImplemented
        for fock, amp in other._data.items():
            self._add_amplitude(fock, amp)
        return self

    def __sub__(self, other: "State") -> "State":
        if not isinstance(other, State):
            return NotImplemented
        return self + (-other)

    def __isub__(self, other: "State") -> "State":
        if not isinstance(other, State):
            return NotImplemented
        for fock, amp in other._data.items():
            self._add_amplitude(fock, -amp)
        return self

    def __neg__(self) -> "State":
        return State._from_dict({f: -a for f, a in self._data.items()})

    def _tensor(self, other: "State") -> "State":
        data: dict[Fock, complex] = {}
        for fa, aa in self.items():
            for fb, ab in other.items():
                data.setdefault(fa * fb, aa * ab)
        return State._from_dict(data)

    def __mul__(self, other) -> "State":
        """Tensor product with a state or Fock state, or scaling by a number."""
        if isinstance(other, State):
            return self._tensor(other)
        if isinstance(other, Fock):
            return self._tensor(State(other))
        if isinstance(other, Number):
            z = complex(other)
            return State._from_dict({f: a * z for f, a in self._data.items()})
        return NotImplemented

    def __rmul__(self, other) -> "State":
        if isinstance(other, Fock):
            return State(other)._tensor(self)
        if isinstance(other, Number):
            return self * other
        return NotImplemented

    def __imul__(self, other) -> "State":
        result = self.__mul__(other)
        if result is NotImplemented:
            return NotImplemented
        self._data = result._data
        self._keys = None
        return self

    def __truediv__(self, z) -> "State":
        if not isinstance(z, Number):
            return NotImplemented
        z = complex(z)
        return State._from_dict({f: a / z for f, a in self._data.items()})

    def __itruediv__(self, z) -> "State":
        if not isinstance(z, Number):
            return NotImplemented
        z = complex(z)
        for fock in self._data:
            self._data[fock] /= z
        return self

    def norm(self) -> float:
        """Return the Euclidean norm of the amplitudes."""
        return math.sqrt(sum(abs(a) ** 2 for a in self._data.values()))

    def normalize(self) -> "State":
        """Scale the state in place to unit norm and return it."""
        self /= self.norm()
        return self

    def dot(self, other: "State") -> complex:
        """Return the scalar product <self|other>."""
        small, large = (
            (self._data, other._data)
            if len(self._data) <= len(other._data)
            else (other._data, self._data)
        )
        return sum(
            (self._data[f].conjugate() * other._data[f] for f in small if f in large),
            0j,
        )

    def _postselect_fock(self, ancilla: Fock) -> "State":
        size = len(ancilla)
        data = {
            f[size:]: a
            for f, a in self._data.items()
            if len(f) >= size and tuple(f[:size]) == ancilla
        }
        return State._from_dict(data)

    def _postselect_modes(self, modes: int) -> dict[Fock, "State"]:
        result: dict[Fock, State] = {}
        for fock, amp in self.items():
            anc = fock[:modes]
            result.setdefault(anc, State())._data[fock[modes:]] = amp
        return result

    def _postselect_basis(self, basis: Basis) -> dict[Fock, "State"]:
        if len(basis) == 0:
            return {Fock(): State(self)}
        return {anc: self._postselect_fock(anc) for anc in basis}

    def postselect(self, ancilla):
        """Postselect on ancilla modes occupying the first modes.

        With a Fock state, return the state left after observing it. With an
        integer number of modes, return a dict mapping every ancilla found to its
        postselected state. With a basis, return such a dict for every ancilla of
        the basis (an empty basis maps the empty Fock state to this state).
        """
        if isinstance(ancilla, Basis):
            return self._postselect_basis(ancilla)
        if isinstance(ancilla, int):
            return self._postselect_modes(ancilla)
        return self._postselect_fock(Fock(ancilla))

    def basis(self) -> Basis:
        """Return the basis of Fock states present in the state."""
        return Basis(self._data)

    def amplitudes(self) -> list[complex]:
        """Return the amplitudes in lexicographic order of the Fock states."""
        return [self._data[f] for f in self._sorted]

    def set_amplitudes(
        self,
        source: Iterable[complex] | Callable[[Fock], complex],
        exec_policy: Execution = Execution.SEQ,
    ) -> None:
        """Set amplitudes from a sequence (in iteration order) or a function of the Fock state."""
        keys = list(self._sorted)
        if callable(source):
            if exec_policy is Execution.PAR:
                with ThreadPoolExecutor(max_workers=os.cpu_count() or 1) as pool:
                    values = list(pool.map(source, keys))
            else:
                values = [source(f) for f in keys]
        else:
            if exec_policy is Execution.PAR:
                raise NotSupported("Parallel execution is not supported.")
            values = list(source)
            if len(values) != len(keys):
                raise WrongSize(
                    f"The size of 'amps' (which is {len(values)}) should be equal "
                    f"to the state size (which is {len(keys)})."
                )
        for fock, value in zip(keys, values):
            self._data[fock] = complex(value)

    def as_dict(self) -> dict[Fock, complex]:
        """Return the state as a plain dict."""
        return {f: self._data[f] for f in self._sorted}

    def __str__(self) -> str:
        if not self._data:
            return "{}"
        items = (
            "(" + ",".join(str(n) for n in f) + "): " + _format_complex(a)
            for f, a in self.items()
        )
        return "{" + ",\n".join(items) + "}"

    def __repr__(self) -> str:
        return f"State({self})"


def dot(a: State, b: State) -> complex:
    """Return the scalar product <a|b>."""
    return a.dot(b)