"""Fock states and bases of Fock states."""

from __future__ import annotations

import enum
import math
from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING

from .errors import WrongSize

if TYPE_CHECKING:
    from .state import State

_FACTORIALS = tuple(float(math.factorial(n)) for n in range(13))


class Execution(enum.Enum):
    """How amplitudes of a state are computed."""

    SEQ = "seq"
    PAR = "par"


def _factorial(n: int) -> float:
    if 0 <= n < len(_FACTORIALS):
        return _FACTORIALS[n]
    return math.gamma(n + 1)


class Fock(tuple):
    """A Fock state: occupation numbers of the modes.

    ``Fock(n)`` with an integer gives ``n`` empty modes; otherwise the argument
    is an iterable of occupation numbers.
    """

    def __new__(cls, modes: Iterable[int] | int = ()) -> "Fock":
        if isinstance(modes, int):
            return super().__new__(cls, (0,) * modes)
        return super().__new__(cls, (int(n) for n in modes))

    def total(self) -> int:
        """Return the total number of photons in all modes."""
        return sum(self)

    def prod_fact(self) -> float:
        """Return the product of factorials of the occupation numbers."""
        return math.prod((_factorial(n) for n in self), start=1.0)

    def as_list(self) -> list[int]:
        """Return the occupation numbers as a list."""
        return list(self)

    def __add__(self, other: Iterable[int]) -> "Fock":
        """Add occupation numbers mode by mode."""
        if not isinstance(other, tuple):
            return NotImplemented
        if len(self) != len(other):
            raise WrongSize(
                "Sizes of two Fock states should be equal. "
                f"Currently they are {len(self)} and {len(other)}."
            )
        return Fock(a + b for a, b in zip(self, other))

    def __mul__(self, other: Iterable[int]) -> "Fock":
        """Return the tensor product (concatenation of modes)."""
        if not isinstance(other, tuple):
            return NotImplemented
        return Fock(tuple.__add__(self, other))

    def __rmul__(self, other):
        if not isinstance(other, tuple):
            return NotImplemented
        return Fock(tuple.__add__(tuple(other), self))

    def __getitem__(self, index):
        if isinstance(index, slice):
            return Fock(tuple.__getitem__(self, index))
        if not 0 <= index < len(self):
            raise IndexError(f"Index {index} is out of range.")
        return tuple.__getitem__(self, index)

    def __str__(self) -> str:
        return "[" + ",".join(str(n) for n in self) + "]"

    def __repr__(self) -> str:
        return f"Fock({self})"


def _compositions(nphot: int, modes: int) -> Iterator[tuple[int, ...]]:
    """Yield every way of putting ``nphot`` photons into ``modes`` modes."""
    if modes == 0:
        if nphot == 0:
            yield ()
        return
    for first in range(nphot + 1):
        for rest in _compositions(nphot - first, modes - 1):
            yield (first, *rest)


class Basis:
    """A set of Fock states iterated in lexicographic order."""

    def __init__(self, focks: Iterable[Iterable[int]] = ()) -> None:
        self._focks: set[Fock] = {Fock(f) for f in focks}
        self._ordered: list[Fock] | None = None

    @classmethod
    def generate(cls, nphot: int, modes: int) -> "Basis":
        """Return the basis of all Fock states of ``modes`` modes and ``nphot`` photons."""
        return cls().generate_basis(nphot, modes)

    def generate_basis(
        self, nphot: int, modes: int, head: Iterable[int] = ()
    ) -> "Basis":
        """Add every Fock state with ``modes`` modes and ``nphot`` photons after ``head``."""
        head = Fock(head)
        remaining = modes - len(head)
        if remaining < 0:
            return self
        self._focks.update(Fock(head + tail) for tail in _compositions(nphot, remaining))
        self._ordered = None
        return self

    @property
    def _sorted(self) -> list[Fock]:
        if self._ordered is None:
            self._ordered = sorted(self._focks)
        return self._ordered

    def _changed(self) -> None:
        self._ordered = None

    def __len__(self) -> int:
        return len(self._focks)

    def __iter__(self) -> Iterator[Fock]:
        return iter(list(self._sorted))

    def __reversed__(self) -> Iterator[Fock]:
        return reversed(list(self._sorted))

    def __contains__(self, fock) -> bool:
        return Fock(fock) in self._focks

    def __eq__(self, other) -> bool:
        if not isinstance(other, Basis):
            return NotImplemented
        return self._focks == other._focks

    __hash__ = None

    def __delitem__(self, fock) -> None:
        self.remove(fock)

    def add(self, fock) -> None:
        """Add a Fock state to the basis."""
        self._focks.add(Fock(fock))
        self._changed()

    def remove(self, fock) -> None:
        """Remove a Fock state; raise KeyError if it is absent."""
        self._focks.remove(Fock(fock))
        self._changed()

    def discard(self, fock) -> None:
        """Remove a Fock state if it is present."""
        self._focks.discard(Fock(fock))
        self._changed()

    def clear(self) -> None:
        """Remove all Fock states."""
        self._focks.clear()
        self._changed()

    def __add__(self, other: "Basis") -> "Basis":
        """Return the union of two bases."""
        if not isinstance(other, Basis):
            return NotImplemented
        return Basis(self._focks | other._focks)

    def __iadd__(self, other: "Basis") -> "Basis":
        if not isinstance(other, Basis):
            return NotImplemented
        self._focks |= other._focks
        self._changed()
        return self

    def __mul__(self, other: "Basis") -> "Basis":
        """Return the tensor product of two bases."""
        if not isinstance(other, Basis):
            return NotImplemented
        return Basis(a * b for a in self._focks for b in other._focks)

    def __imul__(self, other: "Basis") -> "Basis":
        if not isinstance(other, Basis):
            return NotImplemented
        self._focks = {a * b for a in self._focks for b in other._focks}
        self._changed()
        return self

    def postselect(self, ancilla: Iterable[int]) -> "Basis":
        """Return the states whose leading modes equal ``ancilla``, with those modes removed."""
        ancilla = Fock(ancilla)
        size = len(ancilla)
        return Basis(
            f[size:]
            for f in self._focks
            if len(f) >= size and tuple.__getitem__(f, slice(0, size)) == ancilla
        )

    def apply_function(
        self,
        func: Callable[[Fock], complex],
        exec_policy: Execution = Execution.SEQ,
    ) -> "State":
        """Return the state whose amplitude for each Fock state is ``func(fock)``."""
        from .state import State

        state = State(self)
        state.set_amplitudes(func, exec_policy)
        return state

    def as_set(self) -> set[Fock]:
        """Return the Fock states as a Python set."""
        return set(self._focks)

    def __str__(self) -> str:
        if not self._focks:
            return "{}"
        items = ("(" + ",".join(str(n) for n in f) + ")" for f in self._sorted)
        return "{" + ",\n".join(items) + "}"

    def __repr__(self) -> str:
        return f"Basis({self})"