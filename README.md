# linopt

`linopt` simulates how bosonic states evolve through a discrete
linear-optical unitary network. The states are written in the
occupation-number (Fock) basis. You give an input state, a unitary
transformation of the modes and a basis of Fock states. The package then
computes the output state over that basis. It can also build unitary
matrices from parameters, and it can decompose a unitary matrix into the
Clements interferometer design and rebuild the matrix from that design.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `linopt.matrix` holds the matrix helpers:
  - `permanent(m)` computes the permanent of a square matrix. It uses
    closed forms for sizes 2 and 3. Larger sizes use Glynn's formula
    with Gray-code summation.
  - `hurwitz(x)` builds an N x N unitary from N² parameters. It maps
    uniform points of the unit hypercube to Haar-random unitaries.
  - `exp_hermite(x)` builds `exp(iH)` from the N² entries of a Hermitian
    matrix `H`. The first N values are the diagonal of `H`. The rest are
    (real, imaginary) pairs of the upper triangle.
  - `matrix_fidelity(a, b)` returns the normalised fidelity
    `|Tr(A†B)|² / (Tr(A†A) Tr(B†B))`.
  - `is_column_unitary`, `is_row_unitary` and `is_unitary` check for
    unitarity within a tolerance `eps`. The default tolerance is
    `DEFAULT_EPSILON = 1e-15`, which is very strict. Pass a looser `eps`
    for matrices that were computed numerically.
- `linopt.fock` holds the types for Fock states and bases:
  - `Fock` is an immutable tuple of occupation numbers. It has
    `total()`, `prod_fact()` and `as_list()`. `+` adds two Fock states
    mode by mode. `*` is the tensor product, which concatenates the modes.
  - `Basis` is a set of Fock states, iterated in lexicographic order.
    - `Basis.generate(nphot, modes)` returns every state with `nphot`
      photons in `modes` modes.
    - `+` is the union of two bases and `*` their tensor product.
    - `postselect(ancilla)` keeps the states whose leading modes equal
      `ancilla`, with those modes removed.
    - `apply_function(func)` builds a `State` from the basis by calling
      `func` on each Fock state.
  - `Execution` selects how amplitudes are computed. `Execution.SEQ`
    computes them one after another. `Execution.PAR` computes them in a
    thread pool.
- `linopt.state` holds `State`, a mapping from Fock states to complex
  amplitudes:
  - `+` and `-` give superpositions, `*` between states gives the tensor
    product, and `*` and `/` with a number scale the state.
  - It also has `norm()`, `normalize()`, `dot()` and the free function
    `dot(a, b)`.
  - `postselect` accepts three kinds of argument:
    - a Fock state, which returns the postselected state;
    - an integer number of ancilla modes, which returns a dict from each
      ancilla found to its state;
    - a `Basis`, which returns a dict with one entry per ancilla.
  - `set_amplitudes` takes either a sequence or a function of the Fock
    state. With a sequence, `Execution.PAR` raises `NotSupported`.
  - Setting an amplitude to zero removes that Fock state.
- `linopt.circuit` holds `Circuit`:
  - It has three properties: `input_state`, `unitary` and
    `output_basis`.
  - `output_state()` computes the amplitude of every Fock state in the
    output basis from permanents of submatrices of the unitary.
  - The result is cached until one of the three properties changes.
- `linopt.circuit_design` holds two functions:
  - `clements_design(x, y=None, initial=None)` returns the unitary of a
    Clements interferometer.
    - `x` has N(N-1) phase shifts.
    - `y` is optional and gives the beam-splitter angle defects.
    - `initial` is an optional diagonal unitary to start from.
  - `get_clements_design(m, eps)` decomposes a unitary. It returns a
    pair `(x, d)`, where `d` is the remaining diagonal unitary. If `eps`
    is not positive, the unitarity check is skipped.
- `linopt.cost` holds cost functions for gate design. Each one postselects
  the circuit output on every ancilla of an ancilla basis and compares the
  result with a set of target states:
  - `StanisicFunctor` sums `p·F⁵` and builds the unitary with
    `exp_hermite`.
  - `LogFunctor` sums `0.01·p / (1.01 − F)` and builds the unitary with
    `hurwitz`.
  - Both derive from `CostFunctor`.
- `linopt.errors` defines the exceptions: `GeneralError` and its
  subclasses `WrongSize`, `NotUnitary` and `NotSupported`.
- `linopt.benchmark` times the output-state computation of a random
  circuit.

## Example

```python
import numpy as np

from linopt.circuit import Circuit
from linopt.fock import Basis, Fock
from linopt.matrix import hurwitz, is_unitary
from linopt.state import State

modes = 4
rng = np.random.default_rng(1)
u = hurwitz(rng.random(modes * modes))   # Haar-random 4x4 unitary
assert is_unitary(u, 1e-12)

circuit = Circuit()
circuit.unitary = u
circuit.input_state = State(Fock([1, 1, 0, 0]))
circuit.output_basis = Basis.generate(2, modes)

out = circuit.output_state()
print(out)
print(out.norm())                        # 1.0 up to rounding

# Postselect on the first mode holding no photons
print(out.postselect(Fock([0])))
```

Clements design round trip:

```python
from linopt.circuit_design import clements_design, get_clements_design

x = [0.1, 0.2, 0.3, 0.4, 0.5, 0.6]       # N*(N-1) parameters, N = 3
m = clements_design(x)
params, diagonal = get_clements_design(m, eps=1e-12)
```

Sizes that do not fit raise `linopt.errors.WrongSize`. For example,
`hurwitz` raises it for a parameter list whose length is not a perfect
square. `get_clements_design` raises `linopt.errors.NotUnitary` for a
matrix that fails the unitarity test.

## Benchmark

The package installs a command that times the output-state computation
for a Haar-random circuit:

```
linopt-benchmark --nphot 4 --modes 8
```

- Half of the photons and modes form the ancilla.
- The input state has one photon in each of the first half of the modes.
- Amplitudes are computed in a thread pool by default. `--sequential`
  computes them one after another.
- `--seed` fixes the random circuit.
- The defaults are 10 photons in 20 modes. At that size the output basis
  holds millions of Fock states, so a run is very long.

The same run is available from Python as `linopt.benchmark.run`. It
returns the output state, the elapsed seconds and the number of threads.

## Limitations

The cost functions only evaluate a parametrised circuit. The package
contains no optimiser that searches for parameters which minimise them.