"""Timing of the output-state computation for a random circuit."""

from __future__ import annotations

import argparse
import os
import random
import time
from dataclasses import dataclass

from .circuit import Circuit
from .fock import Basis, Execution, Fock
from .matrix import hurwitz
from .state import State


@dataclass(frozen=True)
class BenchmarkResult:
    """Output state of a random circuit and the time taken to compute it."""

    state: State
    seconds: float
    threads: int


def run(
    nphot: int = 10,
    modes: int = 20,
    exec_policy: Execution = Execution.PAR,
    seed: int | None = None,
) -> BenchmarkResult:
    """Compute the output state of a Haar-random circuit and time it.

    Half of the photons and modes form the ancilla, the other half the
    logical subsystem. The input state has one photon in each of the first
    ``modes // 2`` modes.
    """
    half = Basis.generate(nphot // 2, modes // 2)
    full_basis = half * half
    input_state = Fock([1] * (modes // 2) + [0] * (modes - modes // 2))
    rng = random.Random(seed)
    point = [rng.random() for _ in range(modes * modes)]

    circuit = Circuit()
    circuit.unitary = hurwitz(point)
    circuit.input_state = input_state
    circuit.output_basis = full_basis

    start = time.perf_counter()
    state = circuit.output_state(exec_policy)
    seconds = time.perf_counter() - start
    threads = (os.cpu_count() or 1) if exec_policy is Execution.PAR else 1
    return BenchmarkResult(state=state, seconds=seconds, threads=threads)


def main(argv: list[str] | None = None) -> int:
    """Run the benchmark from the command line."""
    parser = argparse.ArgumentParser(
        description="Time the output-state computation of a random circuit."
    )
    parser.add_argument("--nphot", type=int, default=10, help="number of photons")
    parser.add_argument("--modes", type=int, default=20, help="number of modes")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="compute amplitudes sequentially instead of in parallel",
    )
    args = parser.parse_args(argv)
    policy = Execution.SEQ if args.sequential else Execution.PAR
    result = run(args.nphot, args.modes, policy, args.seed)
    print(
        f"output_state() execution time is {result.seconds} seconds with "
        f"{result.threads} threads."
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())