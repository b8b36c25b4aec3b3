"""Simulation of bosonic Fock states in linear-optical unitary networks.

Modules: matrix helpers, Fock states and bases, states, circuits, the
Clements design, cost functions, errors and a timing benchmark.
"""

__version__ = "0.4.0"

__all__ = [
    "benchmark",
    "circuit",
    "circuit_design",
    "cost",
    "errors",
    "fock",
    "matrix",
    "state",
]