"""Compiler back-end building blocks: three-address IR, control flow graphs, liveness, dead code removal, ARM immediate helpers and enum reflection."""

__version__ = "0.1.0"