"""Solver engine: genotype spaces and iterative solvers."""
