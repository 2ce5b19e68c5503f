"""Generational engine, strategies and probabilistic primitives."""
