"""
Core arithmetic engine: natural numbers, limb primitives, and value snapshots.

This module contains the foundational building blocks consumed by the
expression evaluator; it performs no I/O.
"""
