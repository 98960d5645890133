"""Domain layer for biztracker.

Submodules are imported directly (``biztracker.domain.metrics`` and so on);
this package keeps no imports of its own so that entities and utilities can
depend on each other without import cycles.
"""
