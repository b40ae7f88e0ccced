"""Reusable patterns behind the catalog verticals.

Each module is a self-contained piece that the verticals configure rather
than reimplement: the rules engine, the deletion state machine, the
repository base, concurrent aggregation, and the mutation and deletion
pipelines driven by entity profiles.
"""
