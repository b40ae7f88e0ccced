"""Catalog vertical — the local library's staff-facing catalog.

Four collections and the patterns that drive them:
- SQLAlchemy models for authors, genres, books and book copies
- Async repositories with the dependent queries used by deletion
- Validation configurations for the rules engine
- Entity profiles for the mutation and deletion pipelines
- FastAPI routers and HTML views
"""
