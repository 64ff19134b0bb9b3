"""Shared utilities — cross-cutting concerns.

Rules
-----
* No business logic.
* Importable by any layer.
"""
