"""Ingestion layer.

Adapters that receive readings from a positioning sensor and emit
validated, unit-normalized fix models.
"""

__all__: list[str] = []
