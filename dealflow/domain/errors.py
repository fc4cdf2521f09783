# dealflow/domain/errors.py
from __future__ import annotations


class DealFlowError(Exception):
    pass


class ConfigurationError(DealFlowError):
    """Static scoring setup is wrong (weights, bands, scorer wiring)."""
