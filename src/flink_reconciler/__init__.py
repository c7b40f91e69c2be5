"""Reconciliation engine for Flink clusters running on Kubernetes."""

__version__ = "0.1.0"

__all__ = ["__version__"]
