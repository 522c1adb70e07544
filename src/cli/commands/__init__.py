"""CLI command modules."""

from .analyze import analyze
from .predict import predict
from .serve import serve

__all__ = [
    "analyze",
    "predict",
    "serve",
]
