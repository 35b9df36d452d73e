"""Application use cases built on the clients, billing and persistence layers."""

from .solver import (
    CropRequest,
    EmptyQueryError,
    MathSolverService,
    NoCreditsError,
    SearchResult,
    SearchService,
    ServiceError,
    SolveResult,
)

__all__ = [
    "CropRequest",
    "EmptyQueryError",
    "MathSolverService",
    "NoCreditsError",
    "SearchResult",
    "SearchService",
    "ServiceError",
    "SolveResult",
]
