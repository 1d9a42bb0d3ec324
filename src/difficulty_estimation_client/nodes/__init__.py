from . import (
    ingestion,
    normalizer,
    presentation,
    request,
)

__all__ = [
    "ingestion",
    "request",
    "normalizer",
    "presentation",
]
