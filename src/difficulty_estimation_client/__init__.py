"""Difficulty Estimation Client package.

This package organizes the request/response models, the response normalizer,
the LangGraph submission pipeline, and the request coordinator that turns a
submitted experience into a chart-ready difficulty assessment.
"""

from . import config, coordinator, errors, graph, models, nodes, normalizer, state, tools
from .config import ClientConfig, load_config
from .coordinator import RequestCoordinator
from .normalizer import Err, Ok, normalize_response

__all__ = [
    "config",
    "coordinator",
    "errors",
    "graph",
    "models",
    "nodes",
    "normalizer",
    "state",
    "tools",
    "ClientConfig",
    "load_config",
    "RequestCoordinator",
    "Ok",
    "Err",
    "normalize_response",
]
