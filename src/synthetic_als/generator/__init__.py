"""Synthetic rating-graph generator package."""

from .config import GeneratorConfig, load_config
from .core import GenerationSummary, generate_graph

__all__ = ["GeneratorConfig", "GenerationSummary", "generate_graph", "load_config"]
