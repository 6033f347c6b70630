"""Mass-spring soft-body simulation of a jelly cube steered by a rigid control cube."""

__version__ = "0.1.0"