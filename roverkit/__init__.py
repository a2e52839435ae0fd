"""Path planning, motion modelling, trajectory tracking and mapping building blocks for a small rover."""

__version__ = "0.1.0"