"""Study Timer - a terminal clock with a focus/break interval timer."""

__version__ = "0.1.0"
