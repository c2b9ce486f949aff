"""MechLab - interactive classical mechanics explorer."""

__version__ = "1.0.0"
