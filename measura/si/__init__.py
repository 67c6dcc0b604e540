"""Velocity, volume and volume rate kinds of the International System of Quantities."""

__all__ = ["velocity", "volume", "volume_rate"]