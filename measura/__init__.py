"""Physical quantities with tracked dimensions, unit conversion, formatting and parsing."""

__version__ = "0.1.0"

__all__ = ["storage", "unit", "system", "quantity", "fmt", "si"]