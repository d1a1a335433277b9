"""JWT Pizza Service: pizza ordering API with franchise management."""

__version__ = "1.0.0"
