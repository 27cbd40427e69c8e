"""ordermap: map JSON trees to typed order objects and back."""

__version__ = "0.1.0"
