"""Lazy, validating JSON reader that scans documents in place."""

__version__ = "0.1.0"
__all__ = ["scanner", "value", "printer"]