"""
Accessor Layer - typed values bound to settings store keys.
"""

from storebacked.binding.binding import MISSING, Binding, BindingFailure, Diagnostic, log_failure
from storebacked.binding.descriptor import StoreBacked, binding_of

__all__ = [
    "MISSING",
    "Binding",
    "BindingFailure",
    "Diagnostic",
    "log_failure",
    "StoreBacked",
    "binding_of",
]
