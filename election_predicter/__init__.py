"""Election Predicter.

Attach candidate metadata to prediction methods and print who runs for which
office.
"""

from __future__ import annotations

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
