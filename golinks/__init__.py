"""
golinks: a short-name redirect service.

This package provides a FastAPI application that resolves short names to
target URLs through a pluggable route store, plus a small JSON API and edit
page for managing them.
"""

__version__ = "0.1.0"
