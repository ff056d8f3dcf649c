"""
ShoppersPoint shopping list package.

The package holds the list/item models, the observable store that persists them
to a key/value blob backend, and a small command-line front end.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
