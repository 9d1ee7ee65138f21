"""pagecompose core Python library package.

Re-exports the exception hierarchy; the composition primitives live in the
``cache``, ``extract`` and ``composition`` subpackages.
"""

from . import exceptions  # noqa: F401

__all__ = ["exceptions"]
