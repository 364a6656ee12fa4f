"""Teacher gradebook."""

from .gradebook import Gradebook

__all__ = ["Gradebook"]
