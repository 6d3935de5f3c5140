from .categorizer import Categorizer

__all__ = ["Categorizer"]
