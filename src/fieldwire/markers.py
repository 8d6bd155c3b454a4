from fieldwire._internal.markers import Inject, inject, injectable, singleton

__all__ = ["Inject", "inject", "injectable", "singleton"]
