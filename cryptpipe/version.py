"""Package version, taken from the engine constant."""

from .main import cryptpipe

__version__ = cryptpipe.ENGINE_VERSION

__all__ = ["__version__"]
