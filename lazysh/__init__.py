"""Generate lazy-loading wrappers for slow bash, zsh and fish init commands."""

__version__ = "0.1.0"
__all__ = ["__version__"]