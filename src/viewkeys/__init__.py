"""View-scoped key sequence resolution for terminal applications."""

__all__ = [
    "adapters",
    "dispatch",
    "keymaps",
    "runtime",
]

__version__ = "0.1.0"
