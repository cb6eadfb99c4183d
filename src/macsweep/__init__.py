"""macsweep - inspect and clean macOS system data safely."""

__version__ = "0.1.0"
