"""Map generation engine for tabletop-RPG world maps."""

__version__ = "0.1.0"
