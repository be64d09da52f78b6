"""Interactive orrery: revolving, spinning planets around a central star."""

__version__ = "1.0.0"
