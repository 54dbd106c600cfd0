"""React Setup -- interactive scaffolder for React + Vite projects."""

__version__ = "0.1.0"
