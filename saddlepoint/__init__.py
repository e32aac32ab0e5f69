"""Assembly and Schur complement solution of block saddle point systems."""

__version__ = "0.1.0"