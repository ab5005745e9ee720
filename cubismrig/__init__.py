"""Parameters, drawables, blink, breath and look effects, and view matrices for Cubism-style 2D models."""

__version__ = "0.1.0"