"""LED strip effects controller with Art-Net input, DMX output, scenes and a web console."""

__version__ = "0.1.0"