"""
stackwm - Tiling workspace manager (main + stack layout).

Run with:  python -m stackwm [--config PATH] [--debug]
"""

__version__ = "0.1.0"
