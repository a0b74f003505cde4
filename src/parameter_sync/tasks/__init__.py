"""
Parameter sync tasks package.

Task modules are collected by the main __init__.py using Collection.from_module().
"""

from ..config.logging import bootstrap_logging


def setup_logging(debug=False):
    """Set up logging configuration based on debug flag."""
    bootstrap_logging(debug=debug)
    if debug:
        print("🐛 Debug logging enabled")
