"""
Parsing Strategies Package

This package contains the strategy implementations used by the extraction
pipeline. Parsers follow the BaseParser abstract class so another export
layout can be plugged into the same pipeline steps.
"""

from . import parsing

__all__ = ["parsing"]
