"""
I'm Busy Y'all - Fake Log Generator

This package prints plausible, colorized server logs for a chosen
data source at a rate that rises and falls along a bell curve.
"""

__version__ = "1.0.0"
__author__ = "imbusyyall"
