"""
Flatten a GitHub repository into a browsable HTML page and a CXML text stream.
"""

__version__ = "0.1.0"
