"""
sitekit - Content building blocks for websites
==============================================

Image processing, markup rendering with mention and tag links, and the
user registration form.

Version: 0.1.0
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
