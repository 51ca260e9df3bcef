"""
Starship Shop: catalog browsing, session cart and reward credits.
"""

__version__ = "1.0.0"
