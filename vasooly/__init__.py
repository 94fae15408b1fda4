"""Vasooly: split bills in integer paise and track who has paid"""

__version__ = "1.0.0"
