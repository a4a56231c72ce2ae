"""
Initializes the 'src' directory as a Python package.

This allows the root-level 'main.py' runner to import the 'fontpair' package
from a source checkout as 'src.fontpair'.
"""
