"""
JimTeX: evaluate the math in LaTeX documents.
"""
__version__ = "0.1.0"
