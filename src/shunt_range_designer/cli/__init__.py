"""
Command-line interface (Click).
"""
