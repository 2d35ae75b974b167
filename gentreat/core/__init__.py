"""
Core domain layers.
"""
