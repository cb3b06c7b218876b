"""
Geometry primitives and elements produced by inspection.
"""
