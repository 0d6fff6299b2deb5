"""
Core Package

Immutable value types shared by the layout engine, block sources and
output writers.
"""
