"""
Interface layer - user-facing entry points.
"""
