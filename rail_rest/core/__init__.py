"""
Core metadata model, registry and settings.
"""
