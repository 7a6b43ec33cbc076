"""Utility modules for pyboxer."""
