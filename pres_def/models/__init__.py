"""Presentation definition builder models."""
