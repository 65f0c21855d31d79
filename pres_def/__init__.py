"""Presentation definition builder.

Keeps a structured field model and a raw presentation definition document
interchangeable across the jwt, sd-jwt and mso_mdoc credential profiles.
"""
