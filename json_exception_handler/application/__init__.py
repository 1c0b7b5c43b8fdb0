"""
Application layer.

Turns a raised failure into a fully populated error document and hosts
the pluggable classification hooks.
"""
