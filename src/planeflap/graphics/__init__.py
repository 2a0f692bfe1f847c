"""Rendering for planeflap."""
