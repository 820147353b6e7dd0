"""Rendering, splicing, detection and file services."""
