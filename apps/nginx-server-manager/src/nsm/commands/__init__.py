"""Typer sub-commands."""
