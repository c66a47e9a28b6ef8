"""Presentation layers for the mentor shell."""
