"""Renderer implementations."""
