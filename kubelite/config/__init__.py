"""Kubelite configuration."""
