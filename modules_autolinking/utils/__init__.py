"""Utility helpers for the autolinking CLI."""
