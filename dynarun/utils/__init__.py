"""Utilities for duration and flag formatting."""
