"""Leaf utilities with no parser or model imports."""
