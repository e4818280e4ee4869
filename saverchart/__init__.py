"""Saver balance history dashboard."""
