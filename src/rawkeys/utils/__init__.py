"""Shared helpers for rawkeys."""
