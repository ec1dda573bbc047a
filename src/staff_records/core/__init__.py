"""Shared building blocks: constants, clock, dates and logging helpers."""
