"""Formatting helpers for the dashboard."""

from .data_formatter import DataFormatter, WorkoutEntry, EntryDetail, MONTHS, ICONS

__all__ = ['DataFormatter', 'WorkoutEntry', 'EntryDetail', 'MONTHS', 'ICONS']
