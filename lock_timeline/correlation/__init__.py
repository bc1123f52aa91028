"""
Timeline Correlation

This module groups protocol entries into per-actor timelines and assigns
display rows, sharing rows between actors of the same transaction.
"""

from .grouping_engine import group_entries, parse_correlation, TimelineGroup
from .row_allocator import RowAllocator

__all__ = ['group_entries', 'parse_correlation', 'TimelineGroup', 'RowAllocator']
