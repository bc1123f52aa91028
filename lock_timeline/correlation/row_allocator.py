"""
Row Allocator - Assigns display rows to actor timelines.

Rows are handed out sequentially and recycled cyclically once the visible row
budget is exhausted. Timelines that share a correlation identifier are placed
on the row first assigned to that identifier.
"""

from typing import Dict, Hashable, Optional, Tuple


class RowAllocator:
    """
    Stateful row-index assignment with correlation-based reuse.

    The correlation mapping is owned by the caller when supplied, so a single
    recomputation can inspect which identifiers were assigned which rows.
    """

    def __init__(self, max_rows: int, correlation_rows: Optional[Dict[Hashable, int]] = None):
        """
        Initialize the allocator.

        Args:
            max_rows (int): Number of rows that fit on screen (floored at 1)
            correlation_rows (dict): Mapping of correlation id to row, filled in place
        """
        self.max_rows = max(1, int(max_rows))
        self.correlation_rows = correlation_rows if correlation_rows is not None else {}
        self.next_row = 0
        self.reused_count = 0

    def allocate(self, correlation_id: Optional[Hashable] = None) -> Tuple[int, bool]:
        """
        Assign a row.

        Args:
            correlation_id: Transaction identifier shared by correlated timelines,
                            or None for an uncorrelated timeline

        Returns:
            tuple: (row, reused) where reused is True if the row came from an
                   earlier timeline with the same correlation id
        """
        if correlation_id is not None and correlation_id in self.correlation_rows:
            self.reused_count += 1
            return self.correlation_rows[correlation_id], True

        row = self.next_row
        if correlation_id is not None:
            self.correlation_rows[correlation_id] = row

        self.next_row += 1
        if self.next_row >= self.max_rows:
            self.next_row = 0

        return row, False

    def reset(self):
        """Forget all assignments."""
        self.next_row = 0
        self.reused_count = 0
        self.correlation_rows.clear()

    def __repr__(self):
        return (
            f"RowAllocator(max_rows={self.max_rows}, next_row={self.next_row}, "
            f"correlations={len(self.correlation_rows)})"
        )
