"""
Mock reader implementation for testing page turn gestures.
"""
import logging

logger = logging.getLogger(__name__)


class MockReader:
    """Mock document reader that logs page turns instead of rendering them."""

    def __init__(self, page_count: int, start_page: int = 0):
        """
        Initialize the mock reader.

        Args:
            page_count: Number of pages in the document
            start_page: Page shown first (0-based)
        """
        if page_count < 1:
            raise ValueError(f"page_count must be positive, got {page_count}")
        self.page_count = page_count
        self.current_page = max(0, min(page_count - 1, start_page))
        self.next_count = 0
        self.prev_count = 0

    def next_page(self) -> None:
        """Advance one page, staying on the last page at the end."""
        self.next_count += 1
        if self.current_page < self.page_count - 1:
            self.current_page += 1
        logger.info(f"[MockReader] Next page -> {self.current_page + 1}/{self.page_count} (call #{self.next_count})")

    def prev_page(self) -> None:
        """Go back one page, staying on the first page at the start."""
        self.prev_count += 1
        if self.current_page > 0:
            self.current_page -= 1
        logger.info(f"[MockReader] Previous page -> {self.current_page + 1}/{self.page_count} (call #{self.prev_count})")

    def reset_counters(self) -> None:
        """Reset action counters for testing."""
        self.next_count = 0
        self.prev_count = 0
