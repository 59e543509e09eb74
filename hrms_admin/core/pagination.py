"""Pagination math shared by every list view."""
import math
from typing import List, Union

ELLIPSIS = "ellipsis"

PageToken = Union[int, str]


def total_pages(total_count: int, page_size: int) -> int:
    """Number of pages for a result set; an empty result still has one page."""
    size = max(1, int(page_size))
    return max(1, math.ceil(max(0, total_count) / size))


def clamp_page(page: int, pages: int) -> int:
    """Clamp a requested page number into [1, pages]."""
    return min(max(1, int(page)), max(1, pages))


def page_window(current_page: int, total: int, delta: int = 2) -> List[PageToken]:
    """
    Build the pagination button model for a list view.

    The first and last pages are always present, along with every page within
    ``delta`` of the current one. Wherever consecutive visible pages are not
    adjacent a single ELLIPSIS token is placed between them.

    Example:
        page_window(5, 10) -> [1, "ellipsis", 3, 4, 5, 6, 7, "ellipsis", 10]
    """
    total = max(1, int(total))
    current = clamp_page(current_page, total)
    delta = max(0, int(delta))

    visible = {1, total}
    visible.update(range(max(1, current - delta), min(total, current + delta) + 1))

    window: List[PageToken] = []
    previous = None
    for page in sorted(visible):
        if previous is not None and page - previous > 1:
            window.append(ELLIPSIS)
        window.append(page)
        previous = page
    return window
