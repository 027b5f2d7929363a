"""Base class for page writers.

A page writer receives page images one at a time, in page order, and
assembles them into an output document.
"""

from abc import ABC, abstractmethod

from ..raster import PageImage


class PageWriter(ABC):
    """Abstract base class for page writers.

    Writers must accept pages strictly in increasing order. The first page
    starts the document; every later page adds a page boundary first.
    """

    @abstractmethod
    def write_page(self, page: PageImage, is_first_page: bool) -> None:
        """Append one page to the output document.

        Args:
            page: Cropped page image with its slice spec
            is_first_page: True only for the first page of the document
        """
        pass

    def __call__(self, page: PageImage, is_first_page: bool) -> None:
        self.write_page(page, is_first_page)
