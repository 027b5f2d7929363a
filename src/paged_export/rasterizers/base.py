"""Base class for rasterizers.

Rasterizers render a document of arbitrary height to one tall
SourceRaster. They run to completion before the paged exporter is called.
"""

from abc import ABC, abstractmethod
from typing import Any

from ..raster import SourceRaster

# PDF user space is 72 points per inch; CSS pixels are 96 per inch.
POINTS_PER_INCH = 72
CSS_PX_PER_INCH = 96


class Rasterizer(ABC):
    """Abstract base class for rasterizers."""

    @abstractmethod
    def rasterize(self, source: Any) -> SourceRaster:
        """Render *source* to a single raster.

        Raises:
            RasterizationError: If rendering fails
        """
        pass
