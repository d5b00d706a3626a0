"""Value types shared by the coordinate mapping and image fitting helpers.

Two coordinate systems meet here:

- the UI's normalized space: fractions of the page, origin top-left, y down
- the PDF's user space: points, origin bottom-left, y up
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class NormalizedRect:
    """Placement box as fractions of the page width/height (top-left origin)."""
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class PageGeometry:
    """Size of the target page in points.

    ``origin_x``/``origin_y`` are the lower-left corner of the media box, which
    is (0, 0) for nearly every PDF but not guaranteed.
    """
    width_pt: float
    height_pt: float
    origin_x: float = 0.0
    origin_y: float = 0.0


@dataclass(frozen=True)
class DocumentRect:
    """Placement box in points, anchored at its bottom-left corner."""
    x_pt: float
    y_pt: float
    width_pt: float
    height_pt: float


@dataclass(frozen=True)
class DrawnRect(DocumentRect):
    """Rectangle the image is actually painted into."""


@dataclass(frozen=True)
class ImageIntrinsics:
    width_px: int
    height_px: int

    @property
    def aspect_ratio(self) -> float:
        return self.width_px / self.height_px
