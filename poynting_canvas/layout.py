from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class CircuitGeometry:
    left: float
    right: float
    top: float
    bottom: float

    @property
    def width(self) -> float: return self.right - self.left
    @property
    def height(self) -> float: return self.bottom - self.top
    @property
    def center(self) -> tuple[float, float]: return (self.left+self.right)/2, (self.top+self.bottom)/2
    @property
    def source_point(self) -> tuple[float, float]: return self.left, (self.top+self.bottom)/2
    @property
    def load_point(self) -> tuple[float, float]: return self.right, (self.top+self.bottom)/2
    @property
    def perimeter(self) -> float: return 2*self.width + 2*self.height
    @property
    def is_degenerate(self) -> bool: return self.width <= 0 or self.height <= 0

    def point_at(self, pos:float) -> tuple[float, float]:
        """Maps a perimeter fraction in [0, 1) to (x, y), walking top -> right -> bottom -> left."""
        w, h = self.width, self.height
        d = (pos % 1.0) * self.perimeter
        if d < w:           return self.left + d, self.top                  # top, left to right
        if d < w + h:       return self.right, self.top + (d - w)           # right, downwards
        if d < 2*w + h:     return self.right - (d - w - h), self.bottom    # bottom, right to left
        return self.left, self.bottom - (d - 2*w - h)                       # left, upwards


def layout(width:float, height:float, width_fraction:float = 0.7, height_fraction:float = 0.5) -> CircuitGeometry:
    """Centered circuit rectangle covering a fixed fraction of the target.

    Non-positive target sizes give a zero-area rectangle at the origin instead of raising,
    since a target can be measured before it is attached to a visible surface.
    """
    if width <= 0 or height <= 0:
        return CircuitGeometry(0.0, 0.0, 0.0, 0.0)
    cx, cy = width / 2, height / 2
    cw, ch = width * width_fraction, height * height_fraction
    return CircuitGeometry(left=cx - cw/2, right=cx + cw/2, top=cy - ch/2, bottom=cy + ch/2)
