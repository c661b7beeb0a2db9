# =======================================================================
# surface.py  –  Render targets: drawing primitives with explicit style
# =======================================================================
#
# Every primitive carries its own colour / width / alpha, there is no
# shared "current paint" state between calls.
#
#   RenderTarget      – the contract the renderers draw against
#   RecordingSurface  – headless, keeps a list of DrawCall records
#   PygameSurface     – draws onto a pygame.Surface
# -----------------------------------------------------------------------
from __future__ import annotations
import colorsys
import math
from contextlib import contextmanager
from typing import NamedTuple, Sequence

import numpy as np
import pygame as pg

Color = tuple[int, int, int]
Point = tuple[float, float]

ANCHORS = ("center", "midleft", "midright", "midtop", "midbottom", "topleft", "topright", "bottomleft", "bottomright")


def hsl(h:float, s:float, l:float) -> Color:
    """CSS-style hsl(h deg, s %, l %) to an RGB tuple."""
    r, g, b = colorsys.hls_to_rgb((h % 360)/360.0, max(0.0, min(100.0, l))/100.0, max(0.0, min(100.0, s))/100.0)
    return round(r*255), round(g*255), round(b*255)


def arc_points(cx:float, cy:float, r:float, start:float, end:float, segments:int = 24) -> list[Point]:
    """Polyline approximation of a circular arc, angles in radians (screen coordinates, y down)."""
    a = np.linspace(start, end, segments + 1)
    return list(zip((cx + r*np.cos(a)).tolist(), (cy + r*np.sin(a)).tolist()))


def arrow_head(x1:float, y1:float, x2:float, y2:float, size:float) -> list[Point]:
    """Triangle at (x2, y2) pointing along the segment (x1, y1) -> (x2, y2)."""
    ang = math.atan2(y2 - y1, x2 - x1)
    return [(x2, y2),
            (x2 - size*math.cos(ang - math.pi/6), y2 - size*math.sin(ang - math.pi/6)),
            (x2 - size*math.cos(ang + math.pi/6), y2 - size*math.sin(ang + math.pi/6))]


class DrawCall(NamedTuple):
    kind: str                   # 'clear' | 'stroke' | 'fill' | 'circle' | 'text'
    points: tuple = ()
    color: Color = (0, 0, 0)
    alpha: float = 1.0
    width: float = 0.0          # stroke width, circle radius for 'circle'
    text: str = ""
    size: int = 0               # font size for 'text'
    closed: bool = False
    tag: str = ""


class RenderTarget:
    """Abstract drawing surface. `size` is read once per frame by the engine."""
    tag = ""   # label stamped on recorded calls, only set through labelled()

    @contextmanager
    def labelled(self, tag:str):
        """Stamps *tag* on every call made inside the block; the previous label comes back even if drawing raises."""
        prev, self.tag = self.tag, tag
        try:
            yield self
        finally:
            self.tag = prev

    @property
    def size(self) -> tuple[int, int]: raise NotImplementedError
    def clear(self, color:Color): raise NotImplementedError
    def stroke_path(self, points:Sequence[Point], color:Color, width:float = 1.0, alpha:float = 1.0, closed:bool = False): raise NotImplementedError
    def fill_path(self, points:Sequence[Point], color:Color, alpha:float = 1.0): raise NotImplementedError
    def fill_circle(self, center:Point, radius:float, color:Color, alpha:float = 1.0): raise NotImplementedError
    def text(self, pos:Point, s:str, color:Color, size:int = 14, anchor:str = "center", alpha:float = 1.0, bold:bool = False): raise NotImplementedError


class RecordingSurface(RenderTarget):
    """Keeps every primitive as a DrawCall. Used for headless runs and tests."""

    def __init__(self, width:int = 800, height:int = 500):
        self.width, self.height = width, height
        self.calls: list[DrawCall] = []

    @property
    def size(self): return self.width, self.height

    def resize(self, width:int, height:int): self.width, self.height = width, height

    def reset(self): self.calls.clear()

    def tagged(self, tag:str) -> list[DrawCall]:
        return [c for c in self.calls if c.tag == tag]

    def clear(self, color):
        self.calls.append(DrawCall('clear', color=color, tag=self.tag))

    def stroke_path(self, points, color, width=1.0, alpha=1.0, closed=False):
        self.calls.append(DrawCall('stroke', tuple(points), color, alpha, width, closed=closed, tag=self.tag))

    def fill_path(self, points, color, alpha=1.0):
        self.calls.append(DrawCall('fill', tuple(points), color, alpha, tag=self.tag))

    def fill_circle(self, center, radius, color, alpha=1.0):
        self.calls.append(DrawCall('circle', (tuple(center),), color, alpha, radius, tag=self.tag))

    def text(self, pos, s, color, size=14, anchor="center", alpha=1.0, bold=False):
        if anchor not in ANCHORS: raise ValueError(f"unknown text anchor {anchor!r}")
        self.calls.append(DrawCall('text', (tuple(pos),), color, alpha, text=s, size=size, tag=self.tag))


class PygameSurface(RenderTarget):
    """Draws onto a pygame Surface. Translucent primitives go through a small SRCALPHA scratch surface."""

    FONT_NAME = "DejaVu Sans, Segoe UI, Arial, sans-serif"

    def __init__(self, surf:pg.Surface, font_scale:float = 1.0):
        self.surf = surf
        self.font_scale = font_scale
        self._fonts: dict[tuple[int, bool], pg.font.Font] = {}

    @property
    def size(self): return self.surf.get_size()

    def _font(self, size:int, bold:bool) -> pg.font.Font:
        key = (max(1, int(size*self.font_scale)), bold)
        if key not in self._fonts:
            if not pg.font.get_init(): pg.font.init()
            try: self._fonts[key] = pg.font.SysFont(self.FONT_NAME, key[0], bold=bold)
            except (OSError, pg.error): self._fonts[key] = pg.font.Font(None, key[0])
        return self._fonts[key]

    def _translucent(self, points, pad:float, draw):
        """Runs draw(scratch, shifted_points) on a scratch surface covering the points' bounding box, then blits it."""
        xs = [p[0] for p in points]; ys = [p[1] for p in points]
        x0, y0 = int(math.floor(min(xs) - pad)), int(math.floor(min(ys) - pad))
        w, h = int(math.ceil(max(xs) + pad)) - x0 + 1, int(math.ceil(max(ys) + pad)) - y0 + 1
        if w <= 0 or h <= 0: return
        scratch = pg.Surface((w, h), pg.SRCALPHA)
        draw(scratch, [(x - x0, y - y0) for x, y in points])
        self.surf.blit(scratch, (x0, y0))

    @staticmethod
    def _rgba(color, alpha): return (*color, int(255*max(0.0, min(1.0, alpha))))

    def clear(self, color):
        self.surf.fill(color)

    def stroke_path(self, points, color, width=1.0, alpha=1.0, closed=False):
        if len(points) < 2 or alpha <= 0: return
        w = max(1, int(round(width)))
        if alpha >= 1:
            pg.draw.lines(self.surf, color, closed, points, w)
        else:
            rgba = self._rgba(color, alpha)
            self._translucent(points, w, lambda s, pts: pg.draw.lines(s, rgba, closed, pts, w))

    def fill_path(self, points, color, alpha=1.0):
        if len(points) < 3 or alpha <= 0: return
        if alpha >= 1:
            pg.draw.polygon(self.surf, color, points)
        else:
            rgba = self._rgba(color, alpha)
            self._translucent(points, 1, lambda s, pts: pg.draw.polygon(s, rgba, pts))

    def fill_circle(self, center, radius, color, alpha=1.0):
        if radius <= 0 or alpha <= 0: return
        if alpha >= 1:
            pg.draw.circle(self.surf, color, center, radius)
        else:
            rgba = self._rgba(color, alpha)
            self._translucent([center], radius + 1, lambda s, pts: pg.draw.circle(s, rgba, pts[0], radius))

    def text(self, pos, s, color, size=14, anchor="center", alpha=1.0, bold=False):
        if anchor not in ANCHORS: raise ValueError(f"unknown text anchor {anchor!r}")
        surf = self._font(size, bold).render(s, True, color)
        if alpha < 1: surf.set_alpha(int(255*max(0.0, alpha)))
        self.surf.blit(surf, surf.get_rect(**{anchor: (round(pos[0]), round(pos[1]))}))
