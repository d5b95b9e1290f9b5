# gridpath/app/theme_skin.py
"""
Neon skin for the board (visuals only; no logic)
- Backdrop: dark vertical gradient, cached per window size
- Grid: one flat tile per cell kind, dark borders, pulsing current cell
- Path: mint line through the traced cells, pulses once the run completes
- Right panel: frosted glass underlay only (viewer draws buttons/metrics on top)

The viewer stays the source of truth for interactivity; this module only
reads v.grid, v.controller, v.cell_size, v._grid_origin and v._right_band.
"""

from __future__ import annotations
import math, time
from typing import Dict, Tuple

import pygame

from gridpath.core.playback import COMPLETED
from gridpath.core.types import EMPTY, WALL, START, END, VISITED, PATH, CURRENT

# ---- palette ----
GRID_LINE     = (40, 44, 54)
TEXT_LIGHT    = (230, 235, 240)
ACCENT_GOLD   = (255, 210, 0)
GREEN_NEON    = (0, 255, 200)

KIND_COLORS: Dict[str, Tuple[int, int, int]] = {
    EMPTY:   (200, 200, 200),
    WALL:    ( 30,  34,  44),
    START:   ( 70, 130, 180),
    END:     (220,  50,  47),
    VISITED: (255,   0, 120),
    PATH:    (  0, 255, 200),
    CURRENT: (255, 210,   0),
}
VISITED_BLEND = 0.35   # visited tiles are tinted, not solid

# panel colors
PANEL_FILL    = (18, 20, 28, 190)
PANEL_SHADOW  = (0, 0, 0, 140)

# caches
_backdrop_by_size: dict[Tuple[int, int], pygame.Surface] = {}

# ---------- helpers ----------
def _rounded_rect(surface: pygame.Surface, rect: pygame.Rect, color, radius=16, width=0):
    pygame.draw.rect(surface, color, rect, width=width, border_radius=radius)

def _mix(a, b, t: float) -> Tuple[int, int, int]:
    return (
        int(a[0] + (b[0]-a[0]) * t),
        int(a[1] + (b[1]-a[1]) * t),
        int(a[2] + (b[2]-a[2]) * t),
    )

def tile_color(kind: str) -> Tuple[int, int, int]:
    if kind == VISITED:
        return _mix(KIND_COLORS[EMPTY], KIND_COLORS[VISITED], VISITED_BLEND)
    return KIND_COLORS.get(kind, KIND_COLORS[EMPTY])

def glass_panel(screen: pygame.Surface, rect: pygame.Rect,
                fill_rgba=PANEL_FILL, shadow_rgba=PANEL_SHADOW):
    if rect.width <= 0 or rect.height <= 0:
        return
    shadow = pygame.Surface((rect.width + 18, rect.height + 18), pygame.SRCALPHA)
    _rounded_rect(shadow, pygame.Rect(9, 9, rect.width, rect.height), shadow_rgba, radius=20)
    screen.blit(shadow, (rect.x - 9, rect.y - 9))
    card = pygame.Surface(rect.size, pygame.SRCALPHA)
    _rounded_rect(card, pygame.Rect(0, 0, rect.width, rect.height), fill_rgba, radius=20)
    # subtle top sheen
    hi = pygame.Surface((rect.width, max(18, rect.height // 12)), pygame.SRCALPHA)
    pygame.draw.rect(hi, (255,255,255,18), hi.get_rect(), border_radius=18)
    card.blit(hi, (0,0))
    screen.blit(card, rect.topleft)

def draw_backdrop(screen: pygame.Surface):
    size = screen.get_size()
    if size not in _backdrop_by_size:
        w, h = size
        surf = pygame.Surface(size)
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            pygame.draw.line(surf, _mix(top, bot, y / max(1, h-1)), (0, y), (w, y))
        _backdrop_by_size.clear()
        _backdrop_by_size[size] = surf
    screen.blit(_backdrop_by_size[size], (0, 0))

def draw_grid(v, screen: pygame.Surface):
    cs = v.cell_size
    ox, oy = v._grid_origin
    grid = v.grid

    for row in grid.cells:
        for cell in row:
            rect = pygame.Rect(ox + cell.col*cs, oy + cell.row*cs, cs, cs)
            pygame.draw.rect(screen, tile_color(cell.kind), rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)

    # current cell of a running search
    cur = v.controller.current
    if cur is not None:
        k = 0.5 * (1.0 + math.sin(time.time() * 10.0))
        r, c = cur
        rect = pygame.Rect(ox + c*cs, oy + r*cs, cs, cs)
        pygame.draw.rect(screen, _mix(KIND_COLORS[CURRENT], (255, 255, 255), 0.4 * k), rect)

    # full path line only for a completed run; a cancelled trace keeps its partial tiles
    result = v.controller.result
    if v.controller.state == COMPLETED and result is not None and result.found and len(result.path) >= 2:
        pts = [(ox + c*cs + cs//2, oy + r*cs + cs//2) for (r, c) in result.path]
        k = 0.5 * (1.0 + math.sin(time.time() * 4.0))
        width = max(2, cs // 5 + int(2 * k))
        pygame.draw.lines(screen, GREEN_NEON, False, pts, width)

    _draw_marker(v, screen, grid.start, "S")
    _draw_marker(v, screen, grid.end, "E")

def _draw_marker(v, screen: pygame.Surface, cell, label: str):
    cs = v.cell_size
    ox, oy = v._grid_origin
    r, c = cell
    cx = ox + c*cs + cs//2
    cy = oy + r*cs + cs//2
    color = KIND_COLORS[START] if label == "S" else KIND_COLORS[END]
    pygame.draw.circle(screen, color, (cx, cy), max(4, cs//2 - 2))
    txt = v.font_small.render(label, True, (255, 255, 255))
    screen.blit(txt, txt.get_rect(center=(cx, cy)))

def draw(viewer, screen: pygame.Surface) -> None:
    """
    Draw order:
      1) backdrop
      2) board tiles, current cell, path line, markers
      3) frosted right panel underlay
      (viewer draws text/buttons afterwards)
    """
    draw_backdrop(screen)
    draw_grid(viewer, screen)

    rb = getattr(viewer, "_right_band", None)
    if isinstance(rb, pygame.Rect):
        glass_panel(screen, rb.inflate(-12, -12))
