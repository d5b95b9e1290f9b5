# gridpath/app/viewer.py
#!/usr/bin/env python3
"""
Pathfinding Board Viewer - Mouse Editing + Controls + Metrics

- Mouse:
    left-drag on empty cells  -> paint / erase walls
    drag start or end marker  -> move it
- Keyboard:
    [1]-[4] or [D]/[A]/[B]/[F] -> select algorithm (Dijkstra / A* / BFS / DFS)
    [SPACE]      -> run / stop
    [M]          -> generate maze
    [C]          -> clear path
    [X]          -> clear all
    [+]/[-]      -> speed
    [Q]/[ESC]    -> quit

Settings:
- ENV: GRIDPATH_SPEED, GRIDPATH_ALGO, GRIDPATH_ROWS, GRIDPATH_COLS, GRIDPATH_LOG_LEVEL
- CLI: --speed=, --algo=, --rows=, --cols=, --log-level=
"""

# --- bootstrap import path so `from gridpath...` works when run as a script ---
import sys, logging
from pathlib import Path
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
# ------------------------------------------------------------------------------

from typing import Optional, Tuple
import pygame

from gridpath.app import theme_skin as THEME
from gridpath.config import Settings, resolve_settings
from gridpath.core.grid import build_grid
from gridpath.core.playback import (
    PlaybackController, IDLE, RUNNING, COMPLETED, CANCELLED, SPEED_MAX, SPEED_MIN,
)
from gridpath.core.search import ALGORITHM_INFO
from gridpath.core.types import Grid, Coord, START, END

logger = logging.getLogger(__name__)

# ---------- Layout ----------
PANEL_W = 360            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 24
FONT_NAME = None  # default pygame font
SPEED_STEP = 10

ALGO_ORDER = ("dijkstra", "astar", "bfs", "dfs")
ALGO_KEYS = {
    pygame.K_1: "dijkstra", pygame.K_d: "dijkstra",
    pygame.K_2: "astar",    pygame.K_a: "astar",
    pygame.K_3: "bfs",      pygame.K_b: "bfs",
    pygame.K_4: "dfs",      pygame.K_f: "dfs",
}

STATE_LABELS = {
    IDLE: "Idle",
    RUNNING: "Running",
    COMPLETED: "Done",
    CANCELLED: "Stopped",
}

# Colors
CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = THEME.TEXT_LIGHT
TEXT_DIM    = (150,158,170)
ACCENT_GOLD = THEME.ACCENT_GOLD
WARN_RED    = (240,110,100)

# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state
        self.enabled = True

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        bg_idle   = (36, 40, 48, 220)
        bg_hover  = (46, 50, 60, 230)
        bg_active = (58, 86, 160, 235)
        border_active = (120, 170, 255, 255)

        if self.active and self.togglable:
            bg = bg_active
        elif self.hover and self.enabled:
            bg = bg_hover
        else:
            bg = bg_idle

        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        hi = pygame.Surface((self.rect.width, 18), pygame.SRCALPHA)
        pygame.draw.rect(hi, (255,255,255,20), hi.get_rect(), border_radius=10)
        base.blit(hi, (0,0))
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, border_active, self.rect, width=2, border_radius=10)

        color = (235,238,242) if self.enabled else TEXT_DIM
        text = font.render(self.label, True, color)
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                if self.enabled:
                    self.callback()
                return True
        return False

# ---------- Viewer ----------
class Viewer:
    def __init__(self, grid: Grid, settings: Settings):
        pygame.init()

        self.controller = PlaybackController(grid, settings.algorithm, settings.speed)
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        # expose constants so theme_skin can read them off `self`
        self.GRID_MARGIN = GRID_MARGIN
        self.PANEL_W     = PANEL_W

        self.cell_size = self._auto_cell_size(grid)
        grid_px_w = GRID_MARGIN*2 + grid.cols * self.cell_size
        grid_px_h = GRID_MARGIN*2 + grid.rows * self.cell_size
        win_w = grid_px_w + PANEL_W
        win_h = max(grid_px_h, 640)

        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Pathfinding - Board")

        self._buttons: list[UIButton] = []
        self._layout(win_w, win_h)

        self.clock = pygame.time.Clock()
        self._drag: Optional[str] = None        # "wall" | "start" | "end"
        self._last_drag_cell: Optional[Coord] = None
        self._flash: str = ""

    @property
    def grid(self) -> Grid:
        # the controller replaces the grid on maze / clear-all
        return self.controller.grid

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and center the grid."""
        avail_w = max(1, win_w - self.PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)

        cs_by_w = avail_w // self.grid.cols
        cs_by_h = avail_h // self.grid.rows
        self.cell_size = int(max(8, min(cs_by_w, cs_by_h))) or 8

        grid_plate_w = self.grid.cols * self.cell_size + 2 * GRID_MARGIN
        grid_plate_h = self.grid.rows * self.cell_size + 2 * GRID_MARGIN

        left_x = max(0, (win_w - (grid_plate_w + self.PANEL_W)) // 2)
        top_y  = max(0, (win_h - grid_plate_h) // 2)

        self.canvas_rect = pygame.Rect(left_x, top_y, grid_plate_w, grid_plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN,
                             self.canvas_rect.y + GRID_MARGIN)

        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(self.PANEL_W, win_w - self.canvas_rect.right),
                                       win_h)
        self._build_buttons()

    def _auto_cell_size(self, grid: Grid) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(12, min(CELL_SIZE_DEFAULT, target_h // grid.rows))

    def _cell_at_pixel(self, pos: Tuple[int, int]) -> Optional[Coord]:
        ox, oy = self._grid_origin
        x, y = pos
        if x < ox or y < oy:
            return None
        cell = ((y - oy) // self.cell_size, (x - ox) // self.cell_size)
        return cell if self.grid.in_bounds(cell) else None

    # ---------- main loop ----------
    def run(self):
        while True:
            self._handle_events()
            self.controller.tick()
            self._refresh_active_states()
            THEME.draw(self, self.screen)
            self._draw_metrics_and_buttons()
            pygame.display.flip()
            self.clock.tick(120)

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self._quit()
            elif e.type == pygame.KEYDOWN:
                self._handle_key(e)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
                consumed = False
                if e.type != pygame.MOUSEBUTTONUP:
                    for b in self._buttons:
                        consumed = b.handle_mouse(e) or consumed
                if not consumed:
                    self._handle_board_mouse(e)

    def _handle_key(self, e: pygame.event.Event):
        if e.key in (pygame.K_ESCAPE, pygame.K_q):
            self._quit()
        elif e.key == pygame.K_SPACE:
            self._toggle_run()
        elif e.key in ALGO_KEYS:
            self._switch_algo(ALGO_KEYS[e.key])
        elif e.key == pygame.K_m:
            self._edit(self.controller.generate_maze)
        elif e.key == pygame.K_c:
            self._edit(self.controller.clear_path)
        elif e.key == pygame.K_x:
            self._edit(self.controller.clear_all)
        elif e.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self._bump_speed(+SPEED_STEP)
        elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE, pygame.K_KP_MINUS):
            self._bump_speed(-SPEED_STEP)

    def _handle_board_mouse(self, e: pygame.event.Event):
        if e.type == pygame.MOUSEBUTTONUP:
            self._drag = None
            self._last_drag_cell = None
            return
        if e.type == pygame.MOUSEBUTTONDOWN and e.button != 1:
            return
        cell = self._cell_at_pixel(e.pos)
        if cell is None or self.controller.running:
            return

        if e.type == pygame.MOUSEBUTTONDOWN:
            kind = self.grid.at(cell).kind
            if kind == START:
                self._drag = "start"
            elif kind == END:
                self._drag = "end"
            else:
                self._drag = "wall"
                self.controller.toggle_wall(*cell)
            self._last_drag_cell = cell
            return

        # motion with a drag in progress; each cell is handled once per entry
        if self._drag is None or cell == self._last_drag_cell:
            return
        self._last_drag_cell = cell
        if self._drag == "wall":
            self.controller.toggle_wall(*cell)
        elif self._drag == "start":
            self.controller.move_start(*cell)
        elif self._drag == "end":
            self.controller.move_end(*cell)

    def _quit(self):
        pygame.quit(); sys.exit(0)

    # ---------- actions ----------
    def _toggle_run(self):
        if self.controller.running:
            self.controller.cancel()
        else:
            self.controller.start()
        self._flash = ""

    def _switch_algo(self, name: str):
        if not self.controller.set_algorithm(name):
            self._flash = "Stop the run before switching"
            return
        self._flash = ""

    def _edit(self, action):
        if not action():
            self._flash = "Board is locked while running"
            return
        self._flash = ""
        # maze / clear-all hand back a new grid of the same size
        self._layout(*self.screen.get_size())

    def _bump_speed(self, dv: int):
        self.controller.set_speed(int(max(SPEED_MIN, min(SPEED_MAX, self.controller.speed + dv))))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 270  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8
        half = (w - 8) // 2

        def add(label, cb, rect, *, togglable=False, store_as: str | None = None):
            btn = UIButton(label, rect, cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run / Stop", self._toggle_run, pygame.Rect(x, y, w, h),
            togglable=True, store_as="btn_run"); y += h + gap

        for i, name in enumerate(ALGO_ORDER):
            col_x = x if i % 2 == 0 else x + half + 8
            add(ALGORITHM_INFO[name]["short"],
                lambda n=name: self._switch_algo(n),
                pygame.Rect(col_x, y, half, h), togglable=True, store_as=f"btn_algo_{name}")
            if i % 2 == 1:
                y += h + gap

        add("Generate Maze", lambda: self._edit(self.controller.generate_maze),
            pygame.Rect(x, y, w, h), store_as="btn_maze"); y += h + gap
        add("Clear Path", lambda: self._edit(self.controller.clear_path),
            pygame.Rect(x, y, half, h), store_as="btn_clear_path")
        add("Clear All", lambda: self._edit(self.controller.clear_all),
            pygame.Rect(x + half + 8, y, half, h), store_as="btn_clear_all"); y += h + gap

        add("Speed -", lambda: self._bump_speed(-SPEED_STEP), pygame.Rect(x, y, half, h))
        add("Speed +", lambda: self._bump_speed(+SPEED_STEP), pygame.Rect(x + half + 8, y, half, h))

        self._refresh_active_states()

    def _refresh_active_states(self):
        running = self.controller.running
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(running)
        for name in ALGO_ORDER:
            btn = getattr(self, f"btn_algo_{name}", None)
            if btn is not None:
                btn.set_active(self.controller.algorithm == name)
                btn.enabled = not running
        for key in ("btn_maze", "btn_clear_path", "btn_clear_all"):
            btn = getattr(self, key, None)
            if btn is not None:
                btn.enabled = not running

    def _draw_metrics_and_buttons(self):
        rb = self._right_band
        ctl = self.controller

        card_h = 250
        card = pygame.Surface((rb.width - 20, card_h), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT, font=None):
            nonlocal y0
            f = font or (self.font_big if big else self.font)
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        info = ALGORITHM_INFO[ctl.algorithm]
        line(info["name"], big=True, color=ACCENT_GOLD)
        line(f"State: {STATE_LABELS.get(ctl.state, ctl.state)}")
        line(f"Visited: {ctl.visited_count}")
        if ctl.result is not None and not ctl.result.found:
            line("Path: none found", color=WARN_RED)
        else:
            line(f"Path Len: {ctl.path_length}")
        line(f"Speed: {ctl.speed}%")
        line("-" * 26)
        line("Shortest path: " + ("yes" if info["optimal"] else "NOT guaranteed"),
             font=self.font_small, color=TEXT_DIM)
        for chunk in _wrap(info["description"], 44):
            line(chunk, font=self.font_small, color=TEXT_DIM)
        if self._flash:
            line(self._flash, font=self.font_small, color=WARN_RED)

        for b in self._buttons:
            b.draw(self.screen, self.font)


def _wrap(text: str, width: int):
    words, cur = text.split(), ""
    for w in words:
        if cur and len(cur) + 1 + len(w) > width:
            yield cur
            cur = w
        else:
            cur = f"{cur} {w}" if cur else w
    if cur:
        yield cur

# ---------- main ----------
def main():
    settings = resolve_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        grid = build_grid(settings.rows, settings.cols)
    except ValueError as ex:
        logger.error("Failed to build board: %s", ex)
        sys.exit(1)
    Viewer(grid, settings).run()

if __name__ == "__main__":
    main()
