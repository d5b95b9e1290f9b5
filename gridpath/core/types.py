# gridpath/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from math import inf
from typing import List, Tuple, Optional, Dict, Any

Coord = Tuple[int, int]  # (row, col)

# cell kinds
EMPTY   = "empty"
WALL    = "wall"
START   = "start"
END     = "end"
VISITED = "visited"
PATH    = "path"
CURRENT = "current"

MARKERS = (START, END)
OVERLAYS = (VISITED, PATH, CURRENT)  # run markers wiped by clear_path()


class InvalidPosition(ValueError):
    """Start/end placed out of bounds or on top of each other."""


@dataclass
class Cell:
    row: int
    col: int
    kind: str = EMPTY
    distance: float = inf
    heuristic: int = 0
    total_cost: float = inf
    previous: Optional[Coord] = None   # back-pointer into the owning grid
    visited: bool = False

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)

    def reset_search(self) -> None:
        self.distance = inf
        self.heuristic = 0
        self.total_cost = inf
        self.previous = None
        self.visited = False


@dataclass
class Grid:
    rows: int
    cols: int
    cells: List[List[Cell]]            # [row][col]
    start: Coord
    end: Coord

    def in_bounds(self, c: Coord) -> bool:
        r, col = c
        return 0 <= r < self.rows and 0 <= col < self.cols

    def at(self, c: Coord) -> Cell:
        r, col = c
        return self.cells[r][col]

    def is_block(self, c: Coord) -> bool:
        return self.at(c).kind == WALL

    def iter_cells(self):
        for row in self.cells:
            yield from row


@dataclass(frozen=True)
class SearchEvent:
    cell: Coord
    visited_count: int       # cumulative, this cell included
    frontier_size: int
    index: int               # position in the run's event sequence


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    event: Optional[SearchEvent] = None
    opened: List[Coord] = field(default_factory=list)
    current: Optional[Coord] = None
    path: Optional[List[Coord]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RunResult:
    algorithm: str
    status: str                   # "done" | "no_path" | "cancelled"
    path: List[Coord] = field(default_factory=list)
    visited_count: int = 0

    @property
    def found(self) -> bool:
        return self.status == "done" and bool(self.path)

    @property
    def path_length(self) -> int:
        return len(self.path) if self.found else 0
