# gridpath/core/dfs.py
#!/usr/bin/env python3
"""
Depth-first search, one finalized cell per step().

NOT a shortest-path algorithm: it follows the first open direction as far
as it goes and the path it reports is whatever branch reached the end. It
does always find a path when one exists.

The stack holds (cell, parent) pairs. A cell can be pushed by several
parents before it is popped; it is finalized (visited, back-pointer set) on
its first pop and later copies are skipped.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from gridpath.core.algo_base import SearchAlgo
from gridpath.core.types import Cell, Coord


@dataclass
class DFSAlgo(SearchAlgo):
    name: str = "DFS"

    stack: List[Tuple[Coord, Optional[Coord]]] = field(default_factory=list)

    def _clear_frontier(self) -> None:
        self.stack.clear()

    def _seed(self, start: Cell) -> None:
        self.stack.append((start.coord, None))

    def _next_cell(self) -> Optional[Cell]:
        while self.stack:
            coord, parent = self.stack.pop()
            u = self.grid.at(coord)
            if u.visited:
                continue
            u.visited = True
            u.previous = parent
            u.distance = 0 if parent is None else self.grid.at(parent).distance + 1
            return u
        return None

    def _expand(self, u: Cell) -> List[Coord]:
        opened_now: List[Coord] = []
        # reversed so the first neighbour (up) ends on top of the stack
        for v in reversed(self._neighbors4(u)):
            if v.visited:
                continue
            self.stack.append((v.coord, u.coord))
            opened_now.append(v.coord)
        opened_now.reverse()
        return opened_now

    def _frontier_size(self) -> int:
        return len(self.stack)
