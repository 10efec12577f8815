"""
Transition Graph Module - Deduplicated DAG of board states.

Nodes live in an append-only arena indexed by integer; a BoardState is
stored at most once. Edges are single-tile placements, kept as sets so
repeated observation of the same edge is idempotent.
"""

import json
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

from .board import BoardState

logger = logging.getLogger(__name__)


@dataclass
class TransitionGraph:
    """
    Node arena, edge relation and completion marker.

    Index 0 is always the initial board once one has been added.

    Attributes:
        nodes: Arena of BoardStates indexed by node id
        edges: Node id -> set of successor node ids
        complete_index: Designated completion node (first one recorded)
        complete_indices: Every fully-marked node recorded, in order
    """
    nodes: List[BoardState] = field(default_factory=list)
    edges: Dict[int, Set[int]] = field(default_factory=dict)
    complete_index: Optional[int] = None
    complete_indices: List[int] = field(default_factory=list)
    _index: Dict[BoardState, int] = field(default_factory=dict, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.edges.values())

    def add_node(self, board: BoardState) -> Tuple[int, bool]:
        """
        Find or allocate the arena slot for a board.

        The lookup and the allocation happen under one lock, so two
        writers can never allocate two slots for equal boards.

        Args:
            board: Board state to store

        Returns:
            (node index, True if the node was newly created)
        """
        with self._lock:
            index = self._index.get(board)
            if index is not None:
                return index, False
            index = len(self.nodes)
            self.nodes.append(board)
            self._index[board] = index
            return index, True

    def index_of(self, board: BoardState) -> Optional[int]:
        return self._index.get(board)

    def get_node(self, index: int) -> BoardState:
        """
        Get the board stored at an index.

        Raises:
            IndexError: If index was never allocated
        """
        if not 0 <= index < len(self.nodes):
            raise IndexError(f"Node {index} not in graph of {len(self.nodes)} nodes")
        return self.nodes[index]

    def add_edge(self, source: int, target: int) -> None:
        """
        Insert edge source -> target.

        Raises:
            IndexError: If either endpoint is not in the arena
        """
        self.get_node(source)
        self.get_node(target)
        with self._lock:
            self.edges.setdefault(source, set()).add(target)

    def get_edges(self, index: int) -> Set[int]:
        """Successor ids of a node (empty for leaves)."""
        return self.edges.get(index, set())

    def mark_complete(self, index: int) -> None:
        """
        Record a fully-marked node.

        The first node marked stays the designated completion node;
        any further distinct complete node is only listed and logged.
        """
        self.get_node(index)
        with self._lock:
            if index in self.complete_indices:
                return
            self.complete_indices.append(index)
            if self.complete_index is None:
                self.complete_index = index
            else:
                logger.warning(
                    f"[Graph] Additional complete node {index}; keeping {self.complete_index}"
                )

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialise as nodes, edges and completion index.

        Nodes are written as lists of rows with None for unmarked cells.
        """
        return {
            "nodes": [board.to_list() for board in self.nodes],
            "edges": {str(source): sorted(targets) for source, targets in sorted(self.edges.items())},
            "complete_index": self.complete_index,
        }

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)
