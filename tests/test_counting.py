"""
Tests for the level-synchronous counter, the graph builder and graph counting.

Usage:
    pytest tests/test_counting.py
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.tiler import (
    HOLE,
    BoardState,
    TileSet,
    Tiler,
    TilingContext,
    TransitionGraph,
    build_graph,
    count_from_graph,
    count_tilings,
    create_strategy,
    get_strategy_names,
    l_board,
    l_tile,
    rect_tile,
    rectangle,
    t_board,
    t_tile,
)

DOMINOES = TileSet.of(rect_tile(2, 1))
HORIZONTAL_DOMINO = TileSet.of(rect_tile(2, 1, rotate=False))
L_TROMINO = TileSet.of(l_tile(2))
T_TETROMINO = TileSet.of(t_tile(2))
MONOMINO_DOMINO = TileSet.of(rect_tile(1, 1), rect_tile(2, 1))

# (board, tiles, expected count)
KNOWN_COUNTS = [
    (rectangle(2, 2), HORIZONTAL_DOMINO, 1),
    (rectangle(2, 2), DOMINOES, 2),
    (rectangle(3, 2), DOMINOES, 3),
    (rectangle(4, 2), DOMINOES, 5),
    (rectangle(4, 3), DOMINOES, 11),
    (rectangle(4, 4), DOMINOES, 36),
    (rectangle(3, 2), L_TROMINO, 2),
    (rectangle(3, 3), L_TROMINO, 0),
    (rectangle(6, 2), L_TROMINO, 4),
    (l_board(1), L_TROMINO, 1),
    (t_board(1), T_TETROMINO, 1),
    (rectangle(3, 1), DOMINOES, 0),
    # mixed tile sizes: one board is reached after different numbers of placements
    (rectangle(4, 1), MONOMINO_DOMINO, 5),
    (rectangle(6, 1), MONOMINO_DOMINO, 13),
    (rectangle(3, 3), MONOMINO_DOMINO, 131),
]


@pytest.mark.parametrize("board,tiles,expected", KNOWN_COUNTS)
def test_count_tilings_known_values(board, tiles, expected):
    assert count_tilings(board, tiles, executor="serial") == expected


@pytest.mark.parametrize("board,tiles,expected", KNOWN_COUNTS)
def test_graph_count_matches_direct_count(board, tiles, expected):
    graph = build_graph(board, tiles, executor="serial")
    assert count_from_graph(graph) == expected
    assert count_from_graph(graph) == count_tilings(board, tiles, executor="serial")


def test_horizontal_domino_two_by_two_is_one_tiling():
    """
    Two non-overlapping placements of the same domino are one tiling.

    The expander always covers the first unmarked cell, so the top domino
    is placed before the bottom one; the other order is never generated.
    """
    graph = build_graph(rectangle(2, 2), HORIZONTAL_DOMINO, executor="serial")

    assert count_tilings(rectangle(2, 2), HORIZONTAL_DOMINO) == 1
    assert graph.node_count == 3
    assert graph.edge_count == 2


def test_zero_cell_board_has_one_empty_tiling():
    board = rectangle(0, 0)

    assert count_tilings(board, L_TROMINO) == 1
    graph = build_graph(board, L_TROMINO)
    assert graph.node_count == 1
    assert graph.edge_count == 0
    assert graph.complete_index == 0
    assert count_from_graph(graph) == 1


def test_already_complete_board_has_one_tiling():
    board = BoardState.from_rows([[1, 1], [HOLE, 2]])

    assert count_tilings(board, DOMINOES) == 1
    assert count_from_graph(build_graph(board, DOMINOES)) == 1


def test_uncoverable_cell_gives_zero():
    # the hole isolates (0, 0) from every other cell
    board = BoardState.from_rows([[None, HOLE, None], [HOLE, None, None]])

    assert count_tilings(board, DOMINOES) == 0
    graph = build_graph(board, DOMINOES)
    assert graph.complete_index is None
    assert count_from_graph(graph) == 0


def test_graph_deduplicates_states():
    graph = build_graph(rectangle(2, 2), DOMINOES, executor="serial")

    # root, top-row domino, left-column domino, full board
    assert graph.node_count == 4
    assert graph.edge_count == 4
    assert graph.complete_index == 3
    assert graph.get_edges(0) == {1, 2}
    assert graph.get_edges(1) == {3}
    assert graph.get_edges(2) == {3}
    assert len(set(graph.nodes)) == graph.node_count


def test_graph_transitions_only_add_coverage():
    graph = build_graph(rectangle(4, 3), DOMINOES, executor="serial")

    for source, targets in graph.edges.items():
        before = graph.get_node(source)
        for target in targets:
            after = graph.get_node(target)
            assert after.covers(before)
            assert after.marked_count() == before.marked_count() + 2


def test_graph_is_independent_of_scheduling():
    board, tiles = l_board(2), L_TROMINO

    serial = build_graph(board, tiles, executor="serial")
    threaded = build_graph(board, tiles, workers=4, executor="thread")

    assert serial.node_count == threaded.node_count
    assert serial.edge_count == threaded.edge_count
    assert (serial.complete_index is None) == (threaded.complete_index is None)
    assert set(serial.nodes) == set(threaded.nodes)
    assert count_from_graph(serial) == count_from_graph(threaded)


def test_thread_and_process_executors_agree():
    board, tiles = rectangle(4, 4), DOMINOES

    assert count_tilings(board, tiles, workers=4, executor="thread") == 36
    assert count_tilings(board, tiles, workers=2, executor="process") == 36
    assert count_from_graph(build_graph(board, tiles, workers=2, executor="process")) == 36


@pytest.mark.parametrize("executor", ["serial", "thread", "process"])
def test_mixed_tile_sizes_count_equally_on_every_executor(executor):
    """States reached after different placement counts still add up once."""
    board = rectangle(3, 3)

    direct = count_tilings(board, MONOMINO_DOMINO, workers=2, executor=executor)
    graph = build_graph(board, MONOMINO_DOMINO, workers=2, executor=executor)

    assert direct == 131
    assert count_from_graph(graph) == direct


def test_unknown_executor_rejected():
    with pytest.raises(ValueError):
        count_tilings(rectangle(2, 2), DOMINOES, executor="gpu")
    with pytest.raises(ValueError):
        count_tilings(rectangle(2, 2), DOMINOES, workers=0)


def test_graph_arena_helpers():
    graph = TransitionGraph()
    root, created = graph.add_node(rectangle(2, 1))
    again, created_again = graph.add_node(rectangle(2, 1))

    assert (root, created) == (0, True)
    assert (again, created_again) == (0, False)
    assert graph.index_of(rectangle(2, 1)) == 0

    with pytest.raises(IndexError):
        graph.add_edge(0, 5)
    with pytest.raises(IndexError):
        graph.get_node(1)


def test_graph_keeps_first_complete_node():
    graph = TransitionGraph()
    graph.add_node(rectangle(1, 1))
    a, _ = graph.add_node(BoardState.from_rows([[1]]))
    b, _ = graph.add_node(BoardState.from_rows([[HOLE, 1]]))

    graph.mark_complete(a)
    graph.mark_complete(b)
    graph.mark_complete(a)

    assert graph.complete_index == a
    assert graph.complete_indices == [a, b]


def test_graph_serialisation():
    graph = build_graph(rectangle(2, 2), HORIZONTAL_DOMINO, executor="serial")
    data = graph.to_dict()

    assert data["complete_index"] == 2
    assert data["nodes"][0] == [[None, None], [None, None]]
    assert data["nodes"][2] == [[1, 1], [2, 2]]
    assert data["edges"] == {"0": [1], "1": [2]}
    assert '"complete_index": 2' in graph.to_json()


def test_strategies_report_counts_and_metrics():
    assert set(get_strategy_names()) >= {"count", "graph", "single"}

    levels_seen = []
    context = TilingContext(
        board=rectangle(4, 2), tileset=DOMINOES, executor="serial",
        progress_callback=lambda level, message: levels_seen.append(level),
    )

    counted = create_strategy("count").run(context)
    assert counted.count == 5
    assert counted.metrics.strategy_name == "count"
    assert counted.metrics.levels == 4
    assert counted.metrics.peak_frontier >= 1
    assert counted.metrics.peak_rss_mb > 0
    assert levels_seen == [1, 2, 3, 4]

    graphed = create_strategy("graph").run(context)
    assert graphed.count == 5
    assert graphed.graph is not None
    assert graphed.graph.complete_index is not None

    with pytest.raises(ValueError):
        create_strategy("dlx")


def test_tiler_reuses_graph():
    tiler = Tiler(L_TROMINO, rectangle(6, 2), executor="serial")

    direct = tiler.count_tilings()
    graph = tiler.generate_graph()

    assert tiler.graph is graph
    assert tiler.count_tilings() == direct == 4
