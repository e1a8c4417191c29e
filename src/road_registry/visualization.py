"""Visualization of the road network.

This module draws cities and roads using matplotlib and networkx. Both are
optional dependencies (``pip install 'road-registry[visualization]'``).

Example:
    >>> from road_registry import NetworkStore, visualize_network
    >>>
    >>> store = NetworkStore()
    >>> fig = visualize_network(store.dump())
    >>> fig.savefig("network.png")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .data import NetworkSnapshot

logger = logging.getLogger(__name__)

# Check for optional dependencies
try:
    import matplotlib.pyplot as plt
    import networkx as nx  # type: ignore[import-untyped,unused-ignore]
    from matplotlib.figure import Figure

    _HAS_VISUALIZATION_DEPS = True
except ImportError:
    _HAS_VISUALIZATION_DEPS = False
    Figure = Any  # type: ignore[misc, assignment]


def _check_dependencies() -> None:
    """Check if visualization dependencies are installed."""
    if not _HAS_VISUALIZATION_DEPS:
        msg = (
            "Visualization requires optional dependencies. "
            "Install with: pip install 'road-registry[visualization]'"
        )
        raise ImportError(msg)


def to_networkx(snapshot: NetworkSnapshot) -> Any:
    """Build an undirected networkx graph from a snapshot.

    Nodes are city names with an ``index`` attribute (1-based); edges carry a
    ``budget`` attribute (0.0 when unset).
    """
    _check_dependencies()
    G = nx.Graph()
    for index, name in enumerate(snapshot.cities, start=1):
        G.add_node(name, index=index)
    n = len(snapshot.cities)
    for i in range(n):
        for j in range(i + 1, n):
            if snapshot.roads[i, j]:
                G.add_edge(
                    snapshot.cities[i], snapshot.cities[j], budget=float(snapshot.budgets[i, j])
                )
    return G


def visualize_network(
    snapshot: NetworkSnapshot,
    layout: str = "spring",
    figsize: tuple[float, float] = (12, 8),
    node_size: int = 1000,
    font_size: int = 10,
    show_budgets: bool = True,
    title: str | None = None,
) -> Figure:
    """Draw cities as nodes and roads as edges, optionally labelled with budgets.

    Roads with a budget are drawn solid, roads without one dashed.

    Args:
        snapshot: State to draw, usually ``store.dump()``.
        layout: Graph layout algorithm ("spring", "circular", "kamada_kawai", "shell")
        figsize: Figure size (width, height) in inches
        node_size: Size of node markers
        font_size: Font size for labels
        show_budgets: Whether to label roads with their budget
        title: Custom title for the plot (default: "Road Network")

    Returns:
        matplotlib Figure object

    Raises:
        ImportError: If matplotlib or networkx are not installed
    """
    _check_dependencies()

    G = to_networkx(snapshot)
    fig, ax = plt.subplots(figsize=figsize)

    layout_funcs = {
        "spring": nx.spring_layout,
        "circular": nx.circular_layout,
        "kamada_kawai": nx.kamada_kawai_layout,
        "shell": nx.shell_layout,
    }
    if layout not in layout_funcs:
        logger.warning(f"Unknown layout '{layout}', using 'spring'")
        layout = "spring"

    try:
        pos = layout_funcs[layout](G)
    except Exception as e:
        logger.warning(f"Layout '{layout}' failed: {e}, using 'spring'")
        pos = nx.spring_layout(G)

    nx.draw_networkx_nodes(G, pos, node_color="lightblue", node_size=node_size, ax=ax)

    funded = [(u, v) for u, v, d in G.edges(data=True) if d["budget"] > 0]
    unfunded = [(u, v) for u, v, d in G.edges(data=True) if d["budget"] <= 0]
    if funded:
        nx.draw_networkx_edges(G, pos, edgelist=funded, edge_color="gray", width=2, ax=ax)
    if unfunded:
        nx.draw_networkx_edges(
            G, pos, edgelist=unfunded, edge_color="lightgray", style="dashed", ax=ax
        )

    node_labels = {name: f"{data['index']}. {name}" for name, data in G.nodes(data=True)}
    nx.draw_networkx_labels(G, pos, labels=node_labels, font_size=font_size, ax=ax)

    if show_budgets and funded:
        edge_labels = {(u, v): f"{G.edges[u, v]['budget']:.1f}" for u, v in funded}
        nx.draw_networkx_edge_labels(
            G, pos, edge_labels=edge_labels, font_size=max(font_size - 2, 6), ax=ax
        )

    ax.set_title(title or "Road Network", fontsize=font_size + 4, fontweight="bold")
    ax.axis("off")
    fig.tight_layout()
    return fig
