#!/usr/bin/env python3
"""
Visualization script for diagram layout topologies.

Generates images for every topology into ./build/

Usage:
    uv run python scripts/visualize.py
"""

from pathlib import Path

import matplotlib.pyplot as plt

from diagram_layout import Topology, edge_crossings, get_layout, interpolate_layouts

# Output directory
BUILD_DIR = Path(__file__).parent.parent / "build"

CATEGORY_COLORS = {
    "core": "firebrick",
    "workers": "steelblue",
    "storage": "seagreen",
}


def ensure_build_dir():
    """Create build directory if it doesn't exist."""
    BUILD_DIR.mkdir(exist_ok=True)


def visualize(positions, nodes, edges, title="Diagram Layout", ax=None):
    """Draw a position map on an axis."""
    # Draw edges
    for src, tgt in edges:
        ax.plot(
            [positions[src].x, positions[tgt].x],
            [positions[src].y, positions[tgt].y],
            "gray",
            alpha=0.5,
            linewidth=1,
        )

    # Draw nodes
    ids = [n["id"] for n in nodes]
    xs = [positions[i].x for i in ids]
    ys = [positions[i].y for i in ids]
    colors = [CATEGORY_COLORS.get(n.get("category"), "slategray") for n in nodes]
    ax.scatter(xs, ys, s=160, c=colors, zorder=5, edgecolors="white", linewidth=1)

    for node_id in ids:
        ax.annotate(
            node_id, positions[node_id].as_tuple(), ha="center", va="center",
            fontsize=6, color="white", zorder=6,
        )

    crossings = edge_crossings(positions, edges)
    ax.set_title(f"{title} ({crossings} crossings)", fontsize=12, fontweight="bold")
    ax.set_xlim(0, 800)
    ax.set_ylim(600, 0)  # screen coordinates, y grows downward
    ax.set_aspect("equal")
    ax.axis("off")


def save_topology(topology, nodes, edges, filename):
    """Generate and save a single topology image."""
    positions = get_layout(topology, nodes, edges, size=(800, 600), random_seed=42)

    fig, ax = plt.subplots(figsize=(8, 6))
    visualize(positions, nodes, edges, topology.value, ax=ax)
    plt.tight_layout()

    filepath = BUILD_DIR / filename
    fig.savefig(filepath, dpi=150, bbox_inches="tight", facecolor="white")
    plt.close(fig)
    print(f"  Saved: {filepath}")


def save_comparison(topologies, nodes, edges, filename, title):
    """Generate and save a comparison image."""
    n = len(topologies)
    cols = min(n, 4)
    rows = (n + cols - 1) // cols

    fig, axes = plt.subplots(rows, cols, figsize=(5 * cols, 4 * rows))
    axes = axes.flatten() if hasattr(axes, "flatten") else [axes]

    for i, topology in enumerate(topologies):
        positions = get_layout(topology, nodes, edges, size=(800, 600), random_seed=42)
        visualize(positions, nodes, edges, topology.value, ax=axes[i])

    # Hide unused subplots
    for j in range(n, len(axes)):
        axes[j].axis("off")

    fig.suptitle(title, fontsize=14, fontweight="bold")
    plt.tight_layout()

    filepath = BUILD_DIR / filename
    fig.savefig(filepath, dpi=150, bbox_inches="tight", facecolor="white")
    plt.close(fig)
    print(f"  Saved: {filepath}")


def save_transition(source, target, nodes, edges, filename, frames=5):
    """Save a filmstrip of the eased transition between two topologies."""
    start = get_layout(source, nodes, edges, size=(800, 600), random_seed=42)
    end = get_layout(target, nodes, edges, size=(800, 600), random_seed=42)

    fig, axes = plt.subplots(1, frames, figsize=(4 * frames, 3.5))
    for i, ax in enumerate(axes):
        progress = i / (frames - 1)
        positions = interpolate_layouts(start, end, progress)
        visualize(positions, nodes, edges, f"t={progress:.2f}", ax=ax)

    fig.suptitle(f"{source.value} -> {target.value}", fontsize=14, fontweight="bold")
    plt.tight_layout()

    filepath = BUILD_DIR / filename
    fig.savefig(filepath, dpi=150, bbox_inches="tight", facecolor="white")
    plt.close(fig)
    print(f"  Saved: {filepath}")


def create_swarm_graph():
    """Create a coordinator/worker/storage diagram for demonstration."""
    nodes = [{"id": "queen", "level": 0, "category": "core"}]
    edges = []
    for i in range(4):
        worker = f"w{i}"
        nodes.append({"id": worker, "level": 1, "category": "workers"})
        edges.append(("queen", worker))
    for i in range(6):
        store = f"m{i}"
        nodes.append({"id": store, "level": 2, "category": "storage"})
        edges.append((f"w{i % 4}", store))
    # Peer links between workers
    edges.extend([("w0", "w1"), ("w2", "w3")])
    return nodes, edges


def generate_all():
    """Generate all visualization images."""
    ensure_build_dir()

    nodes, edges = create_swarm_graph()

    print("Generating individual topology images...")
    for topology in Topology:
        save_topology(topology, nodes, edges, f"{topology.name}.png")

    print("Generating comparison images...")
    save_comparison(list(Topology), nodes, edges, "comparison_all.png", "All Topologies")

    print("Generating transition filmstrip...")
    save_transition(Topology.mesh, Topology.hierarchical, nodes, edges, "transition.png")

    print()
    print(f"All images saved to: {BUILD_DIR.absolute()}")


if __name__ == "__main__":
    generate_all()
