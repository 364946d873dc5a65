#!/usr/bin/env python
"""
Time cycle detection on a module graph exported as JSON.

The JSON file maps module ids to ``{"adjacentTo": [...]}`` entries, for
example a bundler's module graph. Usage:

    python examples/find_cycles_benchmark.py webpack.json
"""
import json
import logging
import sys
import time
from pathlib import Path
from typing import Optional

from digraph import DiGraph, Vertex

logging.basicConfig(level=logging.WARNING,
                    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

DEPTHS = [None, 500, 100, 20]


def load_graph(path: Path) -> DiGraph:
    data = json.loads(path.read_text())
    graph = DiGraph()
    for node_id, node_value in data.items():
        graph.add_vertex(Vertex(id=node_id, adjacent_to=node_value.get("adjacentTo", [])))
    return graph


def run(path: Path, max_depth: Optional[int]) -> None:
    graph = load_graph(path)
    label = "INFINITY" if max_depth is None else max_depth
    print("-" * 40)
    print(f"Started benchmark on {path.name} with cycle detection = {label}")
    start = time.perf_counter()
    cycles = graph.find_cycles(max_depth=max_depth)
    elapsed = time.perf_counter() - start
    print(f"{len(cycles)} cycles found")
    print(f"Took {elapsed:.3f} seconds to find cycles on {len(graph.vertices)} vertices")


def main() -> None:
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)
    path = Path(sys.argv[1])
    for max_depth in DEPTHS:
        run(path, max_depth)


if __name__ == "__main__":
    main()
