#!/usr/bin/env python
"""
Detect cyclic imports between a handful of source files.

Each file is a vertex whose body holds its content; every import becomes an
edge. The file contents are only carried along, cycles are found from the
edges alone.
"""
import logging

from digraph import DiGraph, Vertex

# Setup logging
logging.basicConfig(level=logging.INFO,
                    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

FILES = {
    "A.js": "import FunctionB from 'B.js';",
    "B.js": "import FunctionC from 'C.js';",
    "C.js": "import FunctionA from 'A.js';\nimport FunctionD from 'D.js';",
    "D.js": "import FunctionC from 'C.js';",
}

IMPORTS = [
    ("A.js", "C.js"),
    ("B.js", "A.js"),
    ("C.js", "B.js"),
    ("C.js", "D.js"),
    ("D.js", "C.js"),
]


def detect_cyclic_imports() -> None:
    graph = DiGraph()
    graph.add_vertices(*(
        Vertex(id=file_name, body={"fileContent": content})
        for file_name, content in FILES.items()
    ))
    for importer, imported in IMPORTS:
        graph.add_edge(importer, imported)

    cycles = graph.find_cycles()
    print("Has cycle dependencies?", bool(cycles))
    for index, cycle in enumerate(cycles, start=1):
        print(f"Cycle n°{index}: [{' --> '.join(cycle)}]")


if __name__ == "__main__":
    detect_cyclic_imports()
