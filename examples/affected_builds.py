#!/usr/bin/env python
"""
Rebuild only the libraries affected by a change.

lib1 depends on lib3 (it renders lib3.MyLib3Component) while lib2 stands
alone. A content hash per library is cached between builds; a library is
rebuilt when its own hash changed or when one of its dependencies was
rebuilt.
"""
import hashlib
import logging
from typing import Dict, Iterator

from digraph import DiGraph, Vertex

# Setup logging
logging.basicConfig(level=logging.INFO,
                    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger("affected_builds")

project_graph = DiGraph()
project_graph.add_vertices(
    Vertex(id="lib1", body={"component": "<lib3.MyLib3Component />"}),
    Vertex(id="lib2", body={"component": "<div>hello lib2</div>"}),
    Vertex(id="lib3", body={"component": "<MyLib3Component>hello lib3</MyLib3Component>"}),
)
project_graph.add_edge("lib1", "lib3")

# Hash of each library's component at its last build
cache: Dict[str, str] = {}


def content_hash(library: Vertex) -> str:
    return hashlib.sha1(library.body["component"].encode()).hexdigest()


def build_library(library: Vertex) -> None:
    print(f"Building library: '{library.id}'")
    cache[library.id] = content_hash(library)


def build_affected(library: Vertex) -> bool:
    """Build ``library`` if its content changed; return whether it was rebuilt."""
    if content_hash(library) != cache.get(library.id):
        build_library(library)
        return True
    print(f"Using cached version of '{library.id}'")
    return False


def build_with_dependencies(library: Vertex) -> Iterator[bool]:
    """Build dependencies deepest first, then the library itself."""
    dependency_rebuilt = False
    for dependency in project_graph.get_children(library.id):
        for rebuilt in build_with_dependencies(dependency):
            dependency_rebuilt = dependency_rebuilt or rebuilt
            yield rebuilt

    if dependency_rebuilt:
        build_library(library)
        yield True
    else:
        yield build_affected(library)


def build(library_id: str) -> None:
    library = project_graph.get_vertex(library_id)
    if library is None:
        logger.error(f"Unknown library '{library_id}'")
        return
    rebuilt = list(build_with_dependencies(library))
    logger.info(f"{sum(rebuilt)} of {len(rebuilt)} libraries rebuilt for {library_id}")


def main() -> None:
    print("\n----STEP 1-----")
    build("lib1")

    # Nothing changed, everything comes from cache
    print("\n----STEP 2-----")
    build("lib1")

    print("\n----STEP 3-----")
    print("Changing lib3's content...")
    project_graph.update_vertex_body("lib3", {
        "component": "<MyLib3Component>hello affected lib3!</MyLib3Component>",
    })

    # lib3 changed, so lib3 and lib1 are both rebuilt, lib3 first
    print("\n----STEP 4-----")
    build("lib1")

    print("\n----STEP 5-----")
    build("lib1")


if __name__ == "__main__":
    main()
