"""Fragment construction and indexing."""

from yamlsourcemap.sourcemap.builder import BuildResult, FragmentBuilder
from yamlsourcemap.sourcemap.index import FragmentIndex
from yamlsourcemap.sourcemap.pointer import PointerBuilder

__all__ = [
    "BuildResult",
    "FragmentBuilder",
    "FragmentIndex",
    "PointerBuilder",
]
