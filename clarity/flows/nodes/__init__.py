from .decompile import decompile_node
from .analyze_binary import analyze_binary_node

__all__ = [
    "decompile_node",
    "analyze_binary_node",
]
