"""
Rebuild the folder hierarchy from a flat list of DownloadEntry objects.

The downloads page is a pre-order listing: every entry follows its parent
folder, and its level is exactly one more than the parent's.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from studipextract.model import DownloadEntry


@dataclass(frozen=True)
class DownloadNode:
    entry: DownloadEntry
    parent: Optional["DownloadNode"]
    path: str

    @property
    def depth(self) -> int:
        return 0 if self.parent is None else self.parent.depth + 1


def build_tree(entries: Sequence[DownloadEntry]) -> List[DownloadNode]:
    """
    Attach each entry to the closest preceding entry one level up.

    Entries whose parent level never appeared (broken listing) become roots.
    """
    nodes: List[DownloadNode] = []
    # most recent node per level
    stack: Dict[int, DownloadNode] = {}

    for entry in entries:
        parent = stack.get(entry.level - 1) if entry.level > 0 else None
        if parent is None:
            path = entry.file_name
        else:
            path = f"{parent.path}/{entry.file_name}"

        node = DownloadNode(entry=entry, parent=parent, path=path)
        stack[entry.level] = node
        # deeper levels belong to the previous subtree
        for level in [lvl for lvl in stack if lvl > entry.level]:
            del stack[level]
        nodes.append(node)

    return nodes
