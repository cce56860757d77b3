from pathlib import Path
from typing import Iterator


def walk_tree(root: Path) -> Iterator[Path]:
    """
    Yield every directory and file below root, parents before children.

    Paths are visited in sorted order so that repeated builds see the same
    sequence (posts are indexed in this order).
    """
    root = Path(root)
    if not root.is_dir():
        return
    yield from sorted(root.rglob("*"))


def is_within(path: Path, parent: Path) -> bool:
    """True if path is parent itself or lies somewhere below it."""
    return path == parent or parent in path.parents


def is_build_output(path: Path, source: Path, destination: Path) -> bool:
    """
    True if path belongs to a destination nested inside the source tree.

    A destination outside the source (or a parent of it) never hides anything.
    """
    if destination == source or source not in destination.parents:
        return False
    return is_within(path, destination)
