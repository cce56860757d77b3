import shutil
from pathlib import Path
from typing import Iterable

from .document import TEMPLATE_EXTENSIONS
from .errors import FileIOError
from .walk import is_build_output, is_within, walk_tree


def is_hidden(path: Path, source: Path) -> bool:
    """True for dotfiles and for anything inside a dot-directory."""
    return any(part.startswith(".") for part in path.relative_to(source).parts)


def copy_tree(
    source: Path,
    destination: Path,
    layouts_dir: str = "_layouts",
    template_extensions: Iterable[str] = TEMPLATE_EXTENSIONS,
) -> int:
    """
    Copy every non-template file from source into destination, keeping the
    relative structure.

    Skipped: hidden files and directories, template files, the destination
    itself (when it lives inside the source) and the layouts directory.
    Stops at the first failure. Returns the number of files copied.
    """
    source = Path(source).resolve()
    destination = Path(destination).resolve()
    if source == destination:
        return 0

    template_extensions = tuple(template_extensions)
    layouts_path = source / layouts_dir

    count = 0
    for path in walk_tree(source):
        if is_hidden(path, source):
            continue
        if is_build_output(path, source, destination) or is_within(path, layouts_path):
            continue
        if path.suffix in template_extensions:
            continue

        # path comes from walking source, so it is always relative to it
        target = destination / path.relative_to(source)
        try:
            if path.is_dir():
                target.mkdir(parents=True, exist_ok=True)
            else:
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(path, target)
                count += 1
        except OSError as exc:
            raise FileIOError(f"Failed to copy {path} to {target}: {exc}", path) from exc

    print(f"Copied {count} file(s) to {destination}")
    return count
