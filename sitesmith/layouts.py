from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from .document import read_text
from .errors import FileIOError
from .walk import walk_tree


def load_layouts(layout_dir: Path) -> Mapping[str, str]:
    """
    Load every file under layout_dir into a read-only {file name: template text}
    mapping.

    Files are keyed by base name only, so a layout in a subdirectory replaces
    an earlier one with the same name. A missing directory gives an empty
    registry. Template syntax is not checked here.
    """
    layouts = {}
    for path in walk_tree(Path(layout_dir)):
        if not path.is_file():
            continue
        try:
            path.name.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise FileIOError(f"Invalid UTF-8 in layout name {path!r}", path) from exc
        layouts[path.name] = read_text(path)

    return MappingProxyType(layouts)
