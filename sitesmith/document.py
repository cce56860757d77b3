from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .errors import FileIOError, MalformedDocumentError, PathError

FRONT_MATTER_MARKER = "---"
MARKDOWN_EXTENSION = ".md"
TEMPLATE_EXTENSIONS = (".tpl", MARKDOWN_EXTENSION)


@dataclass(frozen=True)
class Document:
    """One parsed template file, ready to be rendered."""

    output_path: str
    attributes: Mapping[str, str]
    content: str
    is_markdown: bool
    source_path: Optional[Path] = field(default=None, compare=False)

    def __post_init__(self):
        # frozen dataclass: go through object.__setattr__ to wrap the mapping
        if not isinstance(self.attributes, MappingProxyType):
            object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))


# -----------------------
# Front matter
# -----------------------

def split_front_matter(text: str, source: Path = None) -> Tuple[Optional[str], str]:
    """
    Split raw template text into (attribute block, body).

    Scans for the first two markers:

      ---
      title: Hello
      ---
      body...

    No marker at all means there is no attribute block and the whole text is
    the body. A single marker is an unterminated header and is rejected.
    Anything written before the opening marker is read as attributes too.
    """
    opening = text.find(FRONT_MATTER_MARKER)
    if opening == -1:
        return None, text

    closing = text.find(FRONT_MATTER_MARKER, opening + len(FRONT_MATTER_MARKER))
    if closing == -1:
        where = f" in {source}" if source is not None else ""
        raise MalformedDocumentError(f"No content after header{where}")

    header = text[:opening] + "\n" + text[opening + len(FRONT_MATTER_MARKER):closing]

    body = text[closing + len(FRONT_MATTER_MARKER):]
    # the line break ending the closing marker belongs to the marker
    if body.startswith("\r\n"):
        body = body[2:]
    elif body.startswith("\n"):
        body = body[1:]

    return header, body


def parse_attributes(block: str) -> dict:
    """
    Parse "key: value" lines. Lines without a colon are ignored and a
    repeated key keeps its last value.
    """
    attributes = {}
    for line in block.splitlines():
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        attributes[key.strip()] = value.strip()
    return attributes


# -----------------------
# Parsing files
# -----------------------

def read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise FileIOError(f"Invalid UTF-8 in {path}: {exc}", path) from exc
    except OSError as exc:
        raise FileIOError(f"Failed to read {path}: {exc}", path) from exc


def relative_output_path(path: Path, source_root: Path) -> str:
    """
    Return path relative to source_root in forward-slash form, e.g.
    "_posts/hello.md".
    """
    try:
        relative = Path(path).relative_to(source_root)
    except ValueError as exc:
        raise PathError(f"{path} is not inside {source_root}") from exc

    output_path = relative.as_posix()
    try:
        output_path.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise PathError(f"Invalid UTF-8 in path {path!r}") from exc

    if output_path in ("", "."):
        raise PathError(f"{path} is the source root itself, not a file inside it")
    return output_path


def parse_document(path: Path, source_root: Path, markdown_extension: str = MARKDOWN_EXTENSION) -> Document:
    """Read a template file and turn it into a Document."""
    path = Path(path)
    text = read_text(path)

    attributes = {"name": path.stem}
    header, content = split_front_matter(text, path)
    if header is not None:
        attributes.update(parse_attributes(header))

    return Document(
        output_path=relative_output_path(path, Path(source_root)),
        attributes=attributes,
        content=content,
        is_markdown=path.suffix == markdown_extension,
        source_path=path,
    )
