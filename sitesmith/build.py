import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .copier import copy_tree
from .document import MARKDOWN_EXTENSION, TEMPLATE_EXTENSIONS, Document, parse_document
from .errors import ConfigError
from .layouts import load_layouts
from .render import DEFAULT_LAYOUT, make_environment, write_document
from .walk import is_build_output, walk_tree


# -----------------------
# Discovery
# -----------------------

def collect_documents(
    source: Path,
    destination: Path,
    layouts_path: Path,
    posts_path: Path,
    template_extensions: Iterable[str] = TEMPLATE_EXTENSIONS,
    markdown_extension: str = MARKDOWN_EXTENSION,
) -> Tuple[List[Document], tuple]:
    """
    Walk the source tree and parse every template file.

    Files sitting directly in the layouts directory are layouts, not pages.
    Files sitting directly in the posts directory also have their attributes
    added to the post index, in walk order.

    Returns (documents, post index).
    """
    template_extensions = tuple(template_extensions)
    documents = []
    post_data = []

    for path in walk_tree(source):
        if is_build_output(path, source, destination):
            continue  # output of an earlier build
        if not path.is_file():
            continue
        if path.suffix not in template_extensions or path.parent == layouts_path:
            continue

        doc = parse_document(path, source, markdown_extension)
        if path.parent == posts_path:
            post_data.append(doc.attributes)
        documents.append(doc)

    return documents, tuple(post_data)


# -----------------------
# Build
# -----------------------

def render_documents(documents, env, posts, destination: Path, default_layout, workers=None):
    """
    Render and write every document on a thread pool.

    All tasks run to completion even when some fail. Each failure is reported,
    then the first one (in discovery order) is raised.
    """
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(write_document, doc, env, posts, destination, default_layout)
            for doc in documents
        ]

    errors = []
    for future in futures:
        exc = future.exception()
        if exc is not None:
            print(f"ERROR: {exc}", file=sys.stderr)
            errors.append(exc)

    if errors:
        if len(errors) > 1:
            print(f"ERROR: {len(errors)} of {len(documents)} document(s) failed", file=sys.stderr)
        raise errors[0]


def build_site(
    source: Path,
    destination: Path,
    layouts_dir: str = "_layouts",
    posts_dir: str = "_posts",
    *,
    template_extensions: Iterable[str] = TEMPLATE_EXTENSIONS,
    markdown_extension: str = MARKDOWN_EXTENSION,
    default_layout: Optional[str] = DEFAULT_LAYOUT,
    workers: Optional[int] = None,
) -> dict:
    """
    Build the site in source into destination.

    Layouts are loaded first, then every template file is parsed, then all
    documents are rendered in parallel against the same layouts and post
    index. Remaining files are copied only if every document rendered.
    """
    if workers is not None and (isinstance(workers, bool) or not isinstance(workers, int) or workers < 1):
        raise ConfigError(f"workers must be a positive integer, got {workers!r}")

    source = Path(source).resolve()
    destination = Path(destination).resolve()
    template_extensions = tuple(template_extensions)

    layouts_path = source / layouts_dir
    posts_path = source / posts_dir

    layouts = load_layouts(layouts_path)
    print(f"Loaded {len(layouts)} layout(s) from {layouts_path}")

    documents, post_data = collect_documents(
        source,
        destination,
        layouts_path,
        posts_path,
        template_extensions=template_extensions,
        markdown_extension=markdown_extension,
    )
    print(f"Found {len(documents)} document(s), {len(post_data)} post(s)")

    env = make_environment(layouts)
    render_documents(documents, env, post_data, destination, default_layout, workers=workers)

    copied = copy_tree(source, destination, layouts_dir, template_extensions)

    return {"documents": len(documents), "posts": len(post_data), "copied": copied}

