from pathlib import Path
from typing import Mapping, Optional, Sequence

import markdown       # pip install markdown
from bs4 import BeautifulSoup  # pip install beautifulsoup4
from jinja2 import DictLoader, Environment, TemplateNotFound

from .document import Document
from .errors import FileIOError, RenderError

DEFAULT_LAYOUT = "default.tpl"
LAYOUT_ATTRIBUTE = "extends"
POSTS_VARIABLE = "posts"
CONTENT_VARIABLE = "content"


def make_environment(layouts: Mapping[str, str]) -> Environment:
    """
    Jinja2 environment that resolves template names against the layout
    registry, so layouts can {% extends %} or {% include %} each other.
    """
    return Environment(
        loader=DictLoader(dict(layouts)),
        autoescape=False,  # document bodies are already HTML
        keep_trailing_newline=True,
    )


def wrap_images_with_figures(html_fragment: str) -> str:
    """
    Wrap <img> tags in <figure> with <figcaption> using the alt text.
    This exposes the Markdown alt text as a visible caption.
    """
    soup = BeautifulSoup(html_fragment, "html.parser")

    for img in soup.find_all("img"):
        alt = img.get("alt", "").strip()

        # Skip if already inside a figure
        if img.find_parent("figure"):
            continue

        figure = soup.new_tag("figure")
        figure["class"] = "entry-figure"

        img.replace_with(figure)
        figure.append(img)

        if alt:
            caption = soup.new_tag("figcaption")
            caption.string = alt
            figure.append(caption)

    return str(soup)


def markdown_to_html(text: str) -> str:
    return wrap_images_with_figures(markdown.markdown(text))


def pick_layout(document: Document, env: Environment, default_layout: Optional[str]) -> Optional[str]:
    """
    Layout named by the document's "extends" attribute, falling back to the
    default layout when the registry has one.
    """
    layout = document.attributes.get(LAYOUT_ATTRIBUTE)
    if layout:
        return layout
    if default_layout and default_layout in env.loader.mapping:
        return default_layout
    return None


def render_document(
    document: Document,
    env: Environment,
    posts: Sequence[Mapping[str, str]],
    default_layout: Optional[str] = DEFAULT_LAYOUT,
) -> str:
    """
    Render one document:

      1. the body is rendered as a template with the document's attributes
         and the post index in scope
      2. markdown documents are converted to HTML
      3. the result is placed into the layout as {{ content }}
    """
    context = dict(document.attributes)
    context[POSTS_VARIABLE] = list(posts)

    try:
        body = env.from_string(document.content).render(context)
    except Exception as exc:  # template code can raise anything (1 // 0, "a" + 1)
        raise RenderError(f"Failed to render {document.source_path}: {exc}", document.source_path) from exc

    if document.is_markdown:
        body = markdown_to_html(body)

    layout = pick_layout(document, env, default_layout)
    if layout is None:
        return body

    context[CONTENT_VARIABLE] = body
    try:
        return env.get_template(layout).render(context)
    except TemplateNotFound as exc:
        raise RenderError(
            f"No layout {exc.name!r} found for {document.source_path}", document.source_path
        ) from exc
    except Exception as exc:
        raise RenderError(
            f"Failed to render layout {layout!r} for {document.source_path}: {exc}", document.source_path
        ) from exc


def write_document(
    document: Document,
    env: Environment,
    posts: Sequence[Mapping[str, str]],
    destination: Path,
    default_layout: Optional[str] = DEFAULT_LAYOUT,
) -> Path:
    """Render a document and write it to destination/<output_path>."""
    html_page = render_document(document, env, posts, default_layout)

    out_path = Path(destination) / document.output_path
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(html_page, encoding="utf-8")
    except OSError as exc:
        raise FileIOError(f"Failed to write {out_path}: {exc}", document.source_path) from exc

    print(f"Wrote {out_path}")
    return out_path
