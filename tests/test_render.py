"""Tests for rendering a single document."""

from pathlib import Path
from types import MappingProxyType

import pytest

from sitesmith.document import Document
from sitesmith.errors import FileIOError, RenderError
from sitesmith.render import make_environment, render_document, write_document


def make_doc(content, output_path="page.tpl", is_markdown=False, **attributes):
    attributes.setdefault("name", Path(output_path).stem)
    return Document(output_path, attributes, content, is_markdown, Path("/src") / output_path)


class TestRenderDocument:
    """Tests for render_document."""

    def test_body_is_a_template(self):
        env = make_environment({})
        doc = make_doc("Hello {{ title }}", title="World")

        assert render_document(doc, env, ()) == "Hello World"

    def test_posts_in_context(self):
        env = make_environment({})
        posts = (
            MappingProxyType({"name": "a", "title": "A"}),
            MappingProxyType({"name": "b", "title": "B"}),
        )
        doc = make_doc("{% for p in posts %}{{ p.title }};{% endfor %}")

        assert render_document(doc, env, posts) == "A;B;"

    def test_default_layout(self):
        env = make_environment({"default.tpl": "<main>{{ content }}</main>"})

        assert render_document(make_doc("Hi"), env, ()) == "<main>Hi</main>"

    def test_no_default_layout_configured(self):
        env = make_environment({"default.tpl": "<main>{{ content }}</main>"})

        assert render_document(make_doc("Hi"), env, (), default_layout=None) == "Hi"

    def test_extends_attribute_picks_layout(self):
        env = make_environment({
            "default.tpl": "default {{ content }}",
            "post.tpl": "[{{ title }}] {{ content }}",
        })
        doc = make_doc("Hi", extends="post.tpl", title="T")

        assert render_document(doc, env, ()) == "[T] Hi"

    def test_layout_chain(self):
        env = make_environment({
            "base.tpl": "<html>{% block body %}{% endblock %}</html>",
            "post.tpl": "{% extends 'base.tpl' %}{% block body %}<article>{{ content }}</article>{% endblock %}",
        })
        doc = make_doc("Hi", extends="post.tpl")

        assert render_document(doc, env, ()) == "<html><article>Hi</article></html>"

    def test_identity_layout_round_trip(self):
        body = "line one\n  line two\n\n"
        env = make_environment({"default.tpl": "{{ content }}"})

        assert render_document(make_doc(body), env, ()) == body

    def test_markdown_converted_before_layout(self):
        env = make_environment({"default.tpl": "<body>{{ content }}</body>"})
        doc = make_doc("# Title\n\nSome *text*", "post.md", is_markdown=True)

        html = render_document(doc, env, ())

        assert html.startswith("<body>")
        assert "<h1>Title</h1>" in html
        assert "<em>text</em>" in html

    def test_markdown_images_get_figures(self):
        env = make_environment({})
        doc = make_doc("![A cat](cat.png)", "post.md", is_markdown=True)

        html = render_document(doc, env, ())

        assert '<figure class="entry-figure">' in html
        assert "<figcaption>A cat</figcaption>" in html

    def test_unknown_layout(self):
        env = make_environment({})
        doc = make_doc("Hi", extends="missing.tpl")

        with pytest.raises(RenderError, match="missing.tpl") as excinfo:
            render_document(doc, env, ())
        assert excinfo.value.path == doc.source_path

    def test_syntax_error_in_body(self):
        with pytest.raises(RenderError):
            render_document(make_doc("{% if %}"), make_environment({}), ())

    def test_syntax_error_in_layout(self):
        env = make_environment({"default.tpl": "{% for %}"})

        with pytest.raises(RenderError, match="default.tpl"):
            render_document(make_doc("Hi"), env, ())


class TestWriteDocument:
    """Tests for write_document."""

    def test_creates_directories(self, tmp_path):
        doc = make_doc("Hi", "blog/2024/hello.tpl")

        out_path = write_document(doc, make_environment({}), (), tmp_path / "out")

        assert out_path == tmp_path / "out" / "blog" / "2024" / "hello.tpl"
        assert out_path.read_text(encoding="utf-8") == "Hi"

    def test_write_failure(self, tmp_path):
        blocker = tmp_path / "out"
        blocker.write_text("not a directory", encoding="utf-8")

        with pytest.raises(FileIOError):
            write_document(make_doc("Hi", "sub/page.tpl"), make_environment({}), (), blocker)


class TestRuntimeFailures:
    """Errors raised while a template runs, not while it is parsed."""

    def test_error_in_body(self):
        doc = make_doc("{{ 1 // 0 }}")

        with pytest.raises(RenderError, match="page.tpl") as excinfo:
            render_document(doc, make_environment({}), ())
        assert excinfo.value.path == doc.source_path
        assert isinstance(excinfo.value.__cause__, ZeroDivisionError)

    def test_error_in_layout(self):
        env = make_environment({"default.tpl": "{{ name + 1 }}{{ content }}"})
        doc = make_doc("Hi")

        with pytest.raises(RenderError, match="default.tpl") as excinfo:
            render_document(doc, env, ())
        assert isinstance(excinfo.value.__cause__, TypeError)
