# tests/utils/test_html.py
"""Tests for app/utils/html.py."""

import pytest

from app.utils.html import html_to_text, remove_html_and_shorten, sanitize_html


class TestSanitizeHtml:
    def test_allowed_markup_kept(self) -> None:
        html = "<h1>T</h1><p><b>b</b><i>i</i><u>u</u><s>s</s></p><blockquote>q</blockquote>"
        assert sanitize_html(html) == html

    def test_script_removed_with_content(self) -> None:
        result = sanitize_html("<p>ok</p><script>alert('x')</script>")
        assert result == "<p>ok</p>"

    def test_style_removed_with_content(self) -> None:
        assert sanitize_html("<style>body{color:red}</style><p>ok</p>") == "<p>ok</p>"

    def test_disallowed_tag_unwrapped(self) -> None:
        assert sanitize_html("<div><em>text</em></div>") == "text"

    def test_comments_stripped(self) -> None:
        assert sanitize_html("<p>a<!-- secret -->b</p>") == "<p>ab</p>"

    def test_event_handler_attributes_dropped(self) -> None:
        assert sanitize_html('<img src="http://x/y.png" onerror="evil()">') == (
            '<img src="http://x/y.png">'
        )

    def test_link_attributes_kept_without_rel(self) -> None:
        result = sanitize_html('<a href="http://example.com" target="_blank" name="n">x</a>')
        assert 'href="http://example.com"' in result
        assert 'target="_blank"' in result
        assert 'name="n"' in result
        assert "rel=" not in result

    def test_list_item_class_kept(self) -> None:
        assert sanitize_html('<ul><li class="done">x</li></ul>') == (
            '<ul><li class="done">x</li></ul>'
        )

    def test_class_dropped_outside_list_items(self) -> None:
        assert sanitize_html('<p class="x">y</p>') == "<p>y</p>"

    def test_title_and_lang_dropped(self) -> None:
        assert sanitize_html('<p title="t" lang="en">hi</p>') == "<p>hi</p>"

    def test_attributes_only_on_their_own_tag(self) -> None:
        assert sanitize_html('<img src="http://x/y.png" href="http://x" title="t">') == (
            '<img src="http://x/y.png">'
        )

    @pytest.mark.parametrize("tag", ["textarea", "option", "noscript"])
    def test_form_and_noscript_removed_with_content(self, tag: str) -> None:
        assert sanitize_html(f"<p>a</p><{tag}>secret</{tag}>") == "<p>a</p>"

    @pytest.mark.parametrize(
        "href",
        ["javascript:alert(1)", "https://example.com", "ftp://example.com/file"],
    )
    def test_disallowed_schemes_removed(self, href: str) -> None:
        assert "href" not in sanitize_html(f'<a href="{href}">x</a>')

    def test_data_scheme_allowed(self) -> None:
        src = "data:image/png;base64,iVBORw0KGgo="
        assert f'src="{src}"' in sanitize_html(f'<img src="{src}">')


class TestPreview:
    def test_html_to_text(self) -> None:
        assert html_to_text("<p>Hello <b>world</b></p>") == "Hello world"

    def test_html_to_text_drops_script_content(self) -> None:
        assert html_to_text("<p>a</p><script>var x = 1;</script>") == "a"

    def test_html_to_text_drops_noscript_and_textarea(self) -> None:
        assert html_to_text("<p>a</p><noscript>ns</noscript><textarea>t</textarea>") == "a"

    def test_html_to_text_empty(self) -> None:
        assert html_to_text("") == ""

    def test_short_text_returned_as_is(self) -> None:
        assert remove_html_and_shorten("<p>short</p>") == "short"

    def test_long_text_cut_with_ellipsis(self) -> None:
        result = remove_html_and_shorten(f"<p>{'x' * 300}</p>")
        assert result == "x" * 200 + "..."

    def test_exact_limit_gets_ellipsis(self) -> None:
        assert remove_html_and_shorten("y" * 200) == "y" * 200 + "..."

    def test_one_below_limit_untouched(self) -> None:
        assert remove_html_and_shorten("z" * 199) == "z" * 199

    def test_custom_limit(self) -> None:
        assert remove_html_and_shorten("<b>abcdef</b>", limit=3) == "abc..."
