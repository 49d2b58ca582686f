"""
Unit Tests for HTML to status text conversion.

Test Coverage:
    - Anchor text kept, hrefs dropped during rendering
    - Images skipped
    - Block and list layout
    - Missing external links appended after a blank line
    - Links to the destination server not appended
"""
from compose.text import html_to_status_text, html_to_text


def test_link_text_with_href_reattached():
    html = '<p>Hello <a href="https://example.com/x">world</a></p>'
    assert html_to_status_text(html, "https://mastodon.example") == "Hello world\n\nhttps://example.com/x"


def test_visible_link_not_appended_again():
    html = '<p>See <a href="https://example.com/x">https://example.com/x</a></p>'
    assert html_to_status_text(html) == "See https://example.com/x"


def test_no_links_returns_rendered_text_unchanged():
    assert html_to_status_text("<p>Just text</p>") == "Just text"


def test_multiple_missing_links_one_per_line():
    html = (
        '<p><a href="https://a.example/">click here</a> or '
        '<a href="https://b.example/">here</a></p>'
    )
    assert html_to_status_text(html) == "click here or here\n\nhttps://a.example/\nhttps://b.example/"


def test_mentions_and_hashtags_on_server_not_appended():
    html = (
        '<p>Thanks <a href="https://mastodon.example/@friend">@friend</a> '
        '<a href="https://mastodon.example/tags/indieweb">#indieweb</a></p>'
    )
    assert html_to_status_text(html, "https://mastodon.example") == "Thanks @friend #indieweb"


def test_every_external_link_survives():
    html = (
        '<p>One <a href="https://a.example/1">link</a>.</p>'
        '<p><img src="https://img.example/i.jpg" alt="pic"></p>'
        '<ul><li><a href="https://b.example/2">https://b.example/2</a></li>'
        '<li><a href="https://c.example/3">three</a></li></ul>'
    )
    text = html_to_status_text(html, "https://mastodon.example")
    for url in ["https://a.example/1", "https://b.example/2", "https://c.example/3"]:
        assert url in text


def test_images_are_skipped():
    html = '<p>Before<img src="https://me.example/a.jpg" alt="An image">After</p>'
    assert html_to_text(html) == "BeforeAfter"


def test_paragraphs_separated_by_blank_line():
    assert html_to_text("<p>One</p>\n<p>Two</p>") == "One\n\nTwo"


def test_line_breaks_and_whitespace():
    html = "<p>Line   one<br>\n  line two<br/>line three</p>"
    assert html_to_text(html) == "Line one\nline two\nline three"


def test_list_items_on_separate_lines():
    html = "<p>Shopping:</p><ul><li>Eggs</li><li>Milk</li></ul><p>Done</p>"
    assert html_to_text(html) == "Shopping:\n\n* Eggs\n* Milk\n\nDone"


def test_entities_are_unescaped():
    assert html_to_text("<p>Fish &amp; chips &lt;3</p>") == "Fish & chips <3"


def test_script_and_style_dropped():
    html = "<style>p { color: red; }</style><p>Visible</p><script>alert(1)</script>"
    assert html_to_text(html) == "Visible"


def test_long_lines_are_not_wrapped():
    words = " ".join(["word"] * 100)
    assert html_to_text(f"<p>{words}</p>") == words


def test_preformatted_text_kept():
    html = "<pre>def f():\n    return 1</pre>"
    assert html_to_text(html) == "def f():\n    return 1"


def test_only_links_without_text():
    html = '<p><a href="https://example.com/x"><img src="https://example.com/x.jpg"></a></p>'
    assert html_to_status_text(html) == "https://example.com/x"


def test_list_items_wrapping_paragraphs_keep_bullets():
    html = "<ul>\n<li>\n<p>Eggs</p>\n</li>\n<li>\n<p>Milk</p>\n</li>\n</ul>"
    assert html_to_text(html) == "* Eggs\n* Milk"


def test_list_item_with_several_paragraphs_prefixed_once():
    html = "<ol><li><p>First</p><p>More on first</p></li><li><p>Second</p></li></ol><p>After</p>"
    assert html_to_text(html) == "* First\nMore on first\n* Second\n\nAfter"


def test_asterisk_text_is_kept():
    assert html_to_text("<p>*</p>") == "*"
    assert html_to_text("<ul><li>*</li></ul>") == "* *"


def test_escaped_ampersand_in_href_not_appended_again():
    html = '<p><a href="https://e.example/?a=1&amp;b=2">https://e.example/?a=1&amp;b=2</a></p>'
    assert html_to_status_text(html) == "https://e.example/?a=1&b=2"


def test_missing_link_appended_unescaped():
    html = '<p><a href="https://e.example/?a=1&amp;b=2">search</a></p>'
    assert html_to_status_text(html) == "search\n\nhttps://e.example/?a=1&b=2"
