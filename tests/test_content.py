from datetime import date, datetime
from pathlib import Path

from content import (
    build_tag_index,
    format_date,
    is_draft,
    load_pages,
    parse_date,
    parse_front_matter,
    parse_tags,
    render_markdown,
    route_for,
    slugify_tag,
    sorted_posts,
)

from conftest import write


def test_parse_front_matter_splits_meta_and_body():
    meta, body = parse_front_matter("---\ntitle: Hi\ndate: 2023-01-01\n---\nBody text\n")

    assert meta == {"title": "Hi", "date": date(2023, 1, 1)}
    assert body == "Body text\n"


def test_parse_front_matter_without_block():
    text = "# Just markdown\n"

    assert parse_front_matter(text) == ({}, text)


def test_parse_front_matter_invalid_yaml_warns(capsys):
    meta, body = parse_front_matter("---\ntitle: [unclosed\n---\nBody", source="bad.md")

    assert meta == {}
    assert body == "Body"
    assert "WARNING: invalid front matter in bad.md" in capsys.readouterr().err


def test_parse_front_matter_non_mapping(capsys):
    meta, _ = parse_front_matter("---\n- a\n- b\n---\nx")

    assert meta == {}
    assert "not a mapping" in capsys.readouterr().err


def test_parse_date_variants(capsys):
    assert parse_date(date(2023, 1, 2)) == date(2023, 1, 2)
    assert parse_date(datetime(2023, 1, 2, 10, 30)) == date(2023, 1, 2)
    assert parse_date("2023/01/02") == date(2023, 1, 2)
    assert parse_date(None) is None
    assert parse_date("soon", source="x.md") is None
    assert "unrecognised date 'soon'" in capsys.readouterr().err


def test_format_date():
    assert format_date(date(2023, 1, 1)) == "2023-01-01"
    assert format_date(date(2023, 1, 1), "%b %Y") == "Jan 2023"
    assert format_date(None) == ""


def test_parse_tags_and_drafts():
    assert parse_tags("yjs, solid ,") == ["yjs", "solid"]
    assert parse_tags(["yjs", " cloudflare "]) == ["yjs", "cloudflare"]
    assert parse_tags(None) == []
    assert is_draft(True) is True
    assert is_draft("yes") is True
    assert is_draft("no") is False
    assert is_draft(None) is False


def test_route_for():
    assert route_for(Path("posts/hello.md")) == "/posts/hello"
    assert route_for(Path("posts/index.mdx")) == "/posts"
    assert route_for(Path("index.md")) == "/"


def test_load_pages_types_and_drafts(site):
    pages = load_pages(site / "pages")
    by_route = {p["route"]: p for p in pages}

    assert set(by_route) == {"/about", "/posts/hello", "/posts/second"}
    assert by_route["/about"]["type"] == "page"
    assert by_route["/posts/hello"]["type"] == "post"
    assert by_route["/posts/hello"]["tags"] == ["Solid"]
    assert by_route["/posts/hello"]["date"] == date(2023, 1, 1)
    assert by_route["/posts/hello"]["content_md"] == "Hello from markdown."


def test_load_pages_includes_drafts_when_asked(site):
    routes = {p["route"] for p in load_pages(site / "pages", include_drafts=True)}

    assert "/posts/draft" in routes


def test_load_pages_skips_underscored_and_respects_type(tmp_path):
    write(tmp_path / "_app.md", "ignored")
    write(tmp_path / "_drafts" / "x.md", "ignored")
    write(tmp_path / "posts" / "index.md", "---\ntitle: Blog\n---\n")
    write(tmp_path / "notes.md", "---\ntype: post\n---\n")

    by_route = {p["route"]: p for p in load_pages(tmp_path)}

    assert set(by_route) == {"/posts", "/notes"}
    assert by_route["/posts"]["type"] == "posts"
    assert by_route["/notes"]["type"] == "post"


def test_load_pages_missing_dir(tmp_path):
    assert load_pages(tmp_path / "nope") == []


def test_sorted_posts_newest_first_undated_last():
    pages = [
        {"route": "/posts/b", "type": "post", "date": None},
        {"route": "/posts/old", "type": "post", "date": date(2022, 1, 1)},
        {"route": "/about", "type": "page", "date": None},
        {"route": "/posts/new", "type": "post", "date": date(2023, 1, 1)},
        {"route": "/posts/a", "type": "post", "date": None},
    ]

    assert [p["route"] for p in sorted_posts(pages)] == [
        "/posts/new",
        "/posts/old",
        "/posts/a",
        "/posts/b",
    ]


def test_slugify_tag():
    assert slugify_tag("Outdoor Trips") == "outdoor-trips"
    assert slugify_tag("  Durable_Objects ") == "durable-objects"
    assert slugify_tag("!!!") == "tag"


def test_build_tag_index_merges_slugs():
    a = {"route": "/posts/a", "tags": ["Solid"]}
    b = {"route": "/posts/b", "tags": ["solid", "yjs"]}

    index = build_tag_index([a, b])

    assert set(index) == {"solid", "yjs"}
    assert index["solid"]["name"] == "Solid"
    assert index["solid"]["pages"] == [a, b]
    assert index["yjs"]["pages"] == [b]


def test_render_markdown_wraps_images_in_figures():
    out = render_markdown("![A cat](cat.png)")

    assert "<figure>" in out
    assert "<figcaption>A cat</figcaption>" in out


def test_render_markdown_fenced_code():
    out = render_markdown("```js\nconst a = 1\n```")

    assert "<pre><code" in out
    assert "const a = 1" in out


def test_build_tag_index_name_does_not_depend_on_order():
    old = {"route": "/posts/old", "date": date(2023, 1, 1), "tags": ["Solid"]}
    new = {"route": "/posts/new", "date": date(2023, 2, 1), "tags": ["solid"]}

    assert build_tag_index([old, new])["solid"]["name"] == "Solid"
    assert build_tag_index([new, old])["solid"]["name"] == "Solid"


def test_build_tag_index_prefers_most_common_spelling():
    old = {"route": "/posts/old", "date": date(2022, 1, 1), "tags": ["yjs"]}
    a = {"route": "/posts/a", "date": date(2023, 1, 1), "tags": ["Yjs"]}
    b = {"route": "/posts/b", "date": date(2023, 2, 1), "tags": ["Yjs"]}

    index = build_tag_index([b, old, a])

    assert index["yjs"]["name"] == "Yjs"
    assert index["yjs"]["pages"] == [b, old, a]


def test_load_pages_numeric_title_becomes_string(tmp_path):
    write(tmp_path / "posts" / "year.md", "---\ntitle: 2024\n---\n")

    page = load_pages(tmp_path)[0]

    assert page["title"] == "2024"
