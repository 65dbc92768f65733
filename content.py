import re
import sys
from pathlib import Path
from datetime import datetime, date

import markdown       # pip install markdown
import yaml           # pip install pyyaml
from bs4 import BeautifulSoup  # pip install beautifulsoup4

PAGE_SUFFIXES = (".md", ".mdx")

# Matches a leading "---" YAML block
FRONT_MATTER_RE = re.compile(r"\A---\s*\n(.*?)\n---\s*(?:\n|\Z)", re.DOTALL)

DATE_FORMATS = ("%Y-%m-%d", "%Y/%m/%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S")

TRUTHY = ("true", "yes", "1", "y", "on")


def parse_front_matter(text: str, source=None):
    """Split YAML front matter from the markdown body. Returns (meta, body)."""
    m = FRONT_MATTER_RE.match(text)
    if not m:
        return {}, text

    body = text[m.end():]
    try:
        meta = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError as exc:
        print(f"WARNING: invalid front matter in {source or '<text>'}: {exc}", file=sys.stderr)
        return {}, body

    if not isinstance(meta, dict):
        print(f"WARNING: front matter in {source or '<text>'} is not a mapping", file=sys.stderr)
        return {}, body
    return meta, body


def parse_date(value, source=None):
    """Front matter date -> datetime.date, or None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    s = str(value).strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    print(f"WARNING: unrecognised date {s!r} in {source or '<text>'}", file=sys.stderr)
    return None


def format_date(value, fmt: str = "%Y-%m-%d") -> str:
    if value is None:
        return ""
    return value.strftime(fmt)


def parse_tags(value) -> list:
    """`tag` front matter: comma-separated string or list."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        raw = [str(t) for t in value]
    else:
        raw = str(value).split(",")
    return [t.strip() for t in raw if t.strip()]


def is_draft(value) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUTHY


def route_for(rel: Path) -> str:
    """
    pages-relative path -> route:

      posts/hello.md -> /posts/hello
      posts/index.md -> /posts
      index.md       -> /
    """
    parts = list(rel.with_suffix("").parts)
    if parts and parts[-1] == "index":
        parts = parts[:-1]
    return "/" + "/".join(parts)


def load_page(path: Path, pages_dir: Path) -> dict:
    text = path.read_text(encoding="utf-8")
    meta, body = parse_front_matter(text, source=path)

    rel = path.relative_to(pages_dir)
    route = route_for(rel)

    page_type = meta.get("type")
    if not page_type:
        in_posts = rel.parts[0] == "posts" and len(rel.parts) > 1
        if in_posts and route == "/posts":
            page_type = "posts"
        elif in_posts:
            page_type = "post"
        else:
            page_type = "page"

    return {
        "route": route,
        "source": path,
        "meta": meta,
        "title": None if meta.get("title") is None else str(meta["title"]),
        "content_md": body.strip(),
        "type": page_type,
        "date": parse_date(meta.get("date"), source=path),
        "tags": parse_tags(meta.get("tag")),
        "draft": is_draft(meta.get("draft")),
    }


def load_pages(pages_dir: Path, include_drafts: bool = False) -> list:
    """
    Walk the pages directory and load every markdown page.

    Files and directories starting with "_" are skipped. Draft pages are
    skipped unless include_drafts=True.
    """
    pages = []
    if not pages_dir.is_dir():
        return pages

    for path in sorted(pages_dir.rglob("*")):
        if not path.is_file() or path.suffix not in PAGE_SUFFIXES:
            continue
        rel = path.relative_to(pages_dir)
        if any(part.startswith("_") for part in rel.parts):
            continue

        page = load_page(path, pages_dir)
        if page["draft"] and not include_drafts:
            continue
        pages.append(page)

    return pages


def sorted_posts(pages) -> list:
    """Posts newest first; undated posts go last, by route."""
    posts = [p for p in pages if p["type"] == "post"]
    dated = sorted((p for p in posts if p["date"]), key=lambda p: (p["date"], p["route"]), reverse=True)
    undated = sorted((p for p in posts if not p["date"]), key=lambda p: p["route"])
    return dated + undated


def slugify_tag(tag: str) -> str:
    """
    Convert a tag like 'Outdoor Trips' into a URL-friendly slug: 'outdoor-trips'.
    """
    s = tag.strip().lower()
    s = re.sub(r"[\s_]+", "-", s)
    s = re.sub(r"[^a-z0-9-]", "", s)
    s = re.sub(r"-{2,}", "-", s).strip("-")
    return s or "tag"


def _age_key(page):
    # oldest first; undated pages after dated ones
    d = page.get("date")
    return (d is None, d or date.min, page.get("route") or "")


def build_tag_index(posts) -> dict:
    """
    Build a tag index:

      {
        "solid": { "name": "Solid", "pages": [page, ...] },
        ...
      }

    Keys are slugs. "name" is the most common spelling of the tag; on a
    tie, the spelling used by the oldest post wins, so the name does not
    depend on the order posts are given in. Pages keep that order.
    """
    tag_map = {}
    spellings = {}
    for p in posts:
        for tag in p.get("tags") or []:
            slug = slugify_tag(tag)
            if slug not in tag_map:
                tag_map[slug] = {"name": tag, "pages": []}
            if p not in tag_map[slug]["pages"]:
                tag_map[slug]["pages"].append(p)

            seen = spellings.setdefault(slug, {})
            count, oldest = seen.get(tag, (0, None))
            if oldest is None or _age_key(p) < oldest:
                oldest = _age_key(p)
            seen[tag] = (count + 1, oldest)

    for slug, seen in spellings.items():
        tag_map[slug]["name"] = min(seen, key=lambda t: (-seen[t][0], seen[t][1], t))
    return tag_map


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
        img.replace_with(figure)
        figure.append(img)

        if alt:
            caption = soup.new_tag("figcaption")
            caption.string = alt
            figure.append(caption)

    return str(soup)


def render_markdown(text: str) -> str:
    raw_html = markdown.markdown(text, extensions=["fenced_code", "tables"])
    return wrap_images_with_figures(raw_html)
