"""
Document head tags.

Tags are plain dicts so they can be merged and compared before rendering:

  {"tag": "meta", "attrs": {"name": "robots", "content": "follow, index"}}
  {"tag": "title", "text": "Hello | nickbeaulieu.dev"}
"""
import html

ROBOTS = "follow, index"
TWITTER_CARD = "summary_large_image"


def _present(value) -> bool:
    if isinstance(value, (list, tuple)):
        return any(_present(v) for v in value)
    return value is not None and str(value).strip() != ""


def meta_tag(key: str, value: str, content) -> dict:
    return {"tag": "meta", "attrs": {key: value, "content": str(content)}}


def title_tag(text: str) -> dict:
    return {"tag": "title", "text": text}


def social_tags(meta: dict, twitter_site: str) -> list:
    """
    Open Graph and Twitter Card tags for one metadata record.

    Shared by the document shell (global site record) and the per-page
    head function (front matter). A tag is emitted only when its source
    field is set; the card type and site handle are constant.
    """
    title = meta.get("title")
    description = meta.get("description")
    image = meta.get("image")

    candidates = [
        ("property", "og:site_name", title),
        ("property", "og:description", description),
        ("property", "og:title", title),
        ("property", "og:image", image),
        ("name", "twitter:card", TWITTER_CARD),
        ("name", "twitter:site", twitter_site),
        ("name", "twitter:title", title),
        ("name", "twitter:description", description),
        ("name", "twitter:image", image),
    ]
    return [meta_tag(k, v, c) for k, v, c in candidates if _present(c)]


def build_head(meta: dict, twitter_site: str) -> list:
    """Tags injected once per document from the global site record."""
    tags = [meta_tag("name", "robots", ROBOTS)]
    if _present(meta.get("description")):
        tags.append(meta_tag("name", "description", meta["description"]))
    tags.extend(social_tags(meta, twitter_site))
    return tags


def page_head(title, meta: dict, *, title_suffix: str, twitter_site: str) -> list:
    """Tags for a single content page, built from its front matter."""
    meta = meta or {}
    tags = []
    if _present(title):
        tags.append(title_tag(f"{title}{title_suffix}"))
    if _present(meta.get("description")):
        tags.append(meta_tag("name", "description", meta["description"]))
    if _present(meta.get("tag")):
        tags.append(meta_tag("name", "keywords", _keywords(meta["tag"])))
    if _present(meta.get("author")):
        tags.append(meta_tag("name", "author", meta["author"]))
    tags.append(meta_tag("name", "robots", ROBOTS))
    tags.extend(social_tags(meta, twitter_site))
    return tags


def _keywords(tag) -> str:
    if isinstance(tag, (list, tuple)):
        return ", ".join(str(t) for t in tag)
    return str(tag)


def tag_key(tag: dict):
    """Identity of a tag for de-duplication: title, or meta name/property."""
    if tag["tag"] == "title":
        return ("title",)
    attrs = tag.get("attrs", {})
    for key in ("name", "property"):
        if key in attrs:
            return (key, attrs[key])
    return None


def merge_tags(base: list, overrides: list) -> list:
    """
    Overlay page tags on document tags.

    An override replaces the base tag with the same key in place; overrides
    with no counterpart are appended in their own order.
    """
    by_key = {}
    for t in overrides:
        k = tag_key(t)
        if k is not None:
            by_key[k] = t

    merged = []
    used = set()
    for t in base:
        k = tag_key(t)
        if k in by_key:
            if k not in used:
                merged.append(by_key[k])
                used.add(k)
            continue
        merged.append(t)

    for t in overrides:
        k = tag_key(t)
        if k is None or k not in used:
            merged.append(t)
            if k is not None:
                used.add(k)
    return merged


def render_tag(tag: dict) -> str:
    if tag["tag"] == "title":
        return f"<title>{html.escape(tag['text'])}</title>"
    attrs = " ".join(
        f'{name}="{html.escape(str(value), quote=True)}"'
        for name, value in tag.get("attrs", {}).items()
    )
    return f"<{tag['tag']} {attrs}>"


def render_tags(tags: list) -> str:
    return "\n  ".join(render_tag(t) for t in tags)


def render_document(head_tags: list, body_html: str, *, lang: str = "en", extra_head=None) -> str:
    """Full HTML document shell: head tags plus the body mount point."""
    extra_head_html = ""
    if extra_head:
        extra_head_html = "\n  " + "\n  ".join(extra_head)

    return f"""<!DOCTYPE html>
<html lang="{html.escape(lang, quote=True)}">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  {render_tags(head_tags)}{extra_head_html}
</head>
<body>
<div id="__next">
{body_html}
</div>
</body>
</html>
"""
