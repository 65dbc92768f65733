import html

from head import page_head


def footer_html(github_url: str) -> str:
    href = html.escape(github_url, quote=True)
    return f"""<hr>
<p class="flex gap-2">
  <a href="{href}" target="github">Github</a>
</p>"""


def make_theme_config(cfg: dict) -> dict:
    """
    Theme configuration consumed by the layout in theme.py.

    `head` is called once per content page with {"title": ..., "meta": ...}
    and returns that page's head tags.
    """
    title_suffix = cfg["title_suffix"]
    twitter_site = cfg["twitter_site"]

    def head(page_context):
        return page_head(
            page_context.get("title"),
            page_context.get("meta") or {},
            title_suffix=title_suffix,
            twitter_site=twitter_site,
        )

    return {
        "footer": footer_html(cfg["github_url"]),
        "head": head,
        "readMore": cfg["read_more"],
        "postFooter": cfg["post_footer"],
        "darkMode": cfg["dark_mode"],
        "navs": [dict(n) for n in cfg["navs"]],
    }
