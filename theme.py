"""
Blog layout driven by the theme configuration from theme_config.py.

Every function returns an HTML fragment; build_site.py wraps the result
in the document shell from head.py.
"""
import html

from content import format_date, slugify_tag


def render_navs(navs) -> str:
    """External navigation entries, in the order given."""
    links = []
    for nav in navs:
        href = html.escape(nav["url"], quote=True)
        label = html.escape(nav["name"])
        links.append(f'<a href="{href}" class="nav-link" target="_blank" rel="noreferrer">{label}</a>')
    return f'<nav class="nav-links">{"".join(links)}</nav>'


def theme_toggle_html() -> str:
    return """<input type="checkbox" id="theme-toggle" class="theme-toggle-checkbox" aria-label="Toggle dark mode">
<div class="theme-toggle-control">
  <label for="theme-toggle" class="theme-toggle-label">
    <span class="theme-toggle-icon theme-toggle-light" aria-hidden="true">☀️</span>
    <span class="theme-toggle-icon theme-toggle-dark" aria-hidden="true">🌙</span>
  </label>
</div>"""


def render_header(site_title: str, theme: dict, nav_pages=(), *, active_route=None) -> str:
    """Site title, links to standalone pages, then the configured navs."""
    page_links = []
    for p in nav_pages:
        css_class = "page-link"
        if p["route"] == active_route:
            css_class += " active"
        label = html.escape(p["title"] or p["route"])
        page_links.append(f'<a href="{html.escape(p["route"], quote=True)}" class="{css_class}">{label}</a>')

    toggle = f"\n  {theme_toggle_html()}" if theme.get("darkMode") else ""

    return f"""<header class="site-header">
  <a href="/" class="site-title">{html.escape(site_title)}</a>
  <div class="page-links">{"".join(page_links)}</div>
  {render_navs(theme.get("navs") or [])}{toggle}
</header>"""


def render_footer(theme: dict, extra_footer=()) -> str:
    extra = ""
    if extra_footer:
        extra = "\n  " + "\n  ".join(extra_footer)
    return f"""<footer class="site-footer">
  {theme.get("footer") or ""}{extra}
</footer>"""


def render_tag_links(tags) -> str:
    if not tags:
        return ""
    pills = []
    for tag in tags:
        href = f"/tags/{slugify_tag(tag)}"
        pills.append(f'<li><a href="{href}" class="post-tag">{html.escape(tag)}</a></li>')
    return f'<ul class="post-tags">{"".join(pills)}</ul>'


def render_post_body(page: dict, body_html: str, theme: dict, date_format: str) -> str:
    """A single post: heading, date, tags, rendered body and optional post footer."""
    heading = ""
    if page.get("title"):
        heading = f'\n  <h1 class="post-title">{html.escape(page["title"])}</h1>'

    date_html = ""
    if page.get("date"):
        iso = page["date"].isoformat()
        date_html = f'\n  <time datetime="{iso}" class="post-date">{format_date(page["date"], date_format)}</time>'

    post_footer = ""
    if theme.get("postFooter") is not None:
        post_footer = f'\n  <div class="post-footer">{theme["postFooter"]}</div>'

    return f"""<article class="post">{heading}{date_html}
  {render_tag_links(page.get("tags"))}
  <div class="post-body">
    {body_html}
  </div>{post_footer}
</article>"""


def render_posts_list(pages, theme: dict, date_format: str) -> str:
    """Posts layout: title, description and a read-more link per post."""
    if not pages:
        return "<p>No posts yet.</p>"

    items = []
    for p in pages:
        href = html.escape(p["route"], quote=True)
        title = html.escape(p["title"] or p["route"])
        description = p["meta"].get("description")
        desc_html = f'\n    <p class="post-description">{html.escape(str(description))}</p>' if description else ""
        date_html = ""
        if p.get("date"):
            date_html = f'\n    <time datetime="{p["date"].isoformat()}">{format_date(p["date"], date_format)}</time>'
        items.append(f"""  <div class="post-item">
    <h3><a href="{href}">{title}</a></h3>{desc_html}
    <p class="read-more"><a href="{href}">{html.escape(theme.get("readMore") or "")}</a></p>{date_html}
  </div>""")
    return '<div class="posts">\n' + "\n".join(items) + "\n</div>"


def render_page_layout(site_title: str, theme: dict, main_html: str, *, nav_pages=(), active_route=None, extra_footer=()) -> str:
    """Header, main content and footer."""
    return f"""<div class="layout">
{render_header(site_title, theme, nav_pages, active_route=active_route)}
<main class="content">
{main_html}
</main>
{render_footer(theme, extra_footer)}
</div>"""
