import html


def render_post_item(title: str, link: str, date: str) -> str:
    """One row of the post list: title link on the left, date on the right."""
    return (
        '<div class="flex items-center justify-between mb-4">'
        f'<a href="{html.escape(link, quote=True)}">{html.escape(title)}</a>'
        f'<span class="ml-4 w-20">{html.escape(date)}</span>'
        "</div>"
    )


def render_post_list(posts) -> str:
    """Render post references ({title, link, date}) in the given order."""
    items = "\n  ".join(
        render_post_item(p["title"], p["link"], p["date"]) for p in posts
    )
    return f'<div class="post-list">\n  {items}\n</div>'
