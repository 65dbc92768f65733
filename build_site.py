#!/usr/bin/env python3
import re
import sys
import html
import json
import shutil
from pathlib import Path

from build_config import asset_destination, export_config, resolve_content_files, style_config
from content import (
    PAGE_SUFFIXES,
    build_tag_index,
    format_date,
    load_pages,
    render_markdown,
    sorted_posts,
)
from head import build_head, merge_tags, render_document, title_tag
from post_item import render_post_list
from site_config import get_config_path_from_args, load_config
from theme import render_page_layout, render_post_body, render_posts_list
from theme_config import make_theme_config

MANIFEST_FILENAME = "build-manifest.json"
CSS_FILENAME = "style.css"


def route_to_path(route: str) -> str:
    """/ -> index.html, /posts/hello -> posts/hello.html"""
    route = route.strip("/")
    if not route:
        return "index.html"
    return f"{route}.html"


def write_page(output_dir: Path, route: str, document: str) -> Path:
    out_path = output_dir / route_to_path(route)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(document, encoding="utf-8")
    print(f"Wrote {out_path}")
    return out_path


def copy_css(css_src, output_dir: Path) -> bool:
    """Copy the prebuilt stylesheet into the output directory as style.css."""
    if css_src is None:
        return False
    if not css_src.exists():
        print(f"WARNING: CSS file not found at {css_src}", file=sys.stderr)
        return False
    dest = output_dir / CSS_FILENAME
    shutil.copy2(css_src, dest)
    print(f"Copied CSS to {dest}")
    return True


def copy_public(public_dir: Path, output_dir: Path):
    """Copy public/ verbatim into the output root."""
    if not public_dir.is_dir():
        return
    shutil.copytree(public_dir, output_dir, dirs_exist_ok=True)
    print(f"Copied {public_dir} to {output_dir}")


def copy_page_assets(pages_dir: Path, output_dir: Path, rules):
    """Copy non-markdown files from pages/ that match an asset rule."""
    if not pages_dir.is_dir():
        return
    for src in sorted(pages_dir.rglob("*")):
        if not src.is_file() or src.suffix in PAGE_SUFFIXES:
            continue
        rel = src.relative_to(pages_dir)
        for rule in rules:
            if not re.search(rule["test"], src.name):
                continue
            dest = output_dir / asset_destination(rule["name"], rel.as_posix())
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, dest)
            print(f"Copied {rel} to {dest}")
            break


def write_manifest(output_dir: Path, export: dict, style: dict, content_files, routes):
    manifest = {
        "export": export,
        "style": dict(style, files=list(content_files)),
        "routes": sorted(routes),
    }
    out_path = output_dir / MANIFEST_FILENAME
    out_path.write_text(json.dumps(manifest, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"Wrote {out_path}")


def post_refs(posts, date_format: str):
    return [
        {
            "title": p["title"] or p["route"],
            "link": p["route"],
            "date": format_date(p["date"], date_format),
        }
        for p in posts
    ]


def build(cfg: dict) -> list:
    """Build the static export described by cfg. Returns the written routes."""
    theme = make_theme_config(cfg)
    export = export_config(cfg)
    style = style_config(cfg)
    output_dir = cfg["output_dir"]
    date_format = cfg["date_format"]

    pages = load_pages(cfg["pages_dir"], include_drafts=cfg["include_drafts"])
    if not pages:
        print(f"No pages found in {cfg['pages_dir']}.", file=sys.stderr)
        sys.exit(1)

    if not export["images"]["unoptimized"]:
        print("WARNING: image optimisation is not available in static export; images are copied as-is",
              file=sys.stderr)

    output_dir.mkdir(parents=True, exist_ok=True)

    # Assets first so generated pages win on name clashes
    copy_public(cfg["public_dir"], output_dir)
    copy_page_assets(cfg["pages_dir"], output_dir, export["asset_rules"])

    extra_head = []
    if copy_css(cfg["css_path"], output_dir):
        extra_head.append(f'<link rel="stylesheet" href="/{CSS_FILENAME}">')
    extra_head.extend(cfg["extra_head"])

    site_meta = {
        "title": cfg["site_title"],
        "description": cfg["site_description"],
        "image": cfg["site_image"],
    }
    document_tags = build_head(site_meta, cfg["twitter_site"])

    posts = sorted_posts(pages)
    nav_pages = [p for p in pages if p["type"] == "page" and p["route"] != "/"]
    routes = []

    def emit(route, head_tags, main_html):
        body = render_page_layout(
            cfg["site_title"],
            theme,
            main_html,
            nav_pages=nav_pages,
            active_route=route,
            extra_footer=cfg["extra_footer"],
        )
        document = render_document(
            merge_tags(document_tags, head_tags),
            body,
            lang=cfg["lang"],
            extra_head=extra_head,
        )
        write_page(output_dir, route, document)
        routes.append(route)

    # Home: optional intro from pages/index.md, then the post list
    home = next((p for p in pages if p["route"] == "/"), None)
    intro_html = ""
    if home is not None:
        home_tags = theme["head"]({"title": home["title"], "meta": home["meta"]})
        intro_html = render_markdown(home["content_md"])
    else:
        home_tags = [title_tag(cfg["site_title"])]
    emit("/", home_tags, intro_html + "\n" + render_post_list(post_refs(posts, date_format)))

    for page in pages:
        if page["route"] == "/":
            continue
        body_html = render_markdown(page["content_md"])
        if page["type"] == "post":
            main_html = render_post_body(page, body_html, theme, date_format)
        elif page["type"] == "posts":
            main_html = body_html + "\n" + render_posts_list(posts, theme, date_format)
        else:
            main_html = f'<article class="page">\n{body_html}\n</article>'
        head_tags = theme["head"]({"title": page["title"], "meta": page["meta"]})
        emit(page["route"], head_tags, main_html)

    # Tag pages
    for slug, data in build_tag_index(posts).items():
        title = f"Posts tagged with {data['name']}"
        head_tags = theme["head"]({"title": title, "meta": {}})
        main_html = f'<h1 class="tag-title">{html.escape(title)}</h1>\n' + render_posts_list(data["pages"], theme, date_format)
        emit(f"/tags/{slug}", head_tags, main_html)

    content_files = resolve_content_files(cfg["root"], style["content"])
    write_manifest(output_dir, export, style, content_files, routes)
    return routes


def main(argv=None):
    cfg = load_config(get_config_path_from_args(argv))
    build(cfg)


if __name__ == "__main__":
    main()
