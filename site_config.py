import sys
from pathlib import Path

import yaml           # pip install pyyaml

BASE_DIR = Path(__file__).parent

SITE_DESCRIPTION = (
    "Hey 👋 I'm Nick! I'm sharing my experiences as a software developer, "
    "and things I learn along the way. Currently, my work is focused on "
    "Cloudflare, Solid, and Yjs."
)

DEFAULT_NAVS = [
    {"url": "https://docs.stashpad.com", "name": "Stashpad ↗"},
]

DEFAULT_CONTENT_GLOBS = [
    "./pages/**/*.{js,jsx,ts,tsx,md,mdx}",
    "./components/**/*.{js,jsx,ts,tsx,md,mdx}",
    "./theme_config.py",
]


def get_config_path_from_args(argv=None) -> Path:
    """
    Determine which config file to use.

    - If a path is passed as first argument, use that.
    - Otherwise, assume config.yml next to this file.
    """
    argv = sys.argv if argv is None else argv
    if len(argv) > 1:
        return Path(argv[1]).resolve()
    return (BASE_DIR / "config.yml").resolve()


def _as_list(value):
    # extra_head / extra_footer can be a string or a list
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(x) for x in value]
    return []


def _clean_navs(value):
    if value is None:
        return [dict(n) for n in DEFAULT_NAVS]
    navs = []
    for item in value or []:
        if not isinstance(item, dict) or not item.get("url"):
            print(f"WARNING: ignoring nav entry without url: {item!r}", file=sys.stderr)
            continue
        navs.append({"url": str(item["url"]), "name": str(item.get("name") or item["url"])})
    return navs


def load_config(config_path: Path) -> dict:
    """Load YAML config and apply defaults."""
    if not config_path.exists():
        print(f"Config file not found: {config_path}", file=sys.stderr)
        sys.exit(1)

    data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    root = config_path.parent

    site_title = data.get("site_title", "nickbeaulieu.dev")

    cfg = {
        "root": root,
        "site_title": site_title,
        "site_description": data.get("site_description", SITE_DESCRIPTION),
        "site_image": data.get("site_image", "/image/home.png"),
        "title_suffix": data.get("title_suffix", f" | {site_title}"),
        "twitter_site": data.get("twitter_site", "@nickbeaulieu_"),
        "lang": data.get("lang", "en"),
        # Paths are relative to the config file
        "pages_dir": (root / data.get("pages_dir", "pages")).resolve(),
        "public_dir": (root / data.get("public_dir", "public")).resolve(),
        "output_dir": (root / data.get("output_dir", "out")).resolve(),
        "css_path": (root / data["css_path"]).resolve() if data.get("css_path") else None,
        "date_format": data.get("date_format", "%Y-%m-%d"),
        "include_drafts": bool(data.get("include_drafts", False)),
        # Theme
        "dark_mode": bool(data.get("dark_mode", True)),
        "read_more": data.get("read_more", "Read More →"),
        "post_footer": data.get("post_footer"),
        "github_url": data.get("github_url", "https://github.com/nickbeaulieu"),
        "navs": _clean_navs(data.get("navs")),
        # Build
        "content": _as_list(data.get("content")) or list(DEFAULT_CONTENT_GLOBS),
        "images_unoptimized": bool(data.get("images_unoptimized", True)),
        "extra_head": _as_list(data.get("extra_head", [])),
        "extra_footer": _as_list(data.get("extra_footer", [])),
    }
    return cfg
