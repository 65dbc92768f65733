import sys
from pathlib import Path, PurePosixPath

PDF_RULE = {"test": r"\.pdf$", "name": "[path][name].[ext]"}


def style_config(cfg: dict) -> dict:
    """Tailwind config: which files the utility-class scanner reads."""
    return {
        "content": list(cfg["content"]),
        "theme": {"extend": {}},
        "plugins": [],
    }


def export_config(cfg: dict) -> dict:
    """Static export options used by build_site.py."""
    return {
        "strict_mode": True,
        "output": "export",
        "images": {"unoptimized": cfg.get("images_unoptimized", True)},
        "theme": "theme.py",
        "theme_config": "theme_config.py",
        "asset_rules": [dict(PDF_RULE)],
    }


def expand_braces(pattern: str) -> list:
    """
    Expand {a,b} alternations, which pathlib globs don't understand:

      "*.{md,mdx}" -> ["*.md", "*.mdx"]
    """
    start = pattern.find("{")
    if start == -1:
        return [pattern]

    depth = 0
    for end in range(start, len(pattern)):
        ch = pattern[end]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                break
    else:
        # unbalanced brace: treat literally
        return [pattern]

    # split the group on top-level commas
    options, buf, depth = [], "", 0
    for ch in pattern[start + 1:end]:
        if ch == "," and depth == 0:
            options.append(buf)
            buf = ""
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        buf += ch
    options.append(buf)

    prefix, suffix = pattern[:start], pattern[end + 1:]
    results = []
    for opt in options:
        for expanded in expand_braces(prefix + opt + suffix):
            if expanded not in results:
                results.append(expanded)
    return results


def resolve_content_files(root: Path, globs) -> list:
    """
    Files under root matched by the content globs, as sorted posix paths.

    Absolute patterns are skipped with a warning; globs are relative to root.
    """
    found = set()
    for pattern in globs:
        for pat in expand_braces(pattern):
            if pat.startswith("./"):
                pat = pat[2:]
            if PurePosixPath(pat).is_absolute() or Path(pat).is_absolute():
                print(f"WARNING: skipping absolute content pattern {pat!r}", file=sys.stderr)
                continue
            for path in root.glob(pat):
                if path.is_file():
                    found.add(path.relative_to(root).as_posix())
    return sorted(found)


def asset_destination(name_template: str, rel_path) -> str:
    """Apply a [path][name].[ext] template to a path relative to the source dir."""
    p = PurePosixPath(rel_path)
    parent = p.parent.as_posix()
    return (
        name_template
        .replace("[path]", "" if parent == "." else parent + "/")
        .replace("[name]", p.stem)
        .replace("[ext]", p.suffix.lstrip("."))
    )
