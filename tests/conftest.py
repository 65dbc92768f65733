from pathlib import Path

import pytest


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def site(tmp_path):
    """
    A small site on disk: two posts, a draft, a standalone page,
    a PDF next to the pages and one public image.
    """
    write(
        tmp_path / "config.yml",
        """site_title: nickbeaulieu.dev
navs:
  - url: https://docs.stashpad.com
    name: "Stashpad ↗"
""",
    )
    write(
        tmp_path / "pages" / "posts" / "hello.md",
        """---
title: Hello World
date: 2023-01-01
description: First post.
tag: Solid
author: Nick Beaulieu
---

Hello from markdown.
""",
    )
    write(
        tmp_path / "pages" / "posts" / "second.md",
        """---
title: Second
date: 2023-02-01
tag: solid, yjs
---

![A cat](cat.png)
""",
    )
    write(
        tmp_path / "pages" / "posts" / "draft.md",
        """---
title: Not yet
date: 2023-03-01
draft: true
---

Work in progress.
""",
    )
    write(
        tmp_path / "pages" / "about.md",
        """---
title: About
---

About me.
""",
    )
    resume = tmp_path / "pages" / "docs" / "resume.pdf"
    resume.parent.mkdir(parents=True)
    resume.write_bytes(b"%PDF-1.4")
    image = tmp_path / "public" / "image" / "home.png"
    image.parent.mkdir(parents=True)
    image.write_bytes(b"\x89PNG")
    return tmp_path
