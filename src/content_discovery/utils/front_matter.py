"""YAML front matter for markdown posts and papers.

A document file opens with a YAML mapping fenced by lines of three or more
dashes; everything after the closing fence is the body:

    ---
    id: attention-is-all-you-need
    title: Attention Is All You Need
    tags: [nlp, transformers]
    published_at: 2024-01-15T10:30:00Z
    ---
    The dominant sequence transduction models...
"""

import re
from typing import Any

import yaml


_BLOCK = re.compile(r"\A-{3,}[ \t]*\r?\n(?P<yaml>.*?)\r?\n-{3,}[ \t]*(?:\r?\n|\Z)", re.DOTALL)


def parse_front_matter(content: str) -> tuple[dict[str, Any], str]:
    """Split ``content`` into its front matter mapping and markdown body.

    Content without a leading fenced block, or whose block is not a YAML
    mapping, comes back unchanged with empty metadata.

    Raises:
        yaml.YAMLError: If the fenced block is not valid YAML. Callers decide
            whether a malformed file is skipped or fatal.

    >>> parse_front_matter("---\\ntitle: Hello\\n---\\n# Content")
    ({'title': 'Hello'}, '# Content')
    """
    block = _BLOCK.match(content)
    if block is None:
        return {}, content

    metadata = yaml.safe_load(block.group("yaml"))
    if metadata is None:
        metadata = {}
    elif not isinstance(metadata, dict):
        return {}, content
    return metadata, content[block.end() :]

