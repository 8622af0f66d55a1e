"""Common literal values used across blog_pages.

These constants keep file names, delimiters, and derived-metadata tunables in
one place so the loader, the content scanner, and tests agree on them.

Examples
--------
>>> from blog_pages import _constants
>>> _constants.CONFIG_CANDIDATES[0]
'hugo.toml'
>>> ".md" in _constants.DOCUMENT_EXTENSIONS
True
"""

CONFIG_CANDIDATES = ("hugo.toml", "hugo.yaml", "config.toml", "config.yaml")
CONTENT_DIR = "content"

DOCUMENT_EXTENSIONS = frozenset({".md", ".markdown"})
SECTION_INDEX_STEM = "_index"
LEAF_BUNDLE_STEM = "index"

TOML_DELIMITER = "+++"
YAML_DELIMITER = "---"

SUMMARY_DIVIDER = "<!--more-->"
SUMMARY_WORDS = 70
WORDS_PER_MINUTE = 213
