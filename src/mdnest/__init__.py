"""mdnest: directory snapshots and frontmatter metadata for markdown workspaces."""

__version__ = "0.3.0"
