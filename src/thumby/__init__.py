"""thumby — video URL to thumbnail-card metadata.

Resolves YouTube and Vimeo URLs through their public oEmbed endpoints,
with a YouTube Data API fallback, and manages ``vidy`` Markdown blocks.
"""

from thumby.version import __version__

__all__: list[str] = ["__version__"]
