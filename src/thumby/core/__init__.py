"""Core / service layer — URL classification, resolution, blocks, rendering.

Rules
-----
* No ``print()`` calls.
* No direct network or filesystem I/O; HTTP goes through the injected
  :class:`~thumby.core.protocols.HttpClient`.
* No imports from ``cli`` or ``infra``.
"""

from thumby.core.blocks import (
    BlockKind,
    BlockOutcome,
    has_many_urls,
    minimal_block,
    process_block,
    rewrite_document,
)
from thumby.core.classifier import classify, extract_id
from thumby.core.models import (
    HttpResult,
    Provider,
    ProviderRule,
    ResolutionStatus,
    ResolverConfig,
    VideoInfo,
)
from thumby.core.protocols import HttpClient
from thumby.core.resolver import MetadataResolver, resolve

__all__: list[str] = [
    "BlockKind",
    "BlockOutcome",
    "HttpClient",
    "HttpResult",
    "MetadataResolver",
    "Provider",
    "ProviderRule",
    "ResolutionStatus",
    "ResolverConfig",
    "VideoInfo",
    "classify",
    "extract_id",
    "has_many_urls",
    "minimal_block",
    "process_block",
    "resolve",
    "rewrite_document",
]
