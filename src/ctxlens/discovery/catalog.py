"""Build the full context catalog of a repository."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from ctxlens.discovery.context_files import (
    DEFAULT_CONTEXT_MAX_CONTENT_LENGTH,
    find_context_files,
    load_context_artifacts,
)
from ctxlens.discovery.linked_docs import DocDiscoveryOptions, discover_linked_docs
from ctxlens.discovery.models import ContextCatalog, LinkedDocsResult
from ctxlens.discovery.skills import build_skill_catalog
from ctxlens.providers.abc import AIProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CatalogOptions:
    """Options for build_catalog.

    Attributes:
        max_depth: Maximum directory depth for discovery, None for unlimited.
        max_content_length: Truncation limit for context file content.
        linked_docs: Limits for linked documentation discovery.
    """

    max_depth: int | None = None
    max_content_length: int = DEFAULT_CONTEXT_MAX_CONTENT_LENGTH
    linked_docs: DocDiscoveryOptions = field(default_factory=DocDiscoveryOptions)

    def __post_init__(self) -> None:
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")
        if self.max_content_length <= 0:
            raise ValueError(
                f"max_content_length must be positive, got {self.max_content_length}"
            )


def build_catalog(
    base_dir: Path,
    *,
    provider: AIProvider | None,
    options: CatalogOptions | None = None,
) -> ContextCatalog:
    """Locate context files, catalog skills, and summarize linked docs.

    Linked docs are discovered from the located context files, shallowest
    first. Without a provider, linked-doc discovery is skipped.
    """
    opts = options if options is not None else CatalogOptions()
    root = Path(os.path.abspath(base_dir))

    context_paths = find_context_files(root, opts.max_depth)
    context_files = load_context_artifacts(
        context_paths, root, max_content_length=opts.max_content_length
    )
    skills = build_skill_catalog(root, opts.max_depth)

    if provider is None:
        logger.debug("No provider given, skipping linked docs discovery")
        linked_docs = LinkedDocsResult(docs=[], total_links_found=0, unresolved_links=[])
    else:
        linked_docs = discover_linked_docs(
            context_paths, root, provider=provider, options=opts.linked_docs
        )

    return ContextCatalog(context_files=context_files, skills=skills, linked_docs=linked_docs)
