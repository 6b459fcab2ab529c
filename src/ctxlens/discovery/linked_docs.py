"""Discover and summarize documentation linked from context files.

Context files frequently delegate detail to other Markdown files
(`See [Testing](docs/testing.md)`). Each linked file is read and summarized
in one sentence by an AI provider, running in an isolated sandbox so the
provider answers from the prompt instead of exploring the repository.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from ctxlens.core.concurrency import run_with_concurrency_limit
from ctxlens.core.file_reading import get_relative_path, read_file_with_limit
from ctxlens.core.isolated_prompt import invoke_isolated
from ctxlens.discovery.models import ExtractedLink, LinkedDocsResult, LinkedDocSummary
from ctxlens.providers.abc import DEFAULT_TIMEOUT_MS, AIProvider

DEFAULT_MAX_DOCS = 30
DEFAULT_DOC_MAX_CONTENT_LENGTH = 8000
DEFAULT_CONCURRENCY = 2
MAX_CONCURRENCY = 10

# Responses shorter than this are treated as a failed summary
MIN_SUMMARY_LENGTH = 10

# [text](path/to/file.md) or [text](path/to/file.md#anchor)
_INLINE_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+\.md(?:#[^)]*)?)\)", re.IGNORECASE)

# [ref]: path/to/file.md, alone on its line
_REFERENCE_DEF_RE = re.compile(
    r"^\[([^\]]+)\]:\s*(\S+\.md(?:#\S*)?)\s*$", re.IGNORECASE | re.MULTILINE
)

_SELF_REFERENCE_FILENAMES = ("agents.md", "claude.md", "copilot-instructions.md")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DocDiscoveryOptions:
    """Limits for linked documentation discovery.

    Attributes:
        max_docs: Maximum number of linked docs to summarize.
        max_content_length: Per-file truncation limit in characters.
        concurrency: Maximum summarizations in flight (1-10).
        timeout_ms: Per-invocation provider timeout in milliseconds.
    """

    max_docs: int = DEFAULT_MAX_DOCS
    max_content_length: int = DEFAULT_DOC_MAX_CONTENT_LENGTH
    concurrency: int = DEFAULT_CONCURRENCY
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    def __post_init__(self) -> None:
        if not 1 <= self.concurrency <= MAX_CONCURRENCY:
            raise ValueError(
                f"concurrency must be between 1 and {MAX_CONCURRENCY}, got {self.concurrency}"
            )
        if self.max_docs < 0:
            raise ValueError(f"max_docs must not be negative, got {self.max_docs}")
        if self.max_content_length <= 0:
            raise ValueError(
                f"max_content_length must be positive, got {self.max_content_length}"
            )
        if self.timeout_ms <= 0:
            raise ValueError(f"timeout_ms must be positive, got {self.timeout_ms}")


def _is_external_url(target: str) -> bool:
    return target.startswith(("http://", "https://", "//"))


def _remove_anchor(target: str) -> str:
    return target.split("#", 1)[0]


def _is_self_reference(target: str) -> bool:
    """True for links to other context files, which are evaluated on their own."""
    filename = target.rsplit("/", 1)[-1].lower()
    if filename in _SELF_REFERENCE_FILENAMES:
        return True
    return filename.endswith(".instructions.md") and ".github/instructions/" in target


def extract_markdown_links(content: str, source_path: Path) -> list[ExtractedLink]:
    """Extract links to .md files from Markdown content.

    Handles `[text](path.md)`, `[text](path.md#anchor)` and `[ref]: path.md`.
    External URLs, anchor-only links and links to other context files are
    left out. Targets are resolved against the source file's directory and
    deduplicated, first occurrence winning.
    """
    source_dir = source_path.parent
    seen: set[Path] = set()
    links: list[ExtractedLink] = []

    candidates = [m.groups() for m in _INLINE_LINK_RE.finditer(content)]
    candidates.extend(m.groups() for m in _REFERENCE_DEF_RE.finditer(content))

    for link_text, target in candidates:
        if not target or _is_external_url(target) or target.startswith("#"):
            continue

        clean_target = _remove_anchor(target)
        if _is_self_reference(clean_target):
            continue

        if os.path.isabs(clean_target):
            absolute_path = Path(clean_target)
        else:
            absolute_path = Path(os.path.abspath(source_dir / clean_target))

        if absolute_path in seen:
            continue
        seen.add(absolute_path)

        links.append(
            ExtractedLink(
                raw_path=clean_target,
                absolute_path=absolute_path,
                link_text=link_text,
                source_path=source_path,
            )
        )

    return links


def collect_linked_doc_links(
    source_paths: list[Path],
    base_dir: Path,
    *,
    max_docs: int,
) -> tuple[list[ExtractedLink], int]:
    """Extract links from every source file and deduplicate across sources.

    Sources are processed in the given order and the first occurrence of each
    target wins, so callers should list root-level files first.

    Returns:
        The first max_docs unique links, and the unique link count before
        the cap.
    """
    unique_links: dict[Path, ExtractedLink] = {}
    for source_path in source_paths:
        try:
            content = source_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.debug("Error reading %s: %s", source_path, e)
            continue

        links = extract_markdown_links(content, source_path)
        if links:
            logger.debug(
                "Found %d link(s) in %s", len(links), get_relative_path(source_path, base_dir)
            )
        for link in links:
            unique_links.setdefault(link.absolute_path, link)

    deduplicated = list(unique_links.values())
    total_links_found = len(deduplicated)
    logger.debug("%d unique linked doc(s) found after deduplication", total_links_found)
    if total_links_found > max_docs:
        logger.debug(
            "Limiting to %d docs (%d skipped)", max_docs, total_links_found - max_docs
        )
    return deduplicated[:max_docs], total_links_found


def build_summarization_prompt(content: str) -> str:
    """Build the one-sentence summarization prompt.

    The file path is left out on purpose: given a path, agents tend to go
    read the file instead of summarizing the content in front of them.
    """
    return f"""You are a documentation summarizer for AI coding agents.

Given the following Markdown documentation, provide a single detailed sentence \
that describes both the document's purpose and the key information it contains \
for developers/AI agents.

IMPORTANT:
- Respond with ONLY 1 detailed sentence, nothing else
- Be specific and actionable, avoid vague statements
- Focus on information useful for coding tasks

---

```markdown
{content}
```"""


def fallback_summary(relative_path: str) -> str:
    return f"Documentation file at {relative_path}. Summary unavailable."


def summarize_doc_file(
    relative_path: str,
    content: str,
    provider: AIProvider,
    *,
    timeout_ms: int,
) -> str:
    """Summarize a documentation file in one sentence.

    Provider errors, timeouts and near-empty responses produce the fallback
    summary instead of raising.
    """
    prompt = build_summarization_prompt(content)
    try:
        response = invoke_isolated(
            provider,
            prompt,
            timeout_ms=timeout_ms,
            verbose=logger.isEnabledFor(logging.DEBUG),
        )
    except Exception as e:
        logger.debug("Summarization failed for %s: %s", relative_path, e)
        return fallback_summary(relative_path)

    summary = response.result.strip()
    if len(summary) < MIN_SUMMARY_LENGTH:
        logger.debug("Summary too short for %s: %r", relative_path, summary)
        return fallback_summary(relative_path)
    return summary


@dataclass(frozen=True)
class SummarizedLink:
    doc: LinkedDocSummary


@dataclass(frozen=True)
class UnresolvedLink:
    raw_path: str


LinkResolution = SummarizedLink | UnresolvedLink


def resolve_link(
    link: ExtractedLink,
    base_dir: Path,
    provider: AIProvider,
    options: DocDiscoveryOptions,
) -> LinkResolution:
    """Read and summarize one linked doc, or report it unresolved."""
    content = read_file_with_limit(link.absolute_path, options.max_content_length)
    if content is None:
        logger.debug("File not found: %s", link.raw_path)
        return UnresolvedLink(raw_path=link.raw_path)

    relative_path = get_relative_path(link.absolute_path, base_dir)
    logger.debug("Summarizing: %s", relative_path)
    summary = summarize_doc_file(relative_path, content, provider, timeout_ms=options.timeout_ms)
    return SummarizedLink(
        doc=LinkedDocSummary(
            path=relative_path,
            summary=summary,
            linked_from=get_relative_path(link.source_path, base_dir),
            content=content,
        )
    )


def discover_linked_docs(
    source_paths: list[Path],
    base_dir: Path,
    *,
    provider: AIProvider,
    options: DocDiscoveryOptions | None = None,
) -> LinkedDocsResult:
    """Find, read and summarize the docs linked from the given context files.

    Args:
        source_paths: Absolute paths of context files, root-level first.
        base_dir: Repository root, for relative paths in the result.
        provider: Provider used for summarization.
        options: Discovery limits; defaults when None.

    Returns:
        LinkedDocsResult with docs in link order. Links whose target cannot
        be read are listed in unresolved_links by their raw path.
    """
    opts = options if options is not None else DocDiscoveryOptions()
    links, total_links_found = collect_linked_doc_links(
        source_paths, base_dir, max_docs=opts.max_docs
    )

    outcomes = run_with_concurrency_limit(
        links,
        opts.concurrency,
        lambda link, _index: resolve_link(link, base_dir, provider, opts),
    )

    docs: list[LinkedDocSummary] = []
    unresolved_links: list[str] = []
    for outcome in outcomes:
        if isinstance(outcome.value, SummarizedLink):
            docs.append(outcome.value.doc)
        elif isinstance(outcome.value, UnresolvedLink):
            unresolved_links.append(outcome.value.raw_path)

    logger.debug(
        "Summarized %d doc(s), %d unresolved", len(docs), len(unresolved_links)
    )
    return LinkedDocsResult(
        docs=docs,
        total_links_found=total_links_found,
        unresolved_links=unresolved_links,
    )
