import tomllib
from dataclasses import dataclass
from pathlib import Path

from ctxlens.discovery.catalog import CatalogOptions
from ctxlens.discovery.context_files import DEFAULT_CONTEXT_MAX_CONTENT_LENGTH
from ctxlens.discovery.linked_docs import (
    DEFAULT_CONCURRENCY,
    DEFAULT_DOC_MAX_CONTENT_LENGTH,
    DEFAULT_MAX_DOCS,
    DocDiscoveryOptions,
)
from ctxlens.providers.abc import DEFAULT_TIMEOUT_MS


@dataclass(frozen=True)
class LoadedConfig:
    """In-memory representation of `.ctxlens/config.toml`.

    Example config.toml:
      [discovery]
      max_depth = 3
      max_content_length = 50000

      [linked_docs]
      max_docs = 30
      max_content_length = 8000
      concurrency = 2
      timeout_ms = 60000
    """

    max_depth: int | None
    max_content_length: int
    max_docs: int
    doc_max_content_length: int
    concurrency: int
    timeout_ms: int

    def to_catalog_options(self) -> CatalogOptions:
        """Build library options from the loaded values.

        Raises:
            ValueError: If a value is outside its allowed range.
        """
        return CatalogOptions(
            max_depth=self.max_depth,
            max_content_length=self.max_content_length,
            linked_docs=DocDiscoveryOptions(
                max_docs=self.max_docs,
                max_content_length=self.doc_max_content_length,
                concurrency=self.concurrency,
                timeout_ms=self.timeout_ms,
            ),
        )


def get_config_path(base_dir: Path) -> Path:
    return base_dir / ".ctxlens" / "config.toml"


def _optional_int(table: dict[str, object], key: str) -> int | None:
    value = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Config key '{key}' must be an integer, got {value!r}")
    return value


def _int_with_default(table: dict[str, object], key: str, default: int) -> int:
    value = _optional_int(table, key)
    if value is None:
        return default
    return value


def load_config(base_dir: Path) -> LoadedConfig:
    """Load .ctxlens/config.toml from base_dir if present; otherwise return defaults.

    Raises:
        ValueError: If the file is not valid TOML or a value has the wrong type.
    """
    cfg_path = get_config_path(base_dir)
    data: dict[str, object] = {}
    if cfg_path.exists():
        try:
            data = tomllib.loads(cfg_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid config file {cfg_path}: {e}") from e

    discovery = data.get("discovery", {})
    linked_docs = data.get("linked_docs", {})
    if not isinstance(discovery, dict) or not isinstance(linked_docs, dict):
        raise ValueError(f"Invalid config file {cfg_path}: sections must be tables")

    return LoadedConfig(
        max_depth=_optional_int(discovery, "max_depth"),
        max_content_length=_int_with_default(
            discovery, "max_content_length", DEFAULT_CONTEXT_MAX_CONTENT_LENGTH
        ),
        max_docs=_int_with_default(linked_docs, "max_docs", DEFAULT_MAX_DOCS),
        doc_max_content_length=_int_with_default(
            linked_docs, "max_content_length", DEFAULT_DOC_MAX_CONTENT_LENGTH
        ),
        concurrency=_int_with_default(linked_docs, "concurrency", DEFAULT_CONCURRENCY),
        timeout_ms=_int_with_default(linked_docs, "timeout_ms", DEFAULT_TIMEOUT_MS),
    )
