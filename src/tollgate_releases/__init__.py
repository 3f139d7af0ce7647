r"""tollgate-releases -- Release resolution for TollGate firmware and packages.

TollGate releases are published as NIP-94 file metadata events (kind 1063).
This package turns the flat stream of those events into a catalogue of
releases: typed fields from untyped tag arrays, product classification,
version deduplication, variant grouping by architecture and compression,
and the "alternative builds" relation.

Architecture follows a **diamond DAG** dependency structure where imports
flow strictly downward:

```text
              services         Catalogue queries and the browser service
             /   |   \
          core  nips  utils    Catalogue, state machine, NIP-94 parsing, relay I/O
             \   |   /
              models           Pure frozen dataclasses (zero I/O)
```

Attributes:
    models: Pure frozen dataclasses. Zero I/O, depends only on stdlib.
    core: Release catalogue, subscription state machine, base service,
        exceptions, logging, metrics.
    nips: NIP-94 tag extraction, product classification, release views.
    utils: Publisher key parsing and the relay client.
    services: Selection and variant queries, and the release browser.

Note:
    For lightweight usage, import directly from subpackages::

        from tollgate_releases.models import RawEvent
        from tollgate_releases.core import ReleaseCatalogue

    Top-level imports (``from tollgate_releases import RawEvent``) use lazy
    loading and resolve on first access.
"""

import importlib
from importlib.metadata import version as _get_version


__version__ = _get_version("tollgate-releases")

__all__ = [
    "BaseService",
    "BrowserConfig",
    "Logger",
    "ProductType",
    "RawEvent",
    "ReleaseBrowser",
    "ReleaseCatalogue",
    "ReleaseChannel",
    "ReleaseFilters",
    "ReleaseView",
    "VariantGroup",
    "classify",
    "get_release_view",
]

_LAZY_IMPORTS: dict[str, tuple[str, str]] = {
    "BaseService": ("tollgate_releases.core", "BaseService"),
    "Logger": ("tollgate_releases.core", "Logger"),
    "ReleaseCatalogue": ("tollgate_releases.core", "ReleaseCatalogue"),
    "ProductType": ("tollgate_releases.models", "ProductType"),
    "RawEvent": ("tollgate_releases.models", "RawEvent"),
    "ReleaseChannel": ("tollgate_releases.models", "ReleaseChannel"),
    "ReleaseFilters": ("tollgate_releases.models", "ReleaseFilters"),
    "ReleaseView": ("tollgate_releases.models", "ReleaseView"),
    "VariantGroup": ("tollgate_releases.models", "VariantGroup"),
    "classify": ("tollgate_releases.nips", "classify"),
    "get_release_view": ("tollgate_releases.nips", "get_release_view"),
    "BrowserConfig": ("tollgate_releases.services", "BrowserConfig"),
    "ReleaseBrowser": ("tollgate_releases.services", "ReleaseBrowser"),
}


def __getattr__(name: str) -> object:
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(module_path)
        value = getattr(module, attr_name)
        globals()[name] = value  # Cache for subsequent access
        return value
    raise AttributeError(f"module 'tollgate_releases' has no attribute {name!r}")


def __dir__() -> list[str]:
    return __all__
