"""Core layer: the release catalogue, the subscription state machine and service infrastructure.

Depends on ``tollgate_releases.models`` and on the pure parsing functions of
``tollgate_releases.nips``; depended upon by ``tollgate_releases.services``.

Attributes:
    ReleaseCatalogue: Append-only, id-deduplicated, newest-first event store.
        See [ReleaseCatalogue][tollgate_releases.core.catalogue.ReleaseCatalogue].
    deduplicate_by_version: Query-time reduction to one event per version.
    SubscriptionState, SubscriptionSignal, next_state: Explicit state machine
        for the subscription lifecycle.
    BaseService: Abstract generic base class with lifecycle management
        ([run()][tollgate_releases.core.base_service.BaseService.run] /
        [run_forever()][tollgate_releases.core.base_service.BaseService.run_forever] /
        shutdown) and factory methods.
    Logger: Structured logger supporting key=value and JSON output modes.
    MetricsServer: Prometheus ``/metrics`` HTTP endpoint.
    load_yaml: Safe YAML loading with ``yaml.safe_load()``.

Examples:
    ```python
    from tollgate_releases.core import ReleaseCatalogue, deduplicate_by_version

    catalogue = ReleaseCatalogue(events)
    latest = deduplicate_by_version(catalogue.list_all())
    ```
"""

from .base_service import BaseService, BaseServiceConfig, ConfigT
from .catalogue import ReleaseCatalogue, deduplicate_by_version
from .exceptions import (
    ConfigurationError,
    ProtocolError,
    RelayTimeoutError,
    SubscriptionError,
    TollgateReleasesError,
)
from .logger import Logger, StructuredFormatter, format_kv_pairs
from .metrics import (
    CYCLE_DURATION_SECONDS,
    SERVICE_COUNTER,
    SERVICE_GAUGE,
    SERVICE_INFO,
    MetricsConfig,
    MetricsServer,
    start_metrics_server,
)
from .state import SubscriptionSignal, SubscriptionState, is_loading, next_state
from .yaml import load_yaml


__all__ = [
    "CYCLE_DURATION_SECONDS",
    "SERVICE_COUNTER",
    "SERVICE_GAUGE",
    "SERVICE_INFO",
    "BaseService",
    "BaseServiceConfig",
    "ConfigT",
    "ConfigurationError",
    "Logger",
    "MetricsConfig",
    "MetricsServer",
    "ProtocolError",
    "RelayTimeoutError",
    "ReleaseCatalogue",
    "StructuredFormatter",
    "SubscriptionError",
    "SubscriptionSignal",
    "SubscriptionState",
    "TollgateReleasesError",
    "deduplicate_by_version",
    "format_kv_pairs",
    "is_loading",
    "load_yaml",
    "next_state",
    "start_metrics_server",
]
