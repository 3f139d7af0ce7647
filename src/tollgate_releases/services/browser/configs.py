"""Release browser configuration models.

See Also:
    [ReleaseBrowser][tollgate_releases.services.browser.service.ReleaseBrowser]:
        The service class that consumes this configuration.
    [BaseServiceConfig][tollgate_releases.core.base_service.BaseServiceConfig]:
        Base class providing ``interval``, ``max_consecutive_failures``,
        and ``metrics`` fields.
"""

from __future__ import annotations

from pydantic import Field

from tollgate_releases.core.base_service import BaseServiceConfig
from tollgate_releases.services.common.configs import FiltersConfig, SubscriptionConfig


class BrowserConfig(BaseServiceConfig):
    """Release browser configuration.

    Attributes:
        subscription: Relays, publisher and fetch limits.
        filters: Default channel and product selection for queries.
        deduplicate: Show one release per version by default.
    """

    subscription: SubscriptionConfig = Field(default_factory=SubscriptionConfig)
    filters: FiltersConfig = Field(default_factory=FiltersConfig)
    deduplicate: bool = Field(default=False, description="One release per version in listings")
