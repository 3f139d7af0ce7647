"""Release queries and the browser service.

Services are the top layer of the diamond DAG, depending on
[tollgate_releases.core][tollgate_releases.core],
[tollgate_releases.nips][tollgate_releases.nips],
[tollgate_releases.utils][tollgate_releases.utils], and
[tollgate_releases.models][tollgate_releases.models]. The browser extends
[BaseService][tollgate_releases.core.base_service.BaseService] and
implements ``async def run()`` for one subscription cycle.

Attributes:
    ReleaseBrowser: Catalogue host for one publisher, with the query facade
        used by presentation layers.
    common: Pure filter, count and variant functions over catalogue
        snapshots, plus shared configuration models.

See Also:
    [BaseService][tollgate_releases.core.base_service.BaseService]: Abstract
        base class the browser extends.
    [common][tollgate_releases.services.common]: Shared query functions.

Examples:
    ```python
    from tollgate_releases.services import ReleaseBrowser

    browser = ReleaseBrowser()
    async with browser:
        await browser.run()
        print(browser.summary().text)
    ```
"""

from .browser import BrowserConfig, ReleaseBrowser


__all__ = [
    "BrowserConfig",
    "ReleaseBrowser",
]
