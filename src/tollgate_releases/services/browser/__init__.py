"""Release browser service package.

Re-exports all public symbols::

    from tollgate_releases.services.browser import ReleaseBrowser, BrowserConfig
"""

from .configs import BrowserConfig
from .service import ReleaseBrowser


__all__ = [
    "BrowserConfig",
    "ReleaseBrowser",
]
