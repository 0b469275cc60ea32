"""Core configuration and constants.

Import what you need from `newsletter_curator.core.config` and
`newsletter_curator.core.constants` to avoid heavy side effects at import time.
"""

__all__ = ["config", "constants"]
