"""Gmail Cleanup - scheduled deletion of old Gmail threads.

This package permanently deletes Gmail threads that are older than a
retention window and neither starred nor important, and reports the result
to a Slack user by direct message.
"""

__version__ = "0.1.0"

from gmail_cleanup.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
