"""
CLI Commands.

Organized by CDN77 API area.
"""

from cdn77_client.commands.billing import app as billing_app
from cdn77_client.commands.jobs import app as jobs_app
from cdn77_client.commands.resources import app as resources_app
from cdn77_client.commands.statistics import app as statistics_app
from cdn77_client.commands.storage import app as storage_app

__all__ = [
    "billing_app",
    "jobs_app",
    "resources_app",
    "statistics_app",
    "storage_app",
]
