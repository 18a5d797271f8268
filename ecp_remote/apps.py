"""
Installed-application catalog of an ECP device.

The ``/query/apps`` response is a flat list of ``<app id="...">Name</app>``
records. It is matched with a narrow regular expression rather than a full
XML parser; anything that does not have that exact record shape is ignored.
"""

import html
import logging
import re
from dataclasses import dataclass
from typing import List, Sequence

import requests

from .exceptions import DeviceRequestError

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_TIMEOUT = 5

APP_RECORD = re.compile(r'<app\b[^>]*?\sid="([^"]+)"[^>]*>([^<]*)</app>')


@dataclass(frozen=True)
class AppEntry:
    id: str
    name: str


def parse_apps(markup: str) -> List[AppEntry]:
    """
    Extract app records from a ``/query/apps`` response body.

    Args:
        markup: Response body

    Returns:
        Apps in document order, one entry per distinct id
    """
    apps = []
    seen_ids = set()
    for match in APP_RECORD.finditer(markup):
        app_id, raw_name = match.group(1), match.group(2)
        if app_id in seen_ids:
            logger.debug(f"Skipping duplicate app id {app_id}")
            continue
        seen_ids.add(app_id)
        apps.append(AppEntry(id=app_id, name=html.unescape(raw_name)))
    return apps


def fetch_apps(address: str, timeout: float = DEFAULT_REQUEST_TIMEOUT,
               strict: bool = False) -> List[AppEntry]:
    """
    Fetch the list of installed apps from a device.

    Args:
        address: Device address (``host:port``)
        timeout: Request timeout in seconds
        strict: Raise instead of returning an empty list on failure

    Returns:
        List of apps, empty if the device could not be queried

    Raises:
        DeviceRequestError: On failure, only when strict is set
    """
    url = f"http://{address}/query/apps"
    try:
        logger.debug(f"GET {url}")
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        markup = response.text
    except requests.RequestException as e:
        if strict:
            raise DeviceRequestError(f"Failed to fetch apps from {address}: {e}") from e
        logger.warning(f"Failed to fetch apps from {address}: {e}")
        return []

    apps = parse_apps(markup)
    logger.info(f"Fetched {len(apps)} apps from {address}")
    return apps


def find_app_name(apps: Sequence[AppEntry], app_id: str,
                  default: str = "Unknown App") -> str:
    """Return the display name of the app with the given id."""
    for app in apps:
        if app.id == app_id:
            return app.name
    return default
