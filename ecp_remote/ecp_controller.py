"""
Controller for devices speaking the ECP HTTP remote-control protocol.
"""

import requests
import logging
from threading import Event
from typing import List, Optional, Union

from .apps import AppEntry, DEFAULT_REQUEST_TIMEOUT, fetch_apps
from .commands import Command, to_command
from .exceptions import DeviceRequestError
from .remote_controller import BaseRemoteController
from .results import RequestResult

logger = logging.getLogger(__name__)

# Characters that would otherwise end or split the request path.
_LITERAL_ESCAPES = {
    ' ': '%20',
    '#': '%23',
    '%': '%25',
    '/': '%2F',
    '?': '%3F',
}


def encode_literal(char: str) -> str:
    """Encode one character for a ``Lit_`` keypress path."""
    return _LITERAL_ESCAPES.get(char, char)


class ECPController(BaseRemoteController):
    def __init__(self, address: str, timeout: float = DEFAULT_REQUEST_TIMEOUT,
                 strict: bool = False):
        self.address = address
        self.base_url = f"http://{address}"
        self.timeout = timeout
        self.strict = strict

    def _post(self, path: str, session=None) -> RequestResult:
        """POST to a control path and return the outcome.

        In strict mode a failed request raises DeviceRequestError instead.
        """
        url = f"{self.base_url}/{path}"
        client = session if session is not None else requests
        try:
            logger.debug(f"POST {url}")
            response = client.post(url, timeout=self.timeout)
            response.raise_for_status()
            logger.debug(f"Response status: {response.status_code}")
            return RequestResult.success(url, response.status_code)
        except requests.RequestException as e:
            status_code = e.response.status_code if e.response is not None else None
            result = RequestResult.failure(url, e, strict=self.strict,
                                           status_code=status_code)
            if self.strict:
                raise DeviceRequestError(f"Request to {url} failed: {e}", result) from e
            logger.warning(f"Request to {url} failed: {e}")
            return result

    def send_command(self, command: Union[Command, str]) -> RequestResult:
        """Press a named key on the device."""
        key = to_command(command)
        result = self._post(f"keypress/{key.value}")
        if result.ok:
            logger.info(f"Sent command: {key.value}")
        return result

    def launch_app(self, app_id: str) -> RequestResult:
        """Launch an installed app by its catalog id."""
        result = self._post(f"launch/{app_id}")
        if result.ok:
            logger.info(f"Launched app: {app_id}")
        return result

    def send_text(self, text: str, cancel: Optional[Event] = None) -> List[RequestResult]:
        """
        Type text on the device, one literal keypress per character.

        Characters are sent strictly in order, each request completing before
        the next starts. A failed character does not stop the rest unless the
        controller is strict.

        Args:
            text: Text to type
            cancel: Optional event; once set, remaining characters are skipped

        Returns:
            One RequestResult per character sent
        """
        results = []
        with requests.Session() as session:
            for index, char in enumerate(text):
                if cancel is not None and cancel.is_set():
                    logger.info(f"Text entry cancelled after {index} of {len(text)} characters")
                    break
                results.append(self._post(f"keypress/Lit_{encode_literal(char)}", session))

        failed = sum(1 for result in results if not result.ok)
        if failed:
            logger.warning(f"{failed} of {len(results)} characters failed to send")
        logger.info(f"Sent {len(results) - failed} of {len(text)} characters")
        return results

    def get_apps(self) -> List[AppEntry]:
        """Get the apps installed on the device."""
        return fetch_apps(self.address, timeout=self.timeout, strict=self.strict)


def send_command(address: str, command: Union[Command, str], **options) -> RequestResult:
    """Press a named key on the device at address."""
    return ECPController(address, **options).send_command(command)


def launch_app(address: str, app_id: str, **options) -> RequestResult:
    """Launch an app on the device at address."""
    return ECPController(address, **options).launch_app(app_id)


def send_text(address: str, text: str, cancel: Optional[Event] = None,
              **options) -> List[RequestResult]:
    """Type text on the device at address."""
    return ECPController(address, **options).send_text(text, cancel=cancel)
