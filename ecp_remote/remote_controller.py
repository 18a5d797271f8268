from abc import ABC, abstractmethod
from threading import Event
from typing import List, Optional, Union

from .apps import AppEntry
from .commands import Command
from .results import RequestResult


class BaseRemoteController(ABC):
    """Abstract base class for device remote controllers."""

    @abstractmethod
    def send_command(self, command: Union[Command, str]) -> RequestResult:
        """Press a named key.

        Args:
            command (Command): Key to press, or its wire token

        Returns:
            RequestResult: Outcome of the request
        """
        pass

    @abstractmethod
    def send_text(self, text: str, cancel: Optional[Event] = None) -> List[RequestResult]:
        """Type text one character at a time.

        Args:
            text (str): Text to type
            cancel (Event): When set, no further characters are sent

        Returns:
            List[RequestResult]: One result per character sent
        """
        pass

    @abstractmethod
    def launch_app(self, app_id: str) -> RequestResult:
        """Launch an installed app.

        Args:
            app_id (str): Catalog id of the app

        Returns:
            RequestResult: Outcome of the request
        """
        pass

    @abstractmethod
    def get_apps(self) -> List[AppEntry]:
        """Get the installed apps.

        Returns:
            List[AppEntry]: Installed apps, empty if none could be fetched
        """
        pass
