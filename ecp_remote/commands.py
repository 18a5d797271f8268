"""
Key tokens understood by the ECP ``/keypress`` endpoint.
"""

from enum import Enum
from typing import List, Optional


class Command(str, Enum):
    """Named remote-control keys, valued with the token sent on the wire."""

    POWER = "Power"
    POWER_ON = "Poweron"
    POWER_OFF = "Poweroff"
    HOME = "Home"
    INFO = "Info"
    BACK = "Back"
    UP = "Up"
    DOWN = "Down"
    LEFT = "Left"
    RIGHT = "Right"
    SELECT = "Select"
    PLAY = "Play"
    VOLUME_UP = "VolumeUp"
    VOLUME_DOWN = "VolumeDown"
    VOLUME_MUTE = "VolumeMute"
    CHANNEL_UP = "Channel_up"
    CHANNEL_DOWN = "Channel_down"
    SEARCH = "Search"
    ENTER = "Enter"
    BACKSPACE = "Backspace"
    FIND_REMOTE = "Find_remote"
    REPLAY = "Replay"
    REVERSE = "Reverse"
    FORWARD = "Forward"

    def __str__(self) -> str:
        return self.value


# Button grid of a physical remote, three columns wide. None marks an empty cell.
KEYPAD_LAYOUT: List[List[Optional[Command]]] = [
    [Command.POWER, Command.POWER_ON, Command.POWER_OFF],
    [Command.HOME, Command.INFO, Command.BACK],
    [None, None, None],
    [None, Command.UP, None],
    [Command.LEFT, Command.SELECT, Command.RIGHT],
    [None, Command.DOWN, None],
    [None, None, Command.PLAY],
    [Command.VOLUME_UP, Command.VOLUME_DOWN, Command.VOLUME_MUTE],
    [Command.CHANNEL_UP, Command.CHANNEL_DOWN, Command.SEARCH],
    [Command.ENTER, Command.BACKSPACE, Command.FIND_REMOTE],
    [Command.REPLAY, Command.REVERSE, Command.FORWARD],
]


def to_command(command) -> Command:
    """Coerce a Command or its wire token into a Command.

    Raises:
        ValueError: If the token is not a known key
    """
    if isinstance(command, Command):
        return command
    return Command(command)
