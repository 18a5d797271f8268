"""
Remote control for ECP media players.
Discovers devices over SSDP and sends key presses, text and app launches.
"""

__version__ = '0.1.0'

from .apps import AppEntry, fetch_apps, find_app_name, parse_apps
from .commands import Command, KEYPAD_LAYOUT
from .discovery import DeviceDiscovery, describe_device, discover
from .ecp_controller import ECPController, launch_app, send_command, send_text
from .exceptions import DeviceRequestError, DiscoveryError, ECPRemoteError
from .remote_controller import BaseRemoteController
from .results import RequestResult, RequestStatus

__all__ = [
    'AppEntry', 'fetch_apps', 'find_app_name', 'parse_apps',
    'Command', 'KEYPAD_LAYOUT',
    'DeviceDiscovery', 'describe_device', 'discover',
    'ECPController', 'launch_app', 'send_command', 'send_text',
    'DeviceRequestError', 'DiscoveryError', 'ECPRemoteError',
    'BaseRemoteController',
    'RequestResult', 'RequestStatus',
]
