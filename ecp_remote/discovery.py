import upnpclient
import socket
import logging
from typing import List, Optional, Set, TypedDict
from urllib.parse import urlsplit

from .exceptions import DiscoveryError

logger = logging.getLogger(__name__)

SSDP_ADDR = "239.255.255.250"
SSDP_PORT = 1900
ECP_SEARCH_TARGET = "roku:ecp"

DEFAULT_TIMEOUT = 2.0
DEFAULT_TTL = 4
DEFAULT_RETRIES = 1
DEFAULT_MX = 3
DEFAULT_BUFFER_SIZE = 2048


class DeviceInfo(TypedDict):
    address: str
    friendly_name: str
    manufacturer: str
    model_name: str


def format_address(host: str, port: int) -> str:
    """Join host and port into a ``host:port`` device address."""
    if ':' in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def parse_location(datagram: bytes) -> Optional[str]:
    """
    Extract the device address from an SSDP response.

    Only the first LOCATION header is consulted; its URL must carry both a
    host and an explicit port.

    Args:
        datagram: Raw response payload

    Returns:
        ``host:port`` string, or None if the response has no usable location
    """
    text = datagram.decode('utf-8', errors='replace')
    for line in text.splitlines():
        if len(line) < 9 or line[:9].lower() != 'location:':
            continue
        location = line[9:].strip()
        try:
            url = urlsplit(location)
            host = url.hostname
            port = url.port
        except ValueError as e:
            logger.debug(f"Unparsable LOCATION {location!r}: {e}")
            return None
        if not host or port is None:
            logger.debug(f"LOCATION without host and port: {location!r}")
            return None
        return format_address(host, port)
    return None


class DeviceDiscovery:
    """Finds ECP devices on the local network with an SSDP M-SEARCH."""

    def __init__(self, search_target: str = ECP_SEARCH_TARGET,
                 timeout: float = DEFAULT_TIMEOUT, ttl: int = DEFAULT_TTL,
                 retries: int = DEFAULT_RETRIES, mx: int = DEFAULT_MX,
                 buffer_size: int = DEFAULT_BUFFER_SIZE,
                 bind_address: str = "0.0.0.0"):
        self.search_target = search_target
        self.timeout = timeout
        self.ttl = ttl
        self.retries = retries
        self.mx = mx
        self.buffer_size = buffer_size
        self.bind_address = bind_address
        self.devices: List[str] = []

    def build_search_request(self) -> bytes:
        """Build the M-SEARCH datagram sent to the multicast group."""
        lines = [
            "M-SEARCH * HTTP/1.1",
            f"HOST: {SSDP_ADDR}:{SSDP_PORT}",
            'MAN: "ssdp:discover"',
            f"ST: {self.search_target}",
            f"MX: {self.mx}",
            "",
            "",
        ]
        return "\r\n".join(lines).encode('ascii')

    def _open_socket(self) -> socket.socket:
        """Create the UDP socket for one discovery round.

        Raises:
            DiscoveryError: If the socket cannot be created or bound
        """
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM, socket.IPPROTO_UDP)
        except OSError as e:
            logger.error(f"Could not create discovery socket: {e}")
            raise DiscoveryError(f"Could not create discovery socket: {e}") from e

        try:
            sock.bind((self.bind_address, 0))
        except OSError as e:
            sock.close()
            logger.error(f"Could not bind discovery socket: {e}")
            raise DiscoveryError(f"Could not bind discovery socket: {e}") from e

        # Option failures are not fatal.
        for level, option, value in (
            (socket.IPPROTO_IP, socket.IP_MULTICAST_LOOP, 1),
            (socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, self.ttl),
        ):
            try:
                sock.setsockopt(level, option, value)
            except OSError as e:
                logger.warning(f"Could not set socket option {option}: {e}")
        try:
            sock.settimeout(self.timeout)
        except OSError as e:
            logger.warning(f"Could not set discovery timeout: {e}")
        return sock

    def _collect_responses(self, sock: socket.socket, found: Set[str]) -> None:
        """Read responses until the read timeout elapses."""
        while True:
            try:
                data, sender = sock.recvfrom(self.buffer_size)
            except socket.timeout:
                logger.debug("Discovery window closed")
                return
            except OSError as e:
                logger.warning(f"Error receiving discovery response: {e}")
                return

            address = parse_location(data)
            if address is None:
                logger.debug(f"Ignoring response without usable LOCATION from {sender}")
                continue
            if address not in found:
                logger.debug(f"Found device at {address}")
                found.add(address)

    def discover_devices(self) -> List[str]:
        """
        Discover ECP devices on the network.

        Returns:
            Sorted list of distinct ``host:port`` device addresses, possibly empty

        Raises:
            DiscoveryError: If the discovery socket cannot be bound
        """
        found: Set[str] = set()
        request = self.build_search_request()

        for attempt in range(self.retries):
            sock = self._open_socket()
            try:
                logger.debug(f"Sending M-SEARCH for {self.search_target} "
                             f"(round {attempt + 1}/{self.retries})")
                try:
                    sock.sendto(request, (SSDP_ADDR, SSDP_PORT))
                except OSError as e:
                    logger.warning(f"Could not send M-SEARCH: {e}")
                    continue
                self._collect_responses(sock, found)
            finally:
                sock.close()

        self.devices = sorted(found)
        logger.info(f"Found {len(self.devices)} device(s)")
        return self.devices


def discover(**options) -> List[str]:
    """
    Discover ECP devices on the network.

    Keyword arguments are passed to DeviceDiscovery.
    Returns a sorted list of ``host:port`` addresses.
    """
    return DeviceDiscovery(**options).discover_devices()


def describe_device(address: str) -> Optional[DeviceInfo]:
    """
    Fetch the UPnP device description of a discovered device.

    Args:
        address: Device address as returned by discover()

    Returns:
        DeviceInfo if the description could be loaded, None otherwise
    """
    location = f"http://{address}/"
    try:
        device = upnpclient.Device(location)
        return {
            'address': address,
            'friendly_name': device.friendly_name or address,
            'manufacturer': device.manufacturer or '',
            'model_name': device.model_name or '',
        }
    except Exception as e:
        logger.warning(f"Could not load device description from {location}: {e}")
        return None
