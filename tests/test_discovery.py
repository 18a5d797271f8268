import socket
import unittest
from unittest.mock import MagicMock, patch

from ecp_remote.discovery import (
    DeviceDiscovery, describe_device, discover, parse_location,
)
from ecp_remote.exceptions import DiscoveryError


def ssdp_response(location=None, extra=""):
    lines = [
        "HTTP/1.1 200 OK",
        "Cache-Control: max-age=3600",
        "ST: roku:ecp",
        "USN: uuid:roku:ecp:P0A070000007",
    ]
    if location is not None:
        lines.append(f"LOCATION: {location}")
    if extra:
        lines.append(extra)
    return ("\r\n".join(lines) + "\r\n\r\n").encode()


class TestParseLocation(unittest.TestCase):
    def test_location_header(self):
        data = ssdp_response("http://192.168.1.134:8060/")
        self.assertEqual(parse_location(data), "192.168.1.134:8060")

    def test_header_name_is_case_insensitive(self):
        data = b"HTTP/1.1 200 OK\r\nLocation: http://10.0.0.5:8060/\r\n\r\n"
        self.assertEqual(parse_location(data), "10.0.0.5:8060")

    def test_missing_location(self):
        self.assertIsNone(parse_location(ssdp_response()))

    def test_unparsable_location(self):
        self.assertIsNone(parse_location(ssdp_response("not a url")))
        self.assertIsNone(parse_location(ssdp_response("http://10.0.0.5:notaport/")))

    def test_location_without_port(self):
        self.assertIsNone(parse_location(ssdp_response("http://10.0.0.5/")))

    def test_ipv6_host_is_bracketed(self):
        data = ssdp_response("http://[fe80::1]:8060/")
        self.assertEqual(parse_location(data), "[fe80::1]:8060")

    def test_garbage_datagram(self):
        self.assertIsNone(parse_location(b"\xff\xfe\x00garbage"))


class TestDeviceDiscovery(unittest.TestCase):
    def setUp(self):
        """Set up a fake UDP socket."""
        patcher = patch('ecp_remote.discovery.socket.socket')
        self.mock_socket_cls = patcher.start()
        self.addCleanup(patcher.stop)
        self.sock = MagicMock()
        self.mock_socket_cls.return_value = self.sock

    def _respond_with(self, *datagrams):
        responses = [(data, ("192.168.1.2", 1900)) for data in datagrams]
        self.sock.recvfrom.side_effect = responses + [socket.timeout()]

    def test_search_request(self):
        request = DeviceDiscovery().build_search_request()
        self.assertEqual(
            request,
            b'M-SEARCH * HTTP/1.1\r\n'
            b'HOST: 239.255.255.250:1900\r\n'
            b'MAN: "ssdp:discover"\r\n'
            b'ST: roku:ecp\r\n'
            b'MX: 3\r\n\r\n'
        )

    def test_socket_setup(self):
        self._respond_with()
        DeviceDiscovery(timeout=1.5, ttl=2).discover_devices()

        self.sock.bind.assert_called_once_with(("0.0.0.0", 0))
        self.sock.setsockopt.assert_any_call(socket.IPPROTO_IP, socket.IP_MULTICAST_LOOP, 1)
        self.sock.setsockopt.assert_any_call(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, 2)
        self.sock.settimeout.assert_called_once_with(1.5)
        self.sock.sendto.assert_called_once()
        self.assertEqual(self.sock.sendto.call_args[0][1], ("239.255.255.250", 1900))
        self.sock.close.assert_called_once()

    def test_duplicates_are_reported_once(self):
        self._respond_with(
            ssdp_response("http://192.168.1.20:8060/"),
            ssdp_response("http://192.168.1.10:8060/"),
            ssdp_response("http://192.168.1.20:8060/"),
            ssdp_response("http://192.168.1.10:8060/"),
        )
        devices = discover()
        self.assertEqual(devices, ["192.168.1.10:8060", "192.168.1.20:8060"])

    def test_bad_responses_are_skipped(self):
        self._respond_with(
            ssdp_response(),
            ssdp_response("::garbage::"),
            b"\x00\x01\x02",
            ssdp_response("http://192.168.1.10:8060/"),
        )
        discovery = DeviceDiscovery()
        self.assertEqual(discovery.discover_devices(), ["192.168.1.10:8060"])
        self.assertEqual(discovery.devices, ["192.168.1.10:8060"])

    def test_no_devices(self):
        self._respond_with()
        self.assertEqual(discover(), [])

    def test_receive_error_ends_round(self):
        self.sock.recvfrom.side_effect = [
            (ssdp_response("http://192.168.1.10:8060/"), ("192.168.1.10", 1900)),
            OSError("network unreachable"),
        ]
        self.assertEqual(discover(), ["192.168.1.10:8060"])
        self.sock.close.assert_called_once()

    def test_send_error_is_not_fatal(self):
        self.sock.sendto.side_effect = OSError("no route to host")
        self.assertEqual(discover(), [])
        self.sock.recvfrom.assert_not_called()
        self.sock.close.assert_called_once()

    def test_socket_option_errors_are_ignored(self):
        self.sock.setsockopt.side_effect = OSError("not permitted")
        self._respond_with(ssdp_response("http://192.168.1.10:8060/"))
        self.assertEqual(discover(), ["192.168.1.10:8060"])

    def test_bind_failure_is_fatal(self):
        self.sock.bind.side_effect = OSError("address in use")
        with self.assertRaises(DiscoveryError):
            discover()
        self.sock.close.assert_called_once()
        self.sock.sendto.assert_not_called()

    def test_multiple_rounds(self):
        self.sock.recvfrom.side_effect = [
            (ssdp_response("http://192.168.1.10:8060/"), ("192.168.1.10", 1900)),
            socket.timeout(),
            (ssdp_response("http://192.168.1.11:8060/"), ("192.168.1.11", 1900)),
            (ssdp_response("http://192.168.1.10:8060/"), ("192.168.1.10", 1900)),
            socket.timeout(),
        ]
        devices = discover(retries=2)
        self.assertEqual(devices, ["192.168.1.10:8060", "192.168.1.11:8060"])
        self.assertEqual(self.sock.sendto.call_count, 2)
        self.assertEqual(self.sock.close.call_count, 2)


class TestDescribeDevice(unittest.TestCase):
    @patch('upnpclient.Device')
    def test_describe_device(self, mock_device_cls):
        device = mock_device_cls.return_value
        device.friendly_name = "Living Room"
        device.manufacturer = "Roku"
        device.model_name = "Roku Ultra"

        info = describe_device("192.168.1.10:8060")

        mock_device_cls.assert_called_once_with("http://192.168.1.10:8060/")
        self.assertEqual(info, {
            'address': "192.168.1.10:8060",
            'friendly_name': "Living Room",
            'manufacturer': "Roku",
            'model_name': "Roku Ultra",
        })

    @patch('upnpclient.Device')
    def test_describe_device_failure(self, mock_device_cls):
        mock_device_cls.side_effect = Exception("connection refused")
        self.assertIsNone(describe_device("192.168.1.10:8060"))


if __name__ == '__main__':
    unittest.main()
