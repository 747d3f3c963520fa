import asyncio

from fake_device import DeviceTestCase

from mikrotik_display.const import SCAN_LABEL


class TestScanNetworks(DeviceTestCase):
    async def test_networks_listed_after_placeholder(self):
        self.device.networks = [
            {"ssid": "HomeNet", "strength": "Excellent", "rssi": -41},
            {"ssid": "Cafe", "strength": "Weak", "rssi": -83},
        ]

        res = await self.client.scan_networks()

        self.assertTrue(res.ok)
        select = self.client.view.ssid_select
        self.assertEqual(
            select.labels,
            [
                "Select a network",
                "HomeNet (Excellent -41dBm)",
                "Cafe (Weak -83dBm)",
            ],
        )
        self.assertEqual([o.value for o in select.options[1:]], ["HomeNet", "Cafe"])

    async def test_no_networks(self):
        res = await self.client.scan_networks()

        self.assertTrue(res.ok)
        self.assertEqual(self.client.view.ssid_select.labels, ["No networks found"])

    async def test_scan_replaces_current_ssid_option(self):
        self.device.config = {"ssid": "HomeNet"}
        await self.client.load_initial_config()
        self.device.networks = [{"ssid": "Cafe", "strength": "Fair", "rssi": -70}]

        await self.client.scan_networks()

        self.assertEqual(
            self.client.view.ssid_select.labels,
            ["Select a network", "Cafe (Fair -70dBm)"],
        )

    async def test_button_busy_while_scanning(self):
        self.device.delays["/api/scan"] = 0.2
        task = asyncio.create_task(self.client.scan_networks())
        await asyncio.sleep(0.05)

        button = self.client.view.scan_button
        self.assertTrue(button.disabled)
        self.assertEqual(button.label, "Scanning...")

        await task
        self.assertFalse(button.disabled)
        self.assertEqual(button.label, SCAN_LABEL)

    async def test_failure_restores_button_and_alerts(self):
        self.device.fail["/api/scan"] = 500

        with self.assertLogs("mikrotik_display.client", level="ERROR"):
            res = await self.client.scan_networks()

        self.assertFalse(res.ok)
        self.assertFalse(self.client.view.scan_button.disabled)
        self.assertEqual(self.client.view.scan_button.label, SCAN_LABEL)
        self.assertEqual(self.alerts, ["WiFi scan failed. Please try again."])
        self.assertEqual(
            self.client.view.notifications, ["WiFi scan failed. Please try again."]
        )
        self.assertEqual(
            self.client.view.ssid_select.labels, ["Click 'Scan WiFi Networks' first"]
        )

    async def test_overlapping_scans_share_request(self):
        self.device.delays["/api/scan"] = 0.1
        self.device.networks = [{"ssid": "A", "strength": "Good", "rssi": -60}]

        first, second = await asyncio.gather(
            self.client.scan_networks(), self.client.scan_networks()
        )

        self.assertEqual(len(self.device.calls("/api/scan")), 1)
        self.assertTrue(first.ok)
        self.assertIs(first, second)

    async def test_select_network(self):
        self.device.networks = [{"ssid": "A", "strength": "Good", "rssi": -60}]
        await self.client.scan_networks()

        self.assertTrue(self.client.select_network("A"))
        self.assertEqual(self.client.view.ssid_select.value, "A")
        self.assertFalse(self.client.select_network("B"))


class TestScanBadResponses(DeviceTestCase):
    def assert_scan_failed(self, res, error_code):
        self.assertFalse(res.ok)
        self.assertEqual(res.error_code, error_code)
        self.assertEqual(self.alerts, ["WiFi scan failed. Please try again."])
        self.assertFalse(self.client.view.scan_button.disabled)
        self.assertEqual(self.client.view.scan_button.label, SCAN_LABEL)

    async def test_body_not_json(self):
        self.device.raw["/api/scan"] = "<html>busy</html>"

        self.assert_scan_failed(await self.client.scan_networks(), "invalid_response")

    async def test_body_not_utf8(self):
        self.device.raw["/api/scan"] = b'{"networks": [{"ssid": "\xff"}]}'

        self.assert_scan_failed(await self.client.scan_networks(), "invalid_response")

    async def test_unreachable_device(self):
        await self.server.close()

        self.assert_scan_failed(await self.client.scan_networks(), "cannot_connect")
