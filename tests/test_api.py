import aiohttp
from fake_device import DeviceTestCase

from mikrotik_display.exceptions import InvalidResponse


class TestMikrotikDisplayAPI(DeviceTestCase):
    async def test_get_config(self):
        self.device.config = {"ssid": "HomeNet"}
        self.assertEqual(await self.client.api.get_config(), {"ssid": "HomeNet"})

    async def test_post_bodies(self):
        await self.client.api.set_backlight(42)
        await self.client.api.set_theme("dark")
        await self.client.api.save_wifi({"ssid": "a", "password": "b"})

        self.assertEqual(
            self.device.requests,
            [
                ("POST", "/api/backlight", {"brightness": 42}),
                ("POST", "/api/theme", {"theme": "dark"}),
                ("POST", "/save-wifi", {"ssid": "a", "password": "b"}),
            ],
        )

    async def test_error_status_raises(self):
        self.device.fail["/save-router"] = 500
        with self.assertRaises(aiohttp.ClientResponseError) as ctx:
            await self.client.api.save_router({})
        self.assertEqual(ctx.exception.status, 500)

    async def test_invalid_json(self):
        self.device.raw["/api/stats"] = "cpu=12"
        with self.assertRaises(InvalidResponse):
            await self.client.api.get_stats()

    async def test_empty_save_body_accepted(self):
        self.device.raw["/save-graph"] = ""
        self.assertIsNone(await self.client.api.save_graph({}))

    async def test_update_portal_url(self):
        self.assertEqual(
            self.client.update_portal_url,
            f"http://{self.server.host}:{self.server.port}/update",
        )

    async def test_undecodable_body(self):
        self.device.raw["/api/config"] = b'{"ssid": "\xff"}'
        with self.assertRaises(InvalidResponse):
            await self.client.api.get_config()
