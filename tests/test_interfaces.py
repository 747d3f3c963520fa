from fake_device import DeviceTestCase


class TestLoadInterfaces(DeviceTestCase):
    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.device.interfaces = [
            {"id": 1, "name": "ether1"},
            {"id": 2, "name": "ether2"},
        ]

    async def test_placeholder_and_labels(self):
        res = await self.client.load_interfaces()

        self.assertTrue(res.ok)
        select = self.client.view.interface_select
        self.assertEqual(
            select.labels,
            ["Select interface", "ether1 (ID: 1)", "ether2 (ID: 2)"],
        )
        self.assertEqual(select.value, "")

    async def test_selected_id_matches_across_types(self):
        await self.client.load_interfaces("2")

        select = self.client.view.interface_select
        self.assertEqual([opt.selected for opt in select.options], [False, False, True])
        self.assertEqual(select.value, "2")

    async def test_repeated_load_replaces_options(self):
        await self.client.load_interfaces(1)
        first = [(o.value, o.label, o.selected) for o in self.client.view.interface_select.options]

        await self.client.load_interfaces(1)
        second = [(o.value, o.label, o.selected) for o in self.client.view.interface_select.options]

        self.assertEqual(first, second)
        self.assertEqual(len(second), 3)

    async def test_failure_leaves_selector(self):
        self.device.fail["/api/interfaces"] = 503

        res = await self.client.load_interfaces(1)

        self.assertFalse(res.ok)
        self.assertEqual(
            self.client.view.interface_select.labels, ["Loading interfaces..."]
        )

    async def test_select_interface_by_number(self):
        await self.client.load_interfaces()

        self.assertTrue(self.client.select_interface(2))
        self.assertEqual(self.client.view.interface_select.value, "2")
        self.assertFalse(self.client.select_interface(9))

    async def test_zero_id_preselected(self):
        self.device.interfaces = [
            {"id": 0, "name": "ether0"},
            {"id": 1, "name": "ether1"},
        ]

        await self.client.load_interfaces(0)

        self.assertEqual(self.client.view.interface_select.value, "0")
