import unittest

from mikrotik_display.exceptions import FormInvalid
from mikrotik_display.forms import section_fields, serialize_form, validate_form
from mikrotik_display.view import SelectOption, ViewState


class TestForms(unittest.TestCase):
    def test_section_fields_in_form_order(self):
        self.assertEqual(section_fields("wifi"), ["ssid", "password"])
        self.assertEqual(
            section_fields("router"),
            ["router_addr", "router_user", "router_pass", "interface_id"],
        )
        self.assertEqual(section_fields("graph"), ["min_mbps", "max_mbps"])

    def test_serialize_reads_selectors_and_inputs(self):
        view = ViewState()
        view.ssid_select.append(SelectOption("HomeNet", "HomeNet (current)", selected=True))
        view.fields["password"] = "pw"

        self.assertEqual(
            serialize_form(view, "wifi"), {"ssid": "HomeNet", "password": "pw"}
        )
        self.assertEqual(
            serialize_form(view, "graph"), {"min_mbps": "0", "max_mbps": "480"}
        )

    def test_default_graph_form_is_valid(self):
        payload = {"min_mbps": "0", "max_mbps": "480"}
        self.assertEqual(validate_form("graph", payload), payload)

    def test_numbers_checked_against_markup_bounds(self):
        for payload, field in (
            ({"min_mbps": "-1", "max_mbps": "10"}, "min_mbps"),
            ({"min_mbps": "0", "max_mbps": "10001"}, "max_mbps"),
            ({"min_mbps": "1.5", "max_mbps": "10"}, "min_mbps"),
        ):
            with self.assertRaises(FormInvalid) as ctx:
                validate_form("graph", payload)
            self.assertEqual(list(ctx.exception.errors), [field])

    def test_required_fields(self):
        with self.assertRaises(FormInvalid) as ctx:
            validate_form(
                "router",
                {"router_addr": "", "router_user": "u", "router_pass": "", "interface_id": "1"},
            )
        self.assertEqual(sorted(ctx.exception.errors), ["router_addr", "router_pass"])
        self.assertEqual(ctx.exception.error_code, "invalid_form")
