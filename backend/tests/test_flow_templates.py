import unittest
import sys
import os

# Add backend to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from flowcheck.services.flow_templates import (
    FLOW_TEMPLATES,
    get_template,
    instantiate_template,
    list_categories,
    list_templates,
)
from flowcheck.services.flow_validation import validate_flow_rule


class TestFlowTemplates(unittest.TestCase):

    def test_all_templates_validate(self):
        for template in FLOW_TEMPLATES:
            result = validate_flow_rule(template.rule)
            self.assertTrue(result.is_valid, f"{template.id}: {result.errors}")

    def test_search_is_case_insensitive(self):
        ids = [t.id for t in list_templates(query="HTTPS")]
        self.assertEqual(ids, ["https-allow"])

        # tags
        ids = [t.id for t in list_templates(query="ping")]
        self.assertEqual(ids, ["block-icmp"])

    def test_category_filter(self):
        ids = [t.id for t in list_templates(category="Advanced")]
        self.assertEqual(ids, ["load-balance", "controller-forward"])
        self.assertEqual(list_templates(category="Advanced", query="sdn")[0].id, "controller-forward")
        self.assertEqual(list_templates(category="Nope"), [])

    def test_no_filter_returns_all(self):
        self.assertEqual(len(list_templates()), len(FLOW_TEMPLATES))
        self.assertEqual(list_categories(), ["Basic", "Security", "VLAN", "QoS", "Advanced"])

    def test_get_template(self):
        self.assertEqual(get_template("qos-high").rule.actions[0].queue_id, 0)
        self.assertIsNone(get_template("missing"))

    def test_instantiate_returns_independent_copy(self):
        draft = instantiate_template("http-allow", {"priority": 900, "name": "Web"})
        self.assertEqual(draft.priority, 900)
        self.assertEqual(draft.name, "Web")
        self.assertIsNone(draft.id)

        draft.match.dst_port = 8080
        self.assertEqual(get_template("http-allow").rule.match.dst_port, 80)
        self.assertEqual(get_template("http-allow").rule.priority, 1000)

    def test_lookups_return_copies(self):
        template = get_template("block-icmp")
        template.rule.priority = 1
        template.tags.append("edited")
        self.assertEqual(get_template("block-icmp").rule.priority, 2000)
        self.assertNotIn("edited", get_template("block-icmp").tags)

        listed = list_templates(query="ping")[0]
        listed.rule.match.protocol = "UDP"
        self.assertEqual(get_template("block-icmp").rule.match.protocol, "ICMP")

    def test_instantiate_unknown(self):
        self.assertIsNone(instantiate_template("missing"))


if __name__ == '__main__':
    unittest.main()
