import unittest
import sys
import os

# Add backend to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from flowcheck.schemas.flow import FlowRule, PacketTrace
from flowcheck.services.flow_simulation import packet_matches_rule, simulate_packet, trace_packet


def make_rule(rule_id, priority, match, actions):
    return FlowRule.model_validate({
        "id": rule_id, "name": f"rule-{rule_id}", "priority": priority,
        "match": match, "actions": actions,
    })


PACKET = PacketTrace.model_validate({
    "srcIp": "10.0.0.5", "dstIp": "10.0.0.9",
    "srcMac": "00:50:79:66:68:05", "dstMac": "00:50:79:66:68:04",
    "srcPort": 40000, "dstPort": 80, "protocol": "TCP", "vlanId": 100, "inPort": 1,
})


class TestSimulatePacket(unittest.TestCase):

    def test_lower_priority_value_wins(self):
        rules = [
            make_rule("drop", 200, {"dstPort": 80}, [{"type": "DROP"}]),
            make_rule("fwd", 100, {"dstPort": 80}, [{"type": "FORWARD", "outputPort": 1}]),
        ]
        result = simulate_packet(PacketTrace(dst_port=80), rules)
        self.assertEqual(result.matched_rule.id, "fwd")
        self.assertEqual(result.action, "FORWARD")
        # input order ไม่ถูกแก้
        self.assertEqual([r.id for r in rules], ["drop", "fwd"])

    def test_no_match_returns_default(self):
        rules = [
            make_rule("a", 1, {"dstPort": 443}, [{"type": "DROP"}]),
            make_rule("b", 2, {"protocol": "UDP"}, [{"type": "DROP"}]),
        ]
        result = simulate_packet(PACKET, rules)
        self.assertIsNone(result.matched_rule)
        self.assertEqual(result.action, "DEFAULT")

        self.assertEqual(simulate_packet(PACKET, []).action, "DEFAULT")

    def test_all_specified_fields_must_match(self):
        rule = make_rule("a", 1, {"dstPort": 80, "protocol": "UDP"}, [{"type": "DROP"}])
        self.assertFalse(packet_matches_rule(PACKET, rule))

        rule = make_rule("b", 1, {"dstPort": 80, "protocol": "TCP", "vlanId": 100, "inPort": 1}, [{"type": "DROP"}])
        self.assertTrue(packet_matches_rule(PACKET, rule))

    def test_empty_match_is_wildcard(self):
        rules = [make_rule("any", 65535, {}, [{"type": "CONTROLLER"}])]
        result = simulate_packet(PACKET, rules)
        self.assertEqual(result.matched_rule.id, "any")
        self.assertEqual(result.action, "CONTROLLER")

    def test_equal_priority_keeps_input_order(self):
        rules = [
            make_rule("first", 10, {"protocol": "TCP"}, [{"type": "FLOOD"}]),
            make_rule("second", 10, {"protocol": "TCP"}, [{"type": "DROP"}]),
        ]
        for _ in range(3):
            self.assertEqual(simulate_packet(PACKET, rules).matched_rule.id, "first")

    def test_blank_text_field_is_wildcard(self):
        rules = [make_rule("web-drop", 10, {"srcIp": "", "dstPort": 80}, [{"type": "DROP"}])]
        result = simulate_packet(PacketTrace(src_ip="10.0.0.1", dst_port=80), rules)
        self.assertEqual(result.matched_rule.id, "web-drop")
        self.assertEqual(result.action, "DROP")

    def test_rule_without_actions(self):
        rules = [make_rule("empty", 1, {"dstPort": 80}, [])]
        self.assertEqual(simulate_packet(PACKET, rules).action, "NONE")


class TestTracePacket(unittest.TestCase):

    def test_trace_reports_every_match(self):
        rules = [
            make_rule("catch-all", 1000, {}, [{"type": "DROP"}]),
            make_rule("web", 100, {"dstPort": 80}, [
                {"type": "QUEUE", "queueId": 1, "outputPort": 3},
                {"type": "FORWARD", "outputPort": 4},
            ]),
            make_rule("ssh", 50, {"dstPort": 22}, [{"type": "DROP"}]),
        ]
        result = trace_packet(PACKET, rules)

        self.assertEqual([r.id for r in result.matched_rules], ["web", "catch-all"])
        self.assertEqual(result.path, ["ssh", "web"])
        self.assertEqual(result.output_ports, [3, 4])
        self.assertEqual([a.type for a in result.applied_actions], ["QUEUE", "FORWARD"])
        self.assertFalse(result.dropped)

    def test_trace_drop_winner(self):
        rules = [make_rule("block", 5, {"srcIp": "10.0.0.5"}, [{"type": "DROP"}])]
        result = trace_packet(PACKET, rules)
        self.assertTrue(result.dropped)
        self.assertEqual(result.output_ports, [])

    def test_trace_drop_after_forward_is_not_dropped(self):
        rules = [make_rule("mixed", 5, {"dstPort": 80}, [
            {"type": "FORWARD", "outputPort": 2},
            {"type": "DROP"},
        ])]
        result = trace_packet(PACKET, rules)
        self.assertFalse(result.dropped)
        self.assertEqual(result.output_ports, [2])

    def test_trace_no_match(self):
        rules = [make_rule("a", 1, {"dstPort": 443}, [{"type": "FORWARD", "outputPort": 1}])]
        result = trace_packet(PACKET, rules)
        self.assertTrue(result.dropped)
        self.assertEqual(result.matched_rules, [])
        self.assertEqual(result.applied_actions, [])
        self.assertEqual(result.path, ["a"])


if __name__ == '__main__':
    unittest.main()
