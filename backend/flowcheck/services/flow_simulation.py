"""
Packet Simulation
จำลองการ lookup ใน flow table: เรียง rule ตาม priority (ค่าน้อยก่อน) แล้ว rule แรกที่ match ชนะ
"""
from typing import List, Optional, Sequence

from flowcheck.schemas.flow import (
    FlowActionType,
    FlowRule,
    FlowSimulationResult,
    PacketSimulationResult,
    PacketTrace,
)

DEFAULT_ACTION = "DEFAULT"
NO_ACTION = "NONE"


def _evaluation_order(rules: Sequence[FlowRule]) -> List[FlowRule]:
    # sorted() เป็น stable sort — rule ที่ priority เท่ากันคงลำดับเดิม
    return sorted(rules, key=lambda rule: rule.priority)


def packet_matches_rule(packet: PacketTrace, rule: FlowRule) -> bool:
    for key, value in rule.match.specified().items():
        if getattr(packet, key) != value:
            return False
    return True


def simulate_packet(packet: PacketTrace, rules: Sequence[FlowRule]) -> PacketSimulationResult:
    for rule in _evaluation_order(rules):
        if packet_matches_rule(packet, rule):
            action = rule.actions[0].type if rule.actions else NO_ACTION
            return PacketSimulationResult(matched_rule=rule, action=action)

    return PacketSimulationResult(matched_rule=None, action=DEFAULT_ACTION)


def trace_packet(packet: PacketTrace, rules: Sequence[FlowRule]) -> FlowSimulationResult:
    """
    Simulation แบบละเอียด

    Returns:
        FlowSimulationResult:
            matched_rules: rule ทุกตัวที่ match packet (ตามลำดับการประเมิน)
            applied_actions / output_ports: จาก rule ที่ชนะ
            dropped: ไม่มี rule match, หรือ action แรกของ rule ที่ชนะเป็น DROP/ไม่มี action
            path: rule ids ที่ถูกประเมินจนถึง rule ที่ชนะ
    """
    matched: List[FlowRule] = []
    path: List[str] = []
    winner: Optional[FlowRule] = None

    for rule in _evaluation_order(rules):
        if winner is None:
            path.append(rule.id)
        if packet_matches_rule(packet, rule):
            matched.append(rule)
            if winner is None:
                winner = rule

    if winner is None:
        return FlowSimulationResult(packet=packet, matched_rules=[], dropped=True, path=path)

    output_ports = [
        action.output_port
        for action in winner.actions
        if action.type in (FlowActionType.FORWARD, FlowActionType.QUEUE)
        and action.output_port is not None
    ]
    dropped = not winner.actions or winner.actions[0].type == FlowActionType.DROP

    return FlowSimulationResult(
        packet=packet,
        matched_rules=matched,
        applied_actions=list(winner.actions),
        output_ports=output_ports,
        dropped=dropped,
        path=path,
    )
