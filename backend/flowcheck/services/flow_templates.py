"""
Flow Template Library
Template สำเร็จรูปสำหรับ rule editor (เลือก template แล้วแก้ต่อเป็น draft)
"""
from typing import Any, Dict, List, Optional

from flowcheck.schemas.flow import FlowRuleDraft, FlowTemplate

_PERMANENT = {"hardTimeout": 0, "idleTimeout": 0}

FLOW_TEMPLATES: List[FlowTemplate] = [
    FlowTemplate.model_validate(data) for data in [
        {
            "id": "http-allow",
            "name": "Allow HTTP Traffic",
            "description": "Allow HTTP (port 80) traffic",
            "category": "Basic",
            "tags": ["web", "http", "allow"],
            "rule": {
                "name": "Allow HTTP Traffic",
                "description": "Default rule allowing HTTP traffic",
                "priority": 1000,
                "match": {"protocol": "TCP", "dstPort": 80},
                "actions": [{"type": "FORWARD", "outputPort": 1}],
                "timeout": _PERMANENT,
                "status": "inactive",
            },
        },
        {
            "id": "https-allow",
            "name": "Allow HTTPS Traffic",
            "description": "Allow HTTPS (port 443) traffic",
            "category": "Basic",
            "tags": ["web", "https", "ssl", "allow"],
            "rule": {
                "name": "Allow HTTPS Traffic",
                "description": "Default rule allowing HTTPS traffic",
                "priority": 1000,
                "match": {"protocol": "TCP", "dstPort": 443},
                "actions": [{"type": "FORWARD", "outputPort": 1}],
                "timeout": _PERMANENT,
                "status": "inactive",
            },
        },
        {
            "id": "block-icmp",
            "name": "Block ICMP",
            "description": "Drop ICMP (ping) traffic",
            "category": "Security",
            "tags": ["icmp", "ping", "block", "security"],
            "rule": {
                "name": "Block ICMP Traffic",
                "description": "Security rule dropping ICMP traffic",
                "priority": 2000,
                "match": {"protocol": "ICMP"},
                "actions": [{"type": "DROP"}],
                "timeout": _PERMANENT,
                "status": "inactive",
            },
        },
        {
            "id": "vlan-100",
            "name": "VLAN 100 Forwarding",
            "description": "Forward VLAN 100 traffic to a dedicated port",
            "category": "VLAN",
            "tags": ["vlan", "forward"],
            "rule": {
                "name": "VLAN 100 Forwarding",
                "description": "VLAN 100 forwarding rule",
                "priority": 1500,
                "match": {"vlanId": 100},
                "actions": [{"type": "FORWARD", "outputPort": 2}],
                "timeout": _PERMANENT,
                "status": "inactive",
            },
        },
        {
            "id": "qos-high",
            "name": "High Priority QoS",
            "description": "Send selected traffic to a priority queue",
            "category": "QoS",
            "tags": ["qos", "queue", "priority"],
            "rule": {
                "name": "High Priority QoS",
                "description": "QoS rule for high priority traffic",
                "priority": 3000,
                "match": {"protocol": "TCP", "dstPort": 22},
                "actions": [{"type": "QUEUE", "queueId": 0, "outputPort": 1}],
                "timeout": _PERMANENT,
                "status": "inactive",
            },
        },
        {
            "id": "load-balance",
            "name": "Load Balancing",
            "description": "Distribute traffic across all ports",
            "category": "Advanced",
            "tags": ["load-balance", "distribute"],
            "rule": {
                "name": "Load Balancing",
                "description": "Load balancing rule",
                "priority": 1200,
                "match": {"protocol": "TCP", "dstPort": 80},
                "actions": [{"type": "FLOOD"}],
                "timeout": {"hardTimeout": 300, "idleTimeout": 60},
                "status": "inactive",
            },
        },
        {
            "id": "controller-forward",
            "name": "Forward to Controller",
            "description": "Send packets to the SDN controller",
            "category": "Advanced",
            "tags": ["controller", "sdn"],
            "rule": {
                "name": "Forward to Controller",
                "description": "Punt packets to the SDN controller",
                "priority": 500,
                "match": {"protocol": "ANY"},
                "actions": [{"type": "CONTROLLER"}],
                "timeout": {"hardTimeout": 0, "idleTimeout": 30},
                "status": "inactive",
            },
        },
    ]
]


def list_categories() -> List[str]:
    categories: List[str] = []
    for template in FLOW_TEMPLATES:
        if template.category not in categories:
            categories.append(template.category)
    return categories


def list_templates(query: Optional[str] = None, category: Optional[str] = None) -> List[FlowTemplate]:
    """ค้นหา template จาก name / description / tags (ไม่สนตัวพิมพ์) และกรองตาม category"""
    needle = (query or "").strip().lower()

    results = []
    for template in FLOW_TEMPLATES:
        if category and template.category != category:
            continue
        if needle and not (
            needle in template.name.lower()
            or needle in template.description.lower()
            or any(needle in tag.lower() for tag in template.tags)
        ):
            continue
        results.append(template.model_copy(deep=True))
    return results


def get_template(template_id: str) -> Optional[FlowTemplate]:
    for template in FLOW_TEMPLATES:
        if template.id == template_id:
            return template.model_copy(deep=True)
    return None


def instantiate_template(
    template_id: str, overrides: Optional[Dict[str, Any]] = None
) -> Optional[FlowRuleDraft]:
    """สร้าง draft ใหม่จาก template (copy แยก — แก้ draft แล้วไม่กระทบ library)"""
    template = get_template(template_id)
    if template is None:
        return None

    data = template.rule.model_dump(by_alias=True, exclude_none=True)
    data.update(overrides or {})
    return FlowRuleDraft.model_validate(data)
