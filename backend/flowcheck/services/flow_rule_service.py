"""
Flow Rule Service
Service สำหรับ NBI: ตรวจขนาด rule set, log, แล้วส่งต่อให้ validation/simulation engine

Service ไม่เก็บ state ของ rule — rule table เป็นของ caller (Dashboard)
"""
from typing import Any, Dict, List, Optional, Sequence

from flowcheck.core.config import settings
from flowcheck.core.errors import RuleSetTooLarge, TemplateNotFound
from flowcheck.core.logging import logger
from flowcheck.schemas.flow import (
    FlowRule,
    FlowRuleDraft,
    FlowSimulationResult,
    FlowTemplate,
    FlowValidationResult,
    PacketSimulationResult,
    PacketTrace,
    RuleValidationEntry,
)
from flowcheck.services import flow_templates
from flowcheck.services.flow_simulation import simulate_packet, trace_packet
from flowcheck.services.flow_validation import validate_flow_rule, validate_rule_set


class FlowRuleService:
    """Service สำหรับ validate / simulate flow rules"""

    def __init__(self, max_rules: Optional[int] = None):
        self.max_rules = max_rules if max_rules is not None else settings.FLOWCHECK_MAX_RULES

    def _check_rule_set_size(self, rules: Sequence[FlowRule]):
        """Conflict detection เป็น O(n^2) — ไม่รับ rule set ที่ใหญ่เกิน limit"""
        if len(rules) > self.max_rules:
            logger.warning(f"Refusing rule set of {len(rules)} rules (limit {self.max_rules})")
            raise RuleSetTooLarge(len(rules), self.max_rules)

    # ============================================================
    # Validation
    # ============================================================

    def validate(self, rule: FlowRuleDraft, existing_rules: Sequence[FlowRule]) -> FlowValidationResult:
        self._check_rule_set_size(existing_rules)
        logger.info(f"Validating rule {rule.id or '<draft>'} against {len(existing_rules)} rule(s)")

        result = validate_flow_rule(rule, existing_rules)
        logger.debug(
            f"Rule {rule.id or '<draft>'}: valid={result.is_valid} errors={len(result.errors)} "
            f"warnings={len(result.warnings)} conflicts={len(result.conflicts)}"
        )
        return result

    def validate_set(self, rules: Sequence[FlowRule]) -> List[RuleValidationEntry]:
        self._check_rule_set_size(rules)
        logger.info(f"Validating rule set of {len(rules)} rule(s)")
        return validate_rule_set(rules)

    # ============================================================
    # Simulation
    # ============================================================

    def simulate(self, packet: PacketTrace, rules: Sequence[FlowRule]) -> PacketSimulationResult:
        self._check_rule_set_size(rules)
        result = simulate_packet(packet, rules)
        matched = result.matched_rule.id if result.matched_rule else None
        logger.info(f"Simulated packet against {len(rules)} rule(s): matched={matched} action={result.action}")
        return result

    def trace(self, packet: PacketTrace, rules: Sequence[FlowRule]) -> FlowSimulationResult:
        self._check_rule_set_size(rules)
        result = trace_packet(packet, rules)
        logger.info(
            f"Traced packet against {len(rules)} rule(s): "
            f"{len(result.matched_rules)} matched, dropped={result.dropped}"
        )
        return result

    # ============================================================
    # Templates
    # ============================================================

    def list_templates(self, query: Optional[str] = None, category: Optional[str] = None) -> Dict[str, Any]:
        templates = flow_templates.list_templates(query=query, category=category)
        return {
            "templates": templates,
            "categories": flow_templates.list_categories(),
            "total": len(templates),
        }

    def get_template(self, template_id: str) -> FlowTemplate:
        template = flow_templates.get_template(template_id)
        if template is None:
            raise TemplateNotFound(template_id)
        return template

    def instantiate_template(self, template_id: str, overrides: Optional[Dict[str, Any]] = None) -> FlowRuleDraft:
        draft = flow_templates.instantiate_template(template_id, overrides)
        if draft is None:
            raise TemplateNotFound(template_id)
        logger.info(f"Instantiated draft from template {template_id}")
        return draft
