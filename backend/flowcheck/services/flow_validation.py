"""
Flow Rule Validation & Conflict Detection

validate_flow_rule() ตรวจ rule ที่กำลังแก้ไขทั้งหมดในครั้งเดียว (ไม่หยุดที่ error แรก)
แล้วตรวจ conflict กับ rule อื่นใน rule set ถ้า rule นั้นมี id แล้ว

Priority: ค่าน้อย = precedence สูง (OpenFlow convention)
"""
from typing import Any, Dict, List, Optional, Sequence

from flowcheck.core.logging import logger
from flowcheck.schemas.flow import (
    ConflictType,
    FlowActionType,
    FlowConflict,
    FlowMatchFields,
    FlowRule,
    FlowRuleDraft,
    FlowSeverity,
    FlowValidationResult,
    RuleValidationEntry,
)
from flowcheck.services.match_validators import validate_match_fields

PRIORITY_MIN, PRIORITY_MAX = 0, 65535
TIMEOUT_MIN, TIMEOUT_MAX = 0, 65535


def validate_flow_rule(
    rule: FlowRuleDraft,
    existing_rules: Optional[Sequence[FlowRule]] = None,
) -> FlowValidationResult:
    errors: List[str] = []
    warnings: List[str] = []
    conflicts: List[FlowConflict] = []

    # Basic validation
    if not rule.name or not rule.name.strip():
        errors.append("Rule name is required")

    if rule.priority is None or not PRIORITY_MIN <= rule.priority <= PRIORITY_MAX:
        errors.append("Priority must be between 0 and 65535")

    if rule.match is None or not rule.match.specified():
        warnings.append("Match fields are empty. The rule matches all packets")

    if not rule.actions:
        errors.append("At least one action is required")

    # Match fields
    if rule.match is not None:
        match_errors, match_warnings = validate_match_fields(rule.match)
        errors.extend(match_errors)
        warnings.extend(match_warnings)

    # Actions
    for index, action in enumerate(rule.actions or [], start=1):
        if action.type == FlowActionType.FORWARD and action.output_port is None:
            errors.append(f"Action {index}: FORWARD action requires an output port")
        if action.type == FlowActionType.QUEUE:
            if action.queue_id is None:
                errors.append(f"Action {index}: QUEUE action requires a queue ID")
            if action.output_port is None:
                errors.append(f"Action {index}: QUEUE action requires an output port")
        if action.type == FlowActionType.MODIFY and action.modify_fields is None:
            warnings.append(f"Action {index}: MODIFY action has no fields to modify")

    # Timeouts
    if rule.timeout is not None:
        hard, idle = rule.timeout.hard_timeout, rule.timeout.idle_timeout
        if hard is not None and not TIMEOUT_MIN <= hard <= TIMEOUT_MAX:
            errors.append("Hard timeout must be between 0 and 65535")
        if idle is not None and not TIMEOUT_MIN <= idle <= TIMEOUT_MAX:
            errors.append("Idle timeout must be between 0 and 65535")

    # Draft ที่ยังไม่มี id (ยังไม่ได้ save) ไม่ต้องตรวจ conflict
    if rule.id:
        conflicts.extend(detect_conflicts(rule, existing_rules or []))

    return FlowValidationResult(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        conflicts=conflicts,
    )


def detect_conflicts(rule: FlowRuleDraft, existing_rules: Sequence[FlowRule]) -> List[FlowConflict]:
    """
    ตรวจ overlap / shadowing / redundancy ระหว่าง rule กับ rule อื่นทีละคู่

    Shadowing ถูกรายงานเฉพาะเมื่อ rule ที่ตรวจมี precedence สูงกว่า (priority น้อยกว่า)
    rule ที่มีอยู่ กรณีกลับกันไม่รายงาน
    """
    conflicts: List[FlowConflict] = []
    match = rule.match or FlowMatchFields()

    for existing in existing_rules:
        if existing.id == rule.id:
            continue

        if rule.priority is not None and match_fields_overlap(match, existing.match):
            if rule.priority == existing.priority:
                conflicts.append(FlowConflict(
                    rule1_id=rule.id,
                    rule2_id=existing.id,
                    type=ConflictType.OVERLAP,
                    severity=FlowSeverity.MAJOR,
                    description=f'Match fields overlap with rule "{existing.name}" at the same priority',
                    suggestion="Use different priorities or make the match fields more specific",
                ))
            elif rule.priority < existing.priority:
                conflicts.append(FlowConflict(
                    rule1_id=rule.id,
                    rule2_id=existing.id,
                    type=ConflictType.SHADOWING,
                    severity=FlowSeverity.MINOR,
                    description=f'This rule may shadow rule "{existing.name}"',
                    suggestion="Confirm this is the intended behavior",
                ))

        if is_redundant(rule, existing):
            conflicts.append(FlowConflict(
                rule1_id=rule.id,
                rule2_id=existing.id,
                type=ConflictType.REDUNDANCY,
                severity=FlowSeverity.MINOR,
                description=f'This rule may duplicate rule "{existing.name}"',
                suggestion="Consider removing one of the rules",
            ))

    if conflicts:
        logger.debug(f"Rule {rule.id}: {len(conflicts)} conflict(s) against {len(existing_rules)} rule(s)")
    return conflicts


def match_fields_overlap(match1: FlowMatchFields, match2: FlowMatchFields) -> bool:
    """field ที่ทั้งสองฝั่งระบุต้องมีค่าเท่ากันทุกตัว, field ที่ฝั่งใดไม่ระบุถือเป็น wildcard"""
    fields1, fields2 = match1.specified(), match2.specified()

    for key in fields1.keys() | fields2.keys():
        if key in fields1 and key in fields2 and fields1[key] != fields2[key]:
            return False

    return True


def _action_values(actions) -> Optional[List[Dict[str, Any]]]:
    if actions is None:
        return None
    return [action.model_dump(exclude_none=True) for action in actions]


def is_redundant(rule1: FlowRuleDraft, rule2: FlowRuleDraft) -> bool:
    """match และ actions เหมือนกันทุก field (เทียบตามค่า)"""
    # match ที่ไม่มีเลย (None) ไม่เท่ากับ match ว่าง {}
    if (rule1.match is None) != (rule2.match is None):
        return False

    match1 = (rule1.match or FlowMatchFields()).specified()
    match2 = (rule2.match or FlowMatchFields()).specified()
    if match1 != match2:
        return False

    actions1, actions2 = _action_values(rule1.actions), _action_values(rule2.actions)
    return actions1 is not None and actions1 == actions2


def validate_rule_set(rules: Sequence[FlowRule]) -> List[RuleValidationEntry]:
    """Validate ทุก rule ใน set เทียบกับ rule ที่เหลือ (เรียงตามลำดับ input)"""
    return [
        RuleValidationEntry(rule_id=rule.id, result=validate_flow_rule(rule, rules))
        for rule in rules
    ]
