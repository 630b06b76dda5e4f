"""
NBI Flow Rule Validation Endpoints
ตรวจ / จำลอง flow rules ที่ Dashboard ส่งมา (ไม่มีการเก็บ rule ที่ backend)

Endpoints:
  POST   /flows/validate                          - Validate rule ที่กำลังแก้ไข + ตรวจ conflict
  POST   /flows/validate-set                      - Validate rule table ทั้งชุด
  POST   /flows/simulate                          - Packet ไป match rule ไหน (action แรก)
  POST   /flows/trace                             - Simulation แบบละเอียด
  GET    /flows/templates                         - Template library (ค้นหา/กรอง category)
  GET    /flows/templates/{template_id}           - Template ตาม id
  POST   /flows/templates/{template_id}/instantiate - สร้าง draft จาก template
"""
from typing import Optional
from fastapi import APIRouter, HTTPException, Query, status
from flowcheck.services.flow_rule_service import FlowRuleService
from flowcheck.core.logging import logger

from .models import (
    ErrorCode,
    FlowResponse,
    FlowValidateRequest,
    RuleSetValidateRequest,
    PacketSimulateRequest,
    TemplateInstantiateRequest,
)

router = APIRouter()
flow_rule_service = FlowRuleService()


# ──────────────────────────────────────────────────────────────
# Shared Error Handler
# ──────────────────────────────────────────────────────────────
def _handle_flow_error(e: Exception, operation: str):
    """Shared error handler สำหรับทุก flow endpoint"""
    if isinstance(e, HTTPException):
        raise e

    # pydantic ValidationError เป็น subclass ของ ValueError
    if isinstance(e, ValueError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": ErrorCode.INVALID_PARAMS.value, "message": str(e)},
        )

    logger.error(f"Unexpected error in {operation}: {e}")
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "code": ErrorCode.INTERNAL_ERROR.value,
            "message": f"Unexpected error: {str(e)}",
        },
    )


def _dump(model) -> dict:
    return model.model_dump(by_alias=True, mode="json")


# ──────────────────────────────────────────────────────────────
# POST /flows/validate  →  Validate rule + conflicts
# ──────────────────────────────────────────────────────────────
@router.post("/flows/validate", response_model=FlowResponse)
async def validate_flow(request: FlowValidateRequest):
    """
    ✅ Validate Flow Rule

    ตรวจ name / priority / match fields / actions / timeouts ทั้งหมดในครั้งเดียว
    ถ้า rule มี `id` แล้ว จะตรวจ conflict (overlap / shadowing / redundancy) กับ `existingRules` ด้วย

    `isValid=false` เมื่อมี error เท่านั้น — warnings และ conflicts ไม่ block การ save
    """
    try:
        result = flow_rule_service.validate(request.rule, request.existing_rules)
        return FlowResponse(
            success=True, code=ErrorCode.SUCCESS.value,
            message="Rule is valid" if result.is_valid else "Rule has validation errors",
            data=_dump(result),
        )
    except Exception as e:
        _handle_flow_error(e, "flow.validate")


# ──────────────────────────────────────────────────────────────
# POST /flows/validate-set  →  Validate ทั้ง rule table
# ──────────────────────────────────────────────────────────────
@router.post("/flows/validate-set", response_model=FlowResponse)
async def validate_flow_set(request: RuleSetValidateRequest):
    """
    📋 Validate Rule Table

    Validate ทุก rule เทียบกับ rule ที่เหลือใน table — ใช้นับ conflict บนหน้า flow list
    """
    try:
        entries = flow_rule_service.validate_set(request.rules)
        invalid = sum(1 for entry in entries if not entry.result.is_valid)
        conflicts = sum(len(entry.result.conflicts) for entry in entries)
        return FlowResponse(
            success=True, code=ErrorCode.SUCCESS.value,
            message=f"Validated {len(entries)} rule(s)",
            data={
                "results": [_dump(entry) for entry in entries],
                "total": len(entries),
                "invalidCount": invalid,
                "conflictCount": conflicts,
            },
        )
    except Exception as e:
        _handle_flow_error(e, "flow.validate-set")


# ──────────────────────────────────────────────────────────────
# POST /flows/simulate  →  Packet classification
# ──────────────────────────────────────────────────────────────
@router.post("/flows/simulate", response_model=FlowResponse)
async def simulate_flow(request: PacketSimulateRequest):
    """
    🧪 Packet Simulation

    Rule ที่ priority ต่ำสุด (precedence สูงสุด) ที่ match ทุก field ชนะ
    ไม่มี rule match → `action = DEFAULT`, `matchedRule = null`
    """
    try:
        result = flow_rule_service.simulate(request.packet, request.rules)
        return FlowResponse(
            success=True, code=ErrorCode.SUCCESS.value,
            message=f"Packet classified as {result.action}",
            data=_dump(result),
        )
    except Exception as e:
        _handle_flow_error(e, "flow.simulate")


# ──────────────────────────────────────────────────────────────
# POST /flows/trace  →  Detailed simulation
# ──────────────────────────────────────────────────────────────
@router.post("/flows/trace", response_model=FlowResponse)
async def trace_flow(request: PacketSimulateRequest):
    """
    🔍 Packet Trace

    แสดง rule ทุกตัวที่ match, actions ที่ถูกใช้, output ports และ path การประเมิน
    """
    try:
        result = flow_rule_service.trace(request.packet, request.rules)
        return FlowResponse(
            success=True, code=ErrorCode.SUCCESS.value,
            message="Packet dropped" if result.dropped else "Packet forwarded",
            data=_dump(result),
        )
    except Exception as e:
        _handle_flow_error(e, "flow.trace")


# ──────────────────────────────────────────────────────────────
# Templates
# ──────────────────────────────────────────────────────────────
@router.get("/flows/templates", response_model=FlowResponse)
async def list_flow_templates(
    q: Optional[str] = Query(None, description="Search by name, description, tags"),
    category: Optional[str] = Query(None, description="Filter by category"),
):
    try:
        listing = flow_rule_service.list_templates(query=q, category=category)
        return FlowResponse(
            success=True, code=ErrorCode.SUCCESS.value,
            message=f"{listing['total']} template(s)",
            data={
                "templates": [_dump(template) for template in listing["templates"]],
                "categories": listing["categories"],
                "total": listing["total"],
            },
        )
    except Exception as e:
        _handle_flow_error(e, "flow.templates")


@router.get("/flows/templates/{template_id}", response_model=FlowResponse)
async def get_flow_template(template_id: str):
    try:
        template = flow_rule_service.get_template(template_id)
        return FlowResponse(
            success=True, code=ErrorCode.SUCCESS.value,
            message=f"Template {template_id}",
            data=_dump(template),
        )
    except Exception as e:
        _handle_flow_error(e, "flow.template")


@router.post("/flows/templates/{template_id}/instantiate", response_model=FlowResponse)
async def instantiate_flow_template(template_id: str, request: TemplateInstantiateRequest):
    """สร้าง draft rule จาก template — draft ยังไม่มี id จนกว่า Dashboard จะ save"""
    try:
        draft = flow_rule_service.instantiate_template(template_id, request.overrides)
        return FlowResponse(
            success=True, code=ErrorCode.SUCCESS.value,
            message=f"Draft created from template {template_id}",
            data=_dump(draft),
        )
    except Exception as e:
        _handle_flow_error(e, "flow.template.instantiate")
