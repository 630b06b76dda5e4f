"""
NBI Models
Error Codes, Request Models, Response Models
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from flowcheck.core.errors import ErrorCode  # noqa: F401  re-export สำหรับ flows.py
from flowcheck.schemas.flow import FlowModel, FlowRule, FlowRuleDraft, PacketTrace


# ===== Base Response Models =====

class FlowResponse(BaseModel):
    """Response สำหรับ flow validation / simulation operations"""
    success: bool
    code: str  # ErrorCode enum value
    message: str
    data: Optional[Dict[str, Any]] = None


# ===== Flow Validation Models =====

class FlowValidateRequest(FlowModel):
    """Request body สำหรับ validate rule ที่กำลังแก้ไข"""
    rule: FlowRuleDraft = Field(..., description="Rule ที่กำลังแก้ไข (field ใดก็ได้อาจยังไม่ครบ)")
    existing_rules: List[FlowRule] = Field(
        default_factory=list,
        description="Rule table ปัจจุบันทั้งหมด (ใช้ตรวจ conflict ถ้า rule มี id)"
    )


class RuleSetValidateRequest(FlowModel):
    """Request body สำหรับ validate rule table ทั้งชุด"""
    rules: List[FlowRule] = Field(default_factory=list)


# ===== Packet Simulation Models =====

class PacketSimulateRequest(FlowModel):
    """Request body สำหรับจำลองการ classify packet"""
    packet: PacketTrace = Field(..., description="Header values ของ packet")
    rules: List[FlowRule] = Field(default_factory=list, description="Rule table ที่ใช้จำลอง")


# ===== Template Models =====

class TemplateInstantiateRequest(BaseModel):
    """ค่าที่ต้องการ override ใน draft (camelCase เหมือน rule JSON) เช่น {"priority": 900}"""
    overrides: Dict[str, Any] = Field(default_factory=dict)
