"""
Flow Rule Schemas
Model ของ flow rule / validation result / simulation result ที่ Dashboard ใช้

Attribute เป็น snake_case แต่ JSON ใช้ camelCase (srcIp, outputPort, isValid ...)
ให้ตรงกับข้อมูล rule ที่ Frontend เก็บอยู่ รับได้ทั้งสองแบบ
"""
from datetime import datetime
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FlowModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ===== Enums =====

class FlowActionType(str, Enum):
    FORWARD = "FORWARD"
    DROP = "DROP"
    MODIFY = "MODIFY"
    QUEUE = "QUEUE"
    FLOOD = "FLOOD"
    CONTROLLER = "CONTROLLER"


class FlowStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ERROR = "error"


class ConflictType(str, Enum):
    OVERLAP = "overlap"
    SHADOWING = "shadowing"
    REDUNDANCY = "redundancy"


class FlowSeverity(str, Enum):
    NORMAL = "normal"
    MINOR = "minor"
    MAJOR = "major"
    CRITICAL = "critical"


# ===== MATCH FIELDS =====

class FlowHeaderFields(FlowModel):
    """Header fields ที่ใช้ทั้งใน match และ packet"""
    src_ip: Optional[str] = None          # "10.0.0.1" หรือ "10.0.0.0/24"
    dst_ip: Optional[str] = None
    src_mac: Optional[str] = None         # "AA:BB:CC:DD:EE:FF" หรือ "aa-bb-cc-dd-ee-ff"
    dst_mac: Optional[str] = None
    src_port: Optional[int] = None
    dst_port: Optional[int] = None
    vlan_id: Optional[int] = None
    protocol: Optional[str] = None        # TCP | UDP | ICMP | ARP | ANY | HTTP ...
    in_port: Optional[int] = None
    ether_type: Optional[int] = None


class FlowMatchFields(FlowHeaderFields):
    """Sparse match — field ที่ไม่ได้ระบุ (None) คือ wildcard"""

    def specified(self) -> dict:
        # "" (editor ล้างช่องข้อความ) ถือเป็น wildcard เหมือน None
        return {key: value for key, value in self.model_dump(exclude_none=True).items() if value != ""}


class PacketTrace(FlowHeaderFields):
    """Packet สำหรับ simulation (header values ของ packet จริง)"""


# ===== ACTIONS =====

class ModifyFields(FlowModel):
    src_ip: Optional[str] = None
    dst_ip: Optional[str] = None
    src_mac: Optional[str] = None
    dst_mac: Optional[str] = None
    vlan_id: Optional[int] = None


# Parameter ที่ "จำเป็น" ยังเป็น Optional เพื่อให้ draft ที่ยังกรอกไม่ครบ
# ถูกรายงานเป็น error ใน validation result แทนที่จะ parse ไม่ผ่าน
class ForwardAction(FlowModel):
    type: Literal["FORWARD"] = "FORWARD"
    output_port: Optional[int] = None


class DropAction(FlowModel):
    type: Literal["DROP"] = "DROP"


class QueueAction(FlowModel):
    type: Literal["QUEUE"] = "QUEUE"
    queue_id: Optional[int] = None
    output_port: Optional[int] = None


class ModifyAction(FlowModel):
    type: Literal["MODIFY"] = "MODIFY"
    modify_fields: Optional[ModifyFields] = None


class FloodAction(FlowModel):
    type: Literal["FLOOD"] = "FLOOD"


class ControllerAction(FlowModel):
    type: Literal["CONTROLLER"] = "CONTROLLER"


FlowAction = Annotated[
    Union[ForwardAction, DropAction, QueueAction, ModifyAction, FloodAction, ControllerAction],
    Field(discriminator="type"),
]


# ===== RULE =====

class FlowTimeout(FlowModel):
    hard_timeout: Optional[int] = None    # seconds, 0 = permanent
    idle_timeout: Optional[int] = None    # seconds, 0 = no idle timeout


class FlowStatistics(FlowModel):
    packet_count: int = 0
    byte_count: int = 0
    duration: int = 0                     # seconds
    last_matched: Optional[datetime] = None


class FlowRuleDraft(FlowModel):
    """
    Rule ที่กำลังแก้ไขอยู่ใน editor (Partial<FlowRule>)
    ทุก field เป็น optional และไม่มี range constraint — การตรวจ range เป็นหน้าที่ของ validator
    """
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[int] = None        # 0-65535, ค่าน้อย = precedence สูง
    match: Optional[FlowMatchFields] = None
    actions: Optional[List[FlowAction]] = None
    timeout: Optional[FlowTimeout] = None
    status: Optional[FlowStatus] = None
    statistics: Optional[FlowStatistics] = None
    device_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    version: Optional[int] = None


class FlowRule(FlowRuleDraft):
    """Rule ที่บันทึกแล้วใน rule table ของ caller"""
    id: str
    name: str
    priority: int
    match: FlowMatchFields = Field(default_factory=FlowMatchFields)
    actions: List[FlowAction] = Field(default_factory=list)
    timeout: FlowTimeout = Field(default_factory=FlowTimeout)
    status: FlowStatus = FlowStatus.ACTIVE
    statistics: FlowStatistics = Field(default_factory=FlowStatistics)
    version: int = 1


# ===== VALIDATION RESULT =====

class FlowConflict(FlowModel):
    rule1_id: str
    rule2_id: str
    type: ConflictType
    severity: FlowSeverity
    description: str
    suggestion: Optional[str] = None


class FlowValidationResult(FlowModel):
    is_valid: bool
    errors: List[str] = []
    warnings: List[str] = []
    conflicts: List[FlowConflict] = []


class RuleValidationEntry(FlowModel):
    """ผลการ validate ของ rule หนึ่งตัวใน rule set"""
    rule_id: str
    result: FlowValidationResult


# ===== SIMULATION =====

class PacketSimulationResult(FlowModel):
    matched_rule: Optional[FlowRule] = None
    action: str                           # action type ของ rule ที่ match หรือ "DEFAULT"


class FlowSimulationResult(FlowModel):
    """Trace แบบเต็ม: rule ทุกตัวที่ match, action ที่ถูกใช้, output ports"""
    packet: PacketTrace
    matched_rules: List[FlowRule] = []
    applied_actions: List[FlowAction] = []
    output_ports: List[int] = []
    dropped: bool
    path: List[str] = []                  # rule ids ตามลำดับที่ถูกประเมิน


# ===== TEMPLATES =====

class FlowTemplate(FlowModel):
    id: str
    name: str
    description: str
    category: str
    tags: List[str] = []
    rule: FlowRuleDraft
