from enum import Enum
from fastapi import HTTPException


class ErrorCode(str, Enum):
    """Error codes สำหรับ Frontend"""
    # Success
    SUCCESS = "SUCCESS"

    # 400 Bad Request
    INVALID_PARAMS = "INVALID_PARAMS"

    # 404 Not Found
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"

    # 413 Payload Too Large
    RULE_SET_TOO_LARGE = "RULE_SET_TOO_LARGE"

    # 500 Internal Server Error
    INTERNAL_ERROR = "INTERNAL_ERROR"


class RuleSetTooLarge(HTTPException):
    """Rule set เกินขนาดที่ engine ตรวจได้ (conflict detection เป็น O(n^2))"""
    def __init__(self, count: int, limit: int):
        super().__init__(
            status_code=413,
            detail={
                "code": ErrorCode.RULE_SET_TOO_LARGE.value,
                "message": f"Rule set has {count} rules, limit is {limit}",
                "suggestion": "Split the rule set or raise FLOWCHECK_MAX_RULES"
            }
        )


class TemplateNotFound(HTTPException):
    def __init__(self, template_id: str):
        super().__init__(
            status_code=404,
            detail={
                "code": ErrorCode.TEMPLATE_NOT_FOUND.value,
                "message": f"Flow template not found: {template_id}"
            }
        )
