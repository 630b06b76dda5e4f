"""
NBI (Northbound Interface) API
Flow rule validation / simulation สำหรับ Dashboard

Error Codes สำหรับ Frontend:
- 200: Success (ผล validation อยู่ใน data — rule ที่ไม่ผ่านก็ยังเป็น 200)
- 400: Bad Request (override ของ template ไม่ถูกต้อง)
- 404: Not Found (ไม่พบ template)
- 413: Payload Too Large (rule set ใหญ่เกิน FLOWCHECK_MAX_RULES)
- 422: Validation Error (JSON body ไม่ตรง schema)

Structure:
- models.py     - Error codes, Request/Response models
- flows.py      - Validation / simulation / template endpoints
"""
from fastapi import APIRouter

from flowcheck.core.config import settings

from .flows import router as flows_router

# Create main router
router = APIRouter(prefix=settings.FLOWCHECK_API_PREFIX, tags=["NBI"])

router.include_router(flows_router)
