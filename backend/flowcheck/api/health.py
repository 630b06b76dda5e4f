from fastapi import APIRouter
from pydantic import BaseModel

from flowcheck.core.config import settings

class HealthOut(BaseModel):
    status: str = "ok"
    service: str = "flowcheck"
    max_rules: int = settings.FLOWCHECK_MAX_RULES

router = APIRouter(tags=["Health"])

@router.get("/health", response_model=HealthOut)
async def health():
    """Liveness — engine ไม่มี dependency ภายนอก ถ้า process ตอบได้ก็พร้อมใช้งาน"""
    return HealthOut(max_rules=settings.FLOWCHECK_MAX_RULES)
