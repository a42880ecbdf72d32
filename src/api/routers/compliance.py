from fastapi import APIRouter, Depends

from api.dependencies import get_staffing
from staffing.provider import StaffingDataProvider

router = APIRouter()


@router.get("")
async def compliance(staffing: StaffingDataProvider = Depends(get_staffing)) -> dict:
    return staffing.compliance_summary()
