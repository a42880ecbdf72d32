from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_staffing
from staffing.provider import StaffingDataProvider

router = APIRouter()


@router.get("")
async def staffing_snapshot(staffing: StaffingDataProvider = Depends(get_staffing)) -> dict:
    return staffing.snapshot()


@router.get("/burnout")
async def burnout(staffing: StaffingDataProvider = Depends(get_staffing)) -> dict:
    return staffing.burnout_risk()


@router.get("/forecast")
async def forecast(
    from_date: Optional[str] = None,
    days: int = 5,
    staffing: StaffingDataProvider = Depends(get_staffing),
) -> dict:
    """Scheduled vs required staff for the next few days."""
    if days < 1 or days > 31:
        raise HTTPException(status_code=400, detail="days must be between 1 and 31")
    try:
        return {"forecast": staffing.upcoming_staffing(from_date, days)}
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD")


@router.get("/understaffed")
async def understaffed(staffing: StaffingDataProvider = Depends(get_staffing)) -> dict:
    days = staffing.understaffed_days()
    return {"count": len(days), "days": days}


@router.get("/units")
async def units(
    date: Optional[str] = None,
    staffing: StaffingDataProvider = Depends(get_staffing),
) -> dict:
    day = date or staffing.reference_date.isoformat()
    return {"date": day, "units": list(staffing.staffing_by_unit(day).values())}
