from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from workspot.database import get_session
from workspot.models.business import Business
from workspot.models.daily_hours import DailyHours, DailyHoursSet
from workspot.core.security import get_current_business
from workspot.services.booking import hours_for_date

router = APIRouter(prefix="/business-hours", tags=["business-hours"])


@router.get("/")
def list_business_hours(
    start: date | None = None,
    end: date | None = None,
    session: Session = Depends(get_session),
    business: Business = Depends(get_current_business),
):
    query = select(DailyHours).where(DailyHours.business_id == business.id)
    if start:
        query = query.where(DailyHours.available_date >= start)
    if end:
        query = query.where(DailyHours.available_date <= end)
    return session.exec(query.order_by(DailyHours.available_date)).all()


@router.put("/{day}")
def upsert_business_hours(
    day: date,
    payload: DailyHoursSet,
    session: Session = Depends(get_session),
    business: Business = Depends(get_current_business),
):
    if payload.close_time <= payload.open_time:
        raise HTTPException(status_code=400, detail="Close time must be after open time")

    existing = hours_for_date(session, business.id, day)

    if existing:
        existing.open_time = payload.open_time
        existing.close_time = payload.close_time
        session.add(existing)
        session.commit()
        session.refresh(existing)
        return existing

    new = DailyHours(
        business_id=business.id,
        available_date=day,
        open_time=payload.open_time,
        close_time=payload.close_time,
    )
    session.add(new)
    session.commit()
    session.refresh(new)
    return new


@router.delete("/{day}")
def clear_business_hours(
    day: date,
    session: Session = Depends(get_session),
    business: Business = Depends(get_current_business),
):
    existing = hours_for_date(session, business.id, day)
    if existing:
        session.delete(existing)
        session.commit()
    return {"message": "Hours cleared"}
