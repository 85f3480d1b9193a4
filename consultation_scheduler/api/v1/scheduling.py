from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from consultation_scheduler.api.v1.schemas import (
    AvailabilityResponseSchema,
    CalendarCellSchema,
    CalendarResponseSchema,
    ConsultationListSchema,
    ConsultationSchema,
    CreateConsultationSchema,
    MutationResponseSchema,
    ScheduleResponseSchema,
    StatusUpdateSchema,
    TimeSlotSchema,
)
from consultation_scheduler.application.use_cases.availability import AvailabilityResolver
from consultation_scheduler.application.use_cases.calendar_grid import (
    WEEKDAY_HEADERS,
    build_calendar_grid,
    month_title,
)
from consultation_scheduler.application.use_cases.schedule_consultation import SchedulingCoordinator
from consultation_scheduler.application.utils.dates import parse_iso_date, today_in
from consultation_scheduler.core.config import Settings
from consultation_scheduler.domain.entities.booking import BookingStatus, slot_index
from consultation_scheduler.domain.entities.requests import CancelRequest, StatusUpdate
from consultation_scheduler.domain.entities.scheduling_state import FlowStep
from consultation_scheduler.infrastructure.store.booking_store import BookingStore
from consultation_scheduler.wiring.dependencies import (
    get_booking_store,
    get_coordinator,
    get_resolver,
    get_settings,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/calendar/{year}/{month}", response_model=CalendarResponseSchema)
def calendar_grid(
    year: int,
    month: int,
    selected: str | None = Query(None, description="Selected date, YYYY-MM-DD"),
    config: Settings = Depends(get_settings),
):
    if not 1 <= month <= 12:
        raise HTTPException(status_code=400, detail="month must be between 1 and 12")
    try:
        selected_date = parse_iso_date(selected) if selected else None
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    cells = build_calendar_grid(year, month, selected_date, today_in(config.BUSINESS_TIMEZONE))
    return CalendarResponseSchema(
        year=year,
        month=month,
        title=month_title(year, month),
        weekdays=list(WEEKDAY_HEADERS),
        cells=[
            CalendarCellSchema(
                day_number=c.day_number,
                in_current_month=c.in_current_month,
                is_today=c.is_today,
                is_past=c.is_past,
                is_weekend=c.is_weekend,
                is_selected=c.is_selected,
                date=c.date,
            )
            for c in cells
        ],
    )


@router.get("/availability/{day}", response_model=AvailabilityResponseSchema)
def availability(day: str, resolver: AvailabilityResolver = Depends(get_resolver)):
    try:
        parsed = parse_iso_date(day)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    options = resolver.available_slots(parsed)
    return AvailabilityResponseSchema(
        date=parsed,
        unavailable_slots=sorted(o.index for o in options if not o.available),
        slots=[TimeSlotSchema(index=o.index, label=o.label, available=o.available) for o in options],
    )


@router.get("/consultations", response_model=ConsultationListSchema)
def list_consultations(store: BookingStore = Depends(get_booking_store)):
    return ConsultationListSchema(
        consultations=[ConsultationSchema.from_booking(b) for b in store.bookings],
        error=store.consultations_error,
        meta={"availability_error": store.availability_error},
    )


@router.post("/consultations/refresh", response_model=ConsultationListSchema)
def refresh_consultations(store: BookingStore = Depends(get_booking_store)):
    store.refresh()
    return list_consultations(store)


@router.post("/consultations", response_model=ScheduleResponseSchema)
def schedule_consultation(
    req: CreateConsultationSchema,
    coordinator: SchedulingCoordinator = Depends(get_coordinator),
):
    try:
        index = slot_index(req.selected_time_slot)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not coordinator.select_date(req.selected_date):
        raise HTTPException(status_code=422, detail="Selected date is not bookable")
    if not coordinator.select_slot(index):
        raise HTTPException(status_code=409, detail="Selected time slot is unavailable")

    coordinator.update_form(
        name=req.name,
        email=req.email,
        phone=req.phone,
        property_type=req.property_type,
        message=req.message or "",
    )
    step = coordinator.submit()
    if not coordinator.is_confirmed:
        raise HTTPException(status_code=422, detail=coordinator.validation_error)

    return ScheduleResponseSchema(
        id=coordinator.state.booking_id or "",
        step=step.value,
        recorded_locally=step == FlowStep.failed_but_locally_recorded,
        message=coordinator.confirmation_message,
        error=coordinator.error,
    )


@router.patch("/consultations/{booking_id}", response_model=MutationResponseSchema)
def update_consultation_status(
    booking_id: str,
    req: StatusUpdateSchema,
    store: BookingStore = Depends(get_booking_store),
):
    try:
        status = BookingStatus.parse(req.status)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if store.get(booking_id) is None:
        raise HTTPException(status_code=404, detail="Consultation not found")

    result = store.update_status(StatusUpdate(booking_id=booking_id, status=status))
    booking = store.get(booking_id)
    return MutationResponseSchema(
        ok=result.ok,
        error=store.consultations_error,
        consultation=ConsultationSchema.from_booking(booking) if booking else None,
    )


@router.delete("/consultations/{booking_id}", response_model=MutationResponseSchema)
def cancel_consultation(booking_id: str, store: BookingStore = Depends(get_booking_store)):
    if store.get(booking_id) is None:
        raise HTTPException(status_code=404, detail="Consultation not found")

    result = store.cancel(CancelRequest(booking_id=booking_id))
    booking = store.get(booking_id)
    return MutationResponseSchema(
        ok=result.ok,
        error=store.consultations_error,
        consultation=ConsultationSchema.from_booking(booking) if booking else None,
    )
