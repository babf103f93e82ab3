from datetime import date

from fastapi import Request

from app.services.reservation_service import ReservationEngine


def get_reservation_engine(request: Request) -> ReservationEngine:
    """The engine created at startup. Tests override this dependency."""
    return request.app.state.reservation_engine


def get_today() -> date:
    return date.today()
