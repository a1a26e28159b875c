"""
In-memory appointment store.

Plays the part of the persistence layer: it hands out snapshots for the
engine to reason over and accepts writes. ``add_many`` is all-or-nothing,
so a multi-service booking either lands completely or not at all.
"""

import logging
import threading
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Optional, Sequence

from agenda.schemas.appointment_schema import Appointment, AppointmentStatus

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when a write cannot be applied."""


class AppointmentStore:
    """Thread-safe appointment table keyed by appointment id."""

    def __init__(self, appointments: Optional[Iterable[Appointment]] = None) -> None:
        self._lock = threading.RLock()
        self._appointments: dict[str, Appointment] = {}
        if appointments:
            self.add_many(list(appointments))

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    def get(self, appointment_id: str) -> Optional[Appointment]:
        with self._lock:
            found = self._appointments.get(appointment_id)
            return found.model_copy() if found else None

    def snapshot(
        self,
        business_id: str,
        professional_id: Optional[str] = None,
        day: Optional[date] = None,
    ) -> list[Appointment]:
        """Copies of a business's appointments, optionally narrowed.

        With ``day`` set, only appointments whose [start, end) touches that
        calendar day are returned.
        """
        with self._lock:
            rows = [
                a for a in self._appointments.values()
                if a.business_id == business_id
                and (professional_id is None or a.professional_id == professional_id)
            ]
        if day is not None:
            day_start = datetime.combine(day, datetime.min.time())
            day_end = day_start + timedelta(days=1)
            rows = [a for a in rows if a.start_time < day_end and a.end_time > day_start]
        return [a.model_copy() for a in sorted(rows, key=lambda a: a.start_time)]

    def between(self, business_id: str, start: datetime, end: datetime) -> list[Appointment]:
        """Appointments starting in [start, end), ordered by start time."""
        return [
            a for a in self.snapshot(business_id)
            if start <= a.start_time < end
        ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._appointments)

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    def add_many(self, appointments: Sequence[Appointment]) -> list[Appointment]:
        """Insert all appointments or none of them.

        Raises:
            StoreError: If any id is duplicated or already stored.
        """
        with self._lock:
            ids = [a.id for a in appointments]
            if len(set(ids)) != len(ids):
                raise StoreError("Duplicate appointment id in batch")
            clashing = [i for i in ids if i in self._appointments]
            if clashing:
                raise StoreError(f"Appointment ids already exist: {', '.join(clashing)}")
            for appointment in appointments:
                self._appointments[appointment.id] = appointment.model_copy()
        logger.info("Stored %d appointment(s): %s", len(ids), ", ".join(ids))
        return [a.model_copy() for a in appointments]

    def add(self, appointment: Appointment) -> Appointment:
        return self.add_many([appointment])[0]

    def replace(self, appointment: Appointment) -> Appointment:
        """Overwrite an existing appointment.

        Raises:
            StoreError: If the appointment does not exist.
        """
        with self._lock:
            if appointment.id not in self._appointments:
                raise StoreError(f"Appointment {appointment.id} not found")
            self._appointments[appointment.id] = appointment.model_copy()
        return appointment.model_copy()

    def update_status(self, appointment_id: str, status: AppointmentStatus) -> Appointment:
        with self._lock:
            current = self._appointments.get(appointment_id)
            if current is None:
                raise StoreError(f"Appointment {appointment_id} not found")
            updated = current.model_copy(update={"status": status})
            self._appointments[appointment_id] = updated
        logger.info("Appointment %s is now %s", appointment_id, status.value)
        return updated.model_copy()

    def delete_cancelled_before(
        self, cutoff: datetime, business_id: Optional[str] = None
    ) -> list[str]:
        """Remove cancelled appointments starting before ``cutoff``. Returns removed ids."""
        with self._lock:
            doomed = [
                a.id for a in self._appointments.values()
                if a.is_cancelled
                and a.start_time < cutoff
                and (business_id is None or a.business_id == business_id)
            ]
            for appointment_id in doomed:
                del self._appointments[appointment_id]
        return doomed

    def load_rows(self, business_id: str, rows: Iterable[dict[str, Any]]) -> list[Appointment]:
        """Load snapshot rows shaped like ``{id, professional_id, start_time, duration_minutes, status}``.

        ``start_time`` may be an ISO local datetime string; it is parsed
        without any timezone conversion.
        """
        appointments = [
            Appointment.model_validate({"business_id": business_id, **row}) for row in rows
        ]
        return self.add_many(appointments)

    def reset(self) -> None:
        """Clear all appointments. Used by test fixtures for isolation."""
        with self._lock:
            self._appointments.clear()
