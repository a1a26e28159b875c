"""Shared collaborators a desk needs to serve one business."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable

from agenda.engine.locks import ProfessionalLocks, default_locks
from agenda.store.appointments import AppointmentStore
from agenda.store.catalog import Catalog
from agenda.store.customers import CustomerDirectory
from agenda.store.schedules import ScheduleBook


@dataclass
class BusinessContext:
    """
    Everything the engine reads from or writes to for one business.

    ``clock`` is the single source of "now"; tests pin it to a fixed
    instant instead of reading the wall clock.
    """
    business_id: str
    appointments: AppointmentStore = field(default_factory=AppointmentStore)
    customers: CustomerDirectory = field(default_factory=CustomerDirectory)
    catalog: Catalog = field(default_factory=Catalog)
    schedules: ScheduleBook = field(default_factory=ScheduleBook)
    locks: ProfessionalLocks = field(default_factory=lambda: default_locks)
    clock: Callable[[], datetime] = datetime.now

    def now(self) -> datetime:
        return self.clock()
