from agenda.desks.context import BusinessContext
from agenda.desks.public_desk import PublicBookingDesk
from agenda.desks.staff_desk import StaffDesk

__all__ = ["BusinessContext", "PublicBookingDesk", "StaffDesk"]
