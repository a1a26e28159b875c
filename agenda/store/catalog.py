"""Service and professional catalog, scoped per business."""

import logging
from typing import Iterable, Optional, Sequence

from agenda.engine.errors import InvalidRequestError
from agenda.schemas.catalog_schema import Professional, Service

logger = logging.getLogger(__name__)


class Catalog:
    """Read-only reference data the engine consumes."""

    def __init__(
        self,
        services: Iterable[Service] = (),
        professionals: Iterable[Professional] = (),
    ) -> None:
        self._services: dict[str, Service] = {s.id: s for s in services}
        self._professionals: dict[str, Professional] = {p.id: p for p in professionals}

    def add_service(self, service: Service) -> Service:
        self._services[service.id] = service
        return service

    def add_professional(self, professional: Professional) -> Professional:
        self._professionals[professional.id] = professional
        return professional

    def active_services(self, business_id: str) -> list[Service]:
        return sorted(
            (s for s in self._services.values() if s.business_id == business_id and s.is_active),
            key=lambda s: s.name,
        )

    def active_professionals(self, business_id: str) -> list[Professional]:
        return sorted(
            (p for p in self._professionals.values()
             if p.business_id == business_id and p.is_active),
            key=lambda p: p.name,
        )

    def service(self, service_id: Optional[str]) -> Optional[Service]:
        """Any service by id, active or not. Used to price existing appointments."""
        if service_id is None:
            return None
        return self._services.get(service_id)

    def professional(self, professional_id: str) -> Optional[Professional]:
        return self._professionals.get(professional_id)

    def services_for_booking(self, business_id: str, service_ids: Sequence[str]) -> list[Service]:
        """Resolve active services in the caller's order.

        Raises:
            InvalidRequestError: If the list is empty or an id is unknown or inactive.
        """
        if not service_ids:
            raise InvalidRequestError("At least one service is required")
        resolved = []
        for service_id in service_ids:
            service = self._services.get(service_id)
            if service is None or service.business_id != business_id or not service.is_active:
                raise InvalidRequestError(f"Service {service_id} is not available")
            resolved.append(service)
        return resolved

    def bookable_professional(self, business_id: str, professional_id: str) -> Professional:
        """Raises InvalidRequestError unless the professional is active in this business."""
        professional = self._professionals.get(professional_id)
        if (
            professional is None
            or professional.business_id != business_id
            or not professional.is_active
        ):
            raise InvalidRequestError(f"Professional {professional_id} is not available")
        return professional
