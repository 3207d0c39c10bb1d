"""Service and device records built during a scan."""

from __future__ import annotations

from pydantic import BaseModel, Field

from atvscan.const import DeviceModel, OperatingSystem, PairingRequirement, Protocol


class ServiceRecord(BaseModel):
    protocol: Protocol
    port: int
    identifier: str = ""
    properties: dict[str, str] = Field(default_factory=dict)
    credentials: str = ""
    password: str = ""
    enabled: bool = True
    pairing: PairingRequirement = PairingRequirement.NOT_NEEDED

    def merge(self, other: ServiceRecord) -> None:
        """Fold a newer record for the same protocol into this one.

        Only non-empty values overwrite. Properties are unioned and the
        incoming value wins on conflicting keys.
        """
        if other.identifier:
            self.identifier = other.identifier
        if other.credentials:
            self.credentials = other.credentials
        if other.password:
            self.password = other.password
        self.properties.update(other.properties)


class DeviceInfo(BaseModel):
    operating_system: OperatingSystem = OperatingSystem.UNKNOWN
    version: str = ""
    build_number: str = ""
    model: DeviceModel = DeviceModel.UNKNOWN
    raw_model: str = ""
    mac: str = ""

    def apply(self, patch: DeviceInfo) -> None:
        values = patch.model_dump(exclude_defaults=True)
        # model is derived from raw_model, so the pair always moves together.
        if "raw_model" in values:
            values["model"] = patch.model
        for field, value in values.items():
            setattr(self, field, value)


class DeviceRecord(BaseModel):
    """Everything known about one physical device."""

    address: str
    name: str
    identifier: str = ""
    services: list[ServiceRecord] = Field(default_factory=list)
    device_info: DeviceInfo = Field(default_factory=DeviceInfo)
    properties: dict[str, dict[str, str]] = Field(default_factory=dict)

    @property
    def ready(self) -> bool:
        return any(service.identifier for service in self.services)

    @property
    def all_identifiers(self) -> list[str]:
        return [service.identifier for service in self.services if service.identifier]

    def get_service(self, protocol: Protocol) -> ServiceRecord | None:
        for service in self.services:
            if service.protocol == protocol:
                return service
        return None

    def add_service(self, service: ServiceRecord) -> None:
        existing = self.get_service(service.protocol)
        if existing is None:
            self.services.append(service)
        else:
            existing.merge(service)
