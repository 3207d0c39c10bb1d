from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RawAnnouncement:
    """One resolved mDNS service instance, as handed over by a transport."""

    name: str
    service_type: str
    port: int
    addresses: tuple[str, ...] = ()
    attributes: tuple[str, ...] = ()

    @property
    def address(self) -> str:
        if not self.addresses:
            return ""
        for address in self.addresses:
            if ":" not in address:
                return address
        return self.addresses[0]
