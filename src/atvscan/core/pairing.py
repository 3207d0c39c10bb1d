from __future__ import annotations

from collections.abc import Mapping

from atvscan.const import PROTOCOLS, PairingRequirement, Protocol


def pairing_requirement(
    protocol: Protocol, attributes: Mapping[str, str]
) -> PairingRequirement:
    spec = PROTOCOLS[protocol]
    if spec.pairing_flag is not None and spec.pairing_flag in attributes:
        return PairingRequirement.OPTIONAL
    return spec.pairing
