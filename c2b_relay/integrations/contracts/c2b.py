"""
C2B contracts.

Defines the request structures for the M-Pesa C2B simulate flow:
- PushRequest: what callers POST to /c2b
- C2BRequest: what is sent to the Daraja simulate endpoint

Both the mock and the real M-Pesa clients accept a PushRequest and build the
same C2BRequest, so responses stay consistent across environments.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, StrictStr, model_validator

from c2b_relay.utils.config_loader import MpesaConfig


class PushRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    phone: StrictStr = ""
    amount: StrictStr = ""

    @model_validator(mode="before")
    @classmethod
    def _bind_like_json_decoder(cls, data: Any) -> Any:
        """Match keys case-insensitively and treat null as an empty value.

        An exact-case key wins over a differently cased duplicate.
        """
        if data is None:
            return {}
        if not isinstance(data, dict):
            return data

        bound: Dict[str, Any] = {}
        for key, value in data.items():
            name = str(key).lower()
            if name in cls.model_fields and (key == name or name not in data):
                bound[name] = "" if value is None else value
        return bound


@dataclass(frozen=True)
class C2BRequest:
    short_code: int
    command_id: str
    amount: str
    msisdn: str
    bill_ref_number: str = ""

    @classmethod
    def from_push(cls, push: PushRequest, config: MpesaConfig) -> "C2BRequest":
        return cls(
            short_code=config.short_code,
            command_id=config.command_id,
            amount=push.amount,
            msisdn=push.phone,
            bill_ref_number=config.bill_ref_number,
        )

    def to_payload(self) -> Dict[str, Any]:
        """Daraja field names."""
        data = asdict(self)
        return {
            "ShortCode": data["short_code"],
            "CommandID": data["command_id"],
            "Amount": data["amount"],
            "Msisdn": data["msisdn"],
            "BillRefNumber": data["bill_ref_number"],
        }
