"""Phone number normalization for the M-Pesa C2B flow.

Accepts:
- 07XXXXXXXX (10 characters, local format)
- +2547XXXXXXXX (13 characters)
- 2547XXXXXXXX (already canonical)

Returns the MSISDN without a leading "+", e.g. 254712345678.
"""

COUNTRY_CODE = "254"
MIN_PHONE_LENGTH = 10


class InvalidPhoneNumber(ValueError):
    def __init__(self, detail: str) -> None:
        super().__init__(f"The phonenumber provided is invalid. {detail}")
        self.detail = detail


def normalize_msisdn(phone: str) -> str:
    """Map a caller-supplied phone number onto the MSISDN format M-Pesa expects.

    Only inputs that are empty or shorter than 10 characters are rejected.
    Anything else that does not match a known local or "+" prefixed shape
    is returned unchanged.
    """
    if not phone or len(phone) < MIN_PHONE_LENGTH:
        raise InvalidPhoneNumber(f"{phone} is less than 10 digits or is empty")

    if len(phone) == 10 and phone.startswith("0"):
        return COUNTRY_CODE + phone[1:]

    if len(phone) == 13 and phone.startswith("+"):
        return phone[1:]

    return phone
