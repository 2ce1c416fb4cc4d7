"""Phone number normalization to E.164 for storage and comparison."""

import phonenumbers

DEFAULT_REGION = "US"


def normalize_phone(raw: str, default_region: str | None = DEFAULT_REGION) -> str | None:
    """Parse and return E.164 form of the number, or None if invalid.

    Use default_region when the input has no leading + (e.g. "202 555 1234"
    with default_region "US"). If the number already includes a country
    code, default_region is ignored.
    """
    if not raw or not str(raw).strip():
        return None
    raw = str(raw).strip()
    try:
        parsed = phonenumbers.parse(raw, default_region)
    except phonenumbers.NumberParseException:
        return None
    if not phonenumbers.is_valid_number(parsed):
        return None
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)
