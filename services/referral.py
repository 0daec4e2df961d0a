import string

REFERRAL_PREFIX = "NC-"
REFERRAL_CODE_LENGTH = 6

_BASE36 = string.digits + string.ascii_uppercase


def _to_int32(n: int) -> int:
    n &= 0xFFFFFFFF
    return n - (1 << 32) if n & 0x80000000 else n


def _utf16_units(text: str):
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def _base36(n: int) -> str:
    if n == 0:
        return "0"
    digits = []
    while n:
        n, rem = divmod(n, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def email_hash(email: str) -> int:
    """Rolling ``h * 31 + c`` hash over UTF-16 code units.

    The shift wraps at 32 bits but the running value does not, so codes that
    were already issued stay stable.
    """
    acc = 0
    for unit in _utf16_units(email):
        acc = _to_int32(_to_int32(acc) << 5) - acc + unit
    return acc


def generate_referral_code(email: str) -> str:
    """Display/tracking token for a referrer. Deterministic, not collision-free."""
    digest = _base36(abs(email_hash(email)))
    return f"{REFERRAL_PREFIX}{digest[:REFERRAL_CODE_LENGTH]}"
