import re

SEPARATORS_RE = re.compile(r"[\s\-_]")
CODE_RE = re.compile(r"^([A-Za-z]*)(\d*)$")


def normalize_bill_no(value: str) -> str:
    """
    Canonical form of an invoice number for loose matching.

    ``IAR-0017`` and ``IAR00017`` both become ``iar:17``; anything that is not
    letters followed by digits is just lower-cased with separators removed.
    """
    text = SEPARATORS_RE.sub("", (value or "").strip())
    match = CODE_RE.match(text)
    if not match:
        return text.lower()
    prefix = match.group(1).lower()
    digits = match.group(2)
    number = str(int(digits)) if digits else ""
    return f"{prefix}:{number}"


def bill_no_matches(search: str, bill_no: str) -> bool:
    if not search or not bill_no:
        return False
    if search.lower() == bill_no.lower():
        return True
    return normalize_bill_no(search) == normalize_bill_no(bill_no)
