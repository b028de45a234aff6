import re
from typing import Optional

CNIC_PATTERN = re.compile(r"^\d{5}-\d{7}-\d{1}$")

def validate_cnic(value: Optional[str]) -> Optional[str]:
    """Pakistani CNIC, format NNNNN-NNNNNNN-N"""
    if value is None:
        return value
    value = value.strip()
    if not CNIC_PATTERN.match(value):
        raise ValueError("CNIC must be in format: 12345-1234567-1")
    return value

def normalize_plate(value: str) -> str:
    return value.strip().upper()
