"""
Helper utilities
"""

import re


def normalize_phone(phone) -> str:
    """Digits only; 10-digit Indian numbers get the 91 country code"""
    digits = re.sub(r'\D', '', str(phone or '').strip())
    if len(digits) == 10:
        digits = '91' + digits
    return digits


def title_case(text: str) -> str:
    """Capitalize every word and collapse whitespace"""
    words = re.sub(r'\s+', ' ', text or '').strip().split(' ')
    return ' '.join(word[:1].upper() + word[1:].lower() for word in words if word)


def truncate(text: str, limit: int, suffix: str = '...') -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + suffix


def mask_phone(phone: str) -> str:
    """Mask phone number for logs"""
    if not phone or len(phone) < 8:
        return phone
    return f"{phone[:4]}****{phone[-4:]}"
