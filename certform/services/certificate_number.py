"""
Certificate Number Service - generates the 16-character certificate number.

Algorithm:
1. Join name, registration number and course code with '-'
2. Fold the text into a signed 32-bit hash: hash = hash * 31 + code_unit,
   wrapped to 32 bits after every step (code units are UTF-16, as stored
   by the existing records)
3. Add the current time in milliseconds and a random integer in [0, 100000)
4. Take the absolute value and render it as hexadecimal
5. Right-pad with the repeating filler "A2QTU" to 16 characters,
   truncate to 16, uppercase

The result is not reproducible (clock + randomness) and not collision-free.
It is an identifier printed on the certificate, not a secret.
"""

import random
import time

CERTIFICATE_NUMBER_LENGTH = 16
PAD_FILLER = "A2QTU"
RANDOM_PART_LIMIT = 100000


def _to_int32(value: int) -> int:
    """Wrap an integer to the signed 32-bit range."""
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def _utf16_code_units(text: str):
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        yield int.from_bytes(data[i:i + 2], "little")


def string_hash(text: str) -> int:
    """31-multiplier string hash folded into a signed 32-bit integer."""
    value = 0
    for unit in _utf16_code_units(text):
        value = _to_int32((value << 5) - value + unit)
    return value


def _pad_end(text: str, length: int, filler: str) -> str:
    missing = length - len(text)
    if missing <= 0:
        return text
    repeats = missing // len(filler) + 1
    return text + (filler * repeats)[:missing]


def generate_certificate_number(name: str, reg_no: str, course_code: str,
                                timestamp_ms: int = None, random_part: int = None) -> str:
    """
    Generate a certificate number for a new record.

    Args:
        name: Student's full name
        reg_no: Registration number
        course_code: Course code
        timestamp_ms: Clock value to use instead of the current time
        random_part: Random component to use instead of a fresh one

    Returns:
        16-character uppercase certificate number
    """
    seed = string_hash(f"{name}-{reg_no}-{course_code}")
    if timestamp_ms is None:
        timestamp_ms = time.time_ns() // 1_000_000
    if random_part is None:
        random_part = random.randrange(RANDOM_PART_LIMIT)

    combined = format(abs(seed + timestamp_ms + random_part), "x")
    padded = _pad_end(combined, CERTIFICATE_NUMBER_LENGTH, PAD_FILLER)
    return padded[:CERTIFICATE_NUMBER_LENGTH].upper()
