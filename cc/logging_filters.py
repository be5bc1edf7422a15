import logging
import re

EMAIL_RE = re.compile(r'([A-Za-z0-9._%+-]+)@([A-Za-z0-9.-]+\.[A-Za-z]{2,})')
# international format only, so ISO dates in messages stay readable
PHONE_RE = re.compile(r'\+\d[\d\s().-]{7,}\d')
NON_DIGIT_RE = re.compile(r'\D')


def _mask_phone(m) -> str:
    digits = NON_DIGIT_RE.sub("", m.group(0))
    return f"PHONE:****{digits[-4:]}"


class RedactPIIFilter(logging.Filter):
    """Masks promoter e-mails and phone numbers before records reach a handler."""

    def filter(self, record):
        msg = str(record.getMessage())
        msg = EMAIL_RE.sub(lambda m: f"{m.group(1)[0]}***@{m.group(2)}", msg)
        msg = PHONE_RE.sub(_mask_phone, msg)
        record.msg = msg
        record.args = ()
        return True
