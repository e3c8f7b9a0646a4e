"""Shared regular expressions for address and domain shape checks.

All patterns are meant for ``fullmatch``.
"""

import re

# RFC 5322 dot-atom local part (no quoted strings)
_LOCAL_PART = r"[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+)*"
_DOMAIN_LABEL = r"[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?"
_DOMAIN = r"(?:" + _DOMAIN_LABEL + r"\.)+[a-zA-Z]{2,}"

EMAIL_PATTERN = re.compile(_LOCAL_PART + "@" + _DOMAIN)
DOMAIN_PATTERN = re.compile(_DOMAIN)
TLD_PATTERN = re.compile(r"[a-zA-Z]{2,}")

# Separators accepted in free-text bulk input
BULK_SEPARATOR_PATTERN = re.compile(r"[\r\n,;]+")

MAX_EMAIL_LENGTH = 254
MAX_LOCAL_PART_LENGTH = 64
MAX_DOMAIN_LENGTH = 255
MAX_LABEL_LENGTH = 63
