"""
Tenant code and database name generation.

A tenant code is the company name reduced to [A-Z0-9], cut to 8 characters,
followed by a random 4-digit suffix: "Acme, Inc." -> "ACMEINC4821".
"""
import random
import re
from datetime import datetime

from hrplatform.domain.value_objects import TenantCode
from hrplatform.shared.utils.generators import utc_now

CODE_PREFIX_LENGTH = 8
SUFFIX_MIN = 1000
SUFFIX_MAX = 9999

_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")


class TenantCodeAllocator:
    """Pure code generator; inject a seeded Random for deterministic output"""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def generate(self, company_name: str) -> str:
        prefix = _NON_ALPHANUMERIC.sub("", company_name or "").upper()[:CODE_PREFIX_LENGTH]
        code = f"{prefix}{self.rng.randint(SUFFIX_MIN, SUFFIX_MAX)}"
        return TenantCode(code).value

    @staticmethod
    def database_name_for(code: str, now: datetime | None = None) -> str:
        """tenant_<code lower-cased>_<UTC YYYYMMDDHHMMSS>"""
        timestamp = (now or utc_now()).strftime("%Y%m%d%H%M%S")
        return f"tenant_{code.lower()}_{timestamp}"
