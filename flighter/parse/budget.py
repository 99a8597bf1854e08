import re
from typing import Optional


# Ordered: the first phrasing that matches decides the budget.
BUDGET_PATTERNS = [
    re.compile(r"under\s*\$?(\d+)"),
    re.compile(r"less\s*than\s*\$?(\d+)"),
    re.compile(r"below\s*\$?(\d+)"),
    re.compile(r"max\s*\$?(\d+)"),
    re.compile(r"maximum\s*\$?(\d+)"),
    re.compile(r"budget\s*(?:of\s*)?\$?(\d+)"),
    re.compile(r"for\s*\$?(\d+)"),
    re.compile(r"\$(\d+)\s*or\s*less"),
    re.compile(r"\$(\d+)\s*max"),
    re.compile(r"(\d+)\s*dollars?\s*max"),
    re.compile(r"(\d+)\s*dollars?\s*or\s*less"),
    re.compile(r"under\s+(\d+)"),
    re.compile(r"for\s+under\s+(\d+)"),
    re.compile(r"within\s*\$?(\d+)"),
    re.compile(r"up\s*to\s*\$?(\d+)"),
    re.compile(r"no\s*more\s*than\s*\$?(\d+)"),
    re.compile(r"cheaper\s*than\s*\$?(\d+)"),
]


def extract_budget(text: str) -> Optional[int]:
    """Return the price ceiling mentioned in ``text``, or None.

    The number is taken as-is; no sanity check on its size.
    """
    lower = (text or "").lower()
    for rx in BUDGET_PATTERNS:
        m = rx.search(lower)
        if m:
            return int(m.group(1))
    return None
