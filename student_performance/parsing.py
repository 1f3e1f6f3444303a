import re
from typing import Optional

# Plain decimal text only: no exponents, underscores, inf or nan
NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")


def parse_number(raw: Optional[str]) -> float:
    """Float value of raw form text, NaN when it isn't a plain decimal number."""
    if raw is None:
        return float("nan")
    text = raw.strip()
    if not NUMBER_RE.match(text):
        return float("nan")
    return float(text)
