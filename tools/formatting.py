from datetime import datetime
import math
from decimal import Decimal, ROUND_HALF_UP

CRORE = 10_000_000
LAKH = 100_000


def group_indian(n: int) -> str:
    """12345678 -> '1,23,45,678' (last three digits, then pairs)."""
    s = str(abs(int(n)))
    sign = "-" if n < 0 else ""
    if len(s) <= 3:
        return sign + s
    head, tail = s[:-3], s[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    pairs.insert(0, head)
    return sign + ",".join(pairs) + "," + tail


def fmt_inr(x):
    try:
        whole = int(Decimal(str(x)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except Exception:
        return "-"
    if whole < 0:
        return "-₹" + group_indian(-whole)
    return "₹" + group_indian(whole)


def fmt_inr_compact(x):
    try:
        x = float(x)
    except (TypeError, ValueError, OverflowError):
        return "-"
    if not math.isfinite(x):
        return "-"
    if x >= CRORE:
        return f"₹{x / CRORE:.1f} Cr"
    if x >= LAKH:
        return f"₹{x / LAKH:.1f} Lac"
    return fmt_inr(x)


def fmt_saved_at(ts):
    if ts is None:
        return "-"
    if isinstance(ts, str):
        try:
            ts = datetime.fromisoformat(ts)
        except ValueError:
            return ts
    return ts.strftime("%d %b %Y, %H:%M")
