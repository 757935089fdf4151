"""Display formatting for money, percentages and labels.

Formatting is lossy (fixed precision) and never touches the values passed in.
"""

MISSING = "—"
NOT_AVAILABLE = "N/A"


def format_money(value: float | None) -> str:
    """Chilean peso style: "$1.234.567", no decimals, "—" when absent."""
    if value is None:
        return MISSING
    digits = f"{abs(value):,.0f}".replace(",", ".")
    sign = "-" if round(value) < 0 else ""
    return f"{sign}${digits}"


def format_pct(value: float | None) -> str:
    """One decimal with a percent sign, "—" when absent."""
    if value is None:
        return MISSING
    return f"{value:.1f}%"


def truncate_text(text: str | None, max_length: int = 20) -> str:
    if not text or not isinstance(text, str):
        return NOT_AVAILABLE
    return text[:max_length] + "..." if len(text) > max_length else text


def first_word(text: str | None) -> str:
    if not text or not isinstance(text, str):
        return NOT_AVAILABLE
    words = text.split()
    return words[0] if words else NOT_AVAILABLE
