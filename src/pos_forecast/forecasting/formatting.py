"""Currency and date formatting for forecast output.

Amounts are grouped with dots and dates use Indonesian month abbreviations,
matching how the back office displays rupiah figures.
"""

from datetime import date

# Indonesian month abbreviations (January through December)
MONTH_ABBREVIATIONS = [
    "Jan", "Feb", "Mar", "Apr", "Mei", "Jun",
    "Jul", "Agu", "Sep", "Okt", "Nov", "Des"
]

# Indonesian day names (Monday through Sunday)
DAY_NAMES = [
    "Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu"
]


def format_amount(amount: float) -> str:
    """Format a whole-unit amount with dot thousands separators.

    Examples:
        >>> format_amount(1400000)
        '1.400.000'
    """
    return f"{round(amount):,}".replace(",", ".")


def format_currency(amount: float, symbol: str = "Rp") -> str:
    """Format an amount as a currency total like 'Rp 1.400.000'."""
    return f"{symbol} {format_amount(amount)}"


def format_date_short(d: date) -> str:
    """Format date in short form like '12 Okt'."""
    return f"{d.day} {MONTH_ABBREVIATIONS[d.month - 1]}"


def format_day_name(d: date) -> str:
    """Return the Indonesian day name, e.g. 'Sabtu'."""
    return DAY_NAMES[d.weekday()]
