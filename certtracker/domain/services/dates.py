from datetime import date

from dateutil.relativedelta import relativedelta


def add_months(start: date, months: int) -> date:
    """Calendar month arithmetic, clamping to the end of the target month."""
    return start + relativedelta(months=months)


def compute_expiration(obtained_date: date, validity_months: int) -> date:
    return add_months(obtained_date, validity_months)
