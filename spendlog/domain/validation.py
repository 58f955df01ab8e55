"""Pure functions for validating user input before an expense is created.

Validators return error messages instead of raising, so the command layer
decides how to report them.
"""

from decimal import Decimal, InvalidOperation

from spendlog.domain.models import Category, CategoryName

# Largest amount whose cents fit in a SQLite INTEGER
MAX_AMOUNT = Decimal(2**63 - 1).scaleb(-2)


def parse_amount(text: str) -> Decimal | None:
    """Parse an amount string.

    Args:
        text: User input, e.g. "25.50".

    Returns:
        Decimal amount, or None if the text is blank or not numeric.
    """
    text = text.strip()
    if not text:
        return None

    try:
        amount = Decimal(text)
    except InvalidOperation:
        return None

    if not amount.is_finite():
        return None
    return amount


def is_valid_amount(text: str) -> bool:
    """Check that the text is a number strictly greater than zero."""
    amount = parse_amount(text)
    return amount is not None and amount > 0


def has_valid_precision(amount: Decimal) -> bool:
    """Check the amount fits in whole cents."""
    try:
        return amount == amount.quantize(Decimal("0.01"))
    except InvalidOperation:
        return False


def validate_expense_input(amount_text: str, description: str) -> str | None:
    """Validate the fields of a new or edited expense.

    Args:
        amount_text: Amount as typed by the user.
        description: Description as typed by the user.

    Returns:
        Error message, or None if the input is valid.
    """
    if not is_valid_amount(amount_text):
        return "Enter a valid amount"

    amount = parse_amount(amount_text)
    if amount is not None and amount > MAX_AMOUNT:
        return "Amount is too large"

    if amount is not None and not has_valid_precision(amount):
        return "Amount cannot have more than two decimal places"

    if not description.strip():
        return "Enter a description"

    return None


def normalize_category(text: str) -> CategoryName:
    """Normalize a category label.

    Blank input becomes Other. A case-insensitive match against a suggested
    category returns its display name. Anything else is kept as typed.
    """
    label = text.strip()
    if not label:
        return Category.OTHER.display_name

    for name in Category.display_names():
        if name.lower() == label.lower():
            return name

    return CategoryName(label)
