"""Input contract checks run at the scoring boundary"""

import math
from datetime import datetime
from numbers import Real
from typing import Sequence

from altscore_gateway.domain.models import AccountProfile, Transaction
from altscore_gateway.domain.exceptions import InvalidInputError

TRANSACTION_TYPES = frozenset({"credit", "debit"})


def _is_number(value) -> bool:
    # bool is a Real subclass but never a valid amount
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def validate_reference_time(reference_time) -> None:
    if not isinstance(reference_time, datetime):
        raise InvalidInputError(f"reference_time must be a datetime, got {type(reference_time).__name__}")


def validate_profile(profile) -> None:
    """Reject a profile whose account age is not a non-negative integer (None allowed)"""
    if not isinstance(profile, AccountProfile):
        raise InvalidInputError(f"profile must be an AccountProfile, got {type(profile).__name__}")

    age = profile.account_age_months
    if age is None:
        return
    if isinstance(age, bool) or not isinstance(age, int):
        raise InvalidInputError(f"account_age_months must be an integer, got {age!r}")
    if age < 0:
        raise InvalidInputError(f"account_age_months must be >= 0, got {age}")


def validate_transactions(transactions: Sequence[Transaction]) -> None:
    """
    Check every transaction against the scoring contract.

    Raises:
        InvalidInputError: naming the offending index and field
    """
    if not isinstance(transactions, (list, tuple)):
        raise InvalidInputError(
            f"transactions must be a list or tuple, got {type(transactions).__name__}"
        )

    for index, txn in enumerate(transactions):
        if not isinstance(txn, Transaction):
            raise InvalidInputError(f"transactions[{index}] is not a Transaction")
        if not isinstance(txn.date, datetime):
            raise InvalidInputError(f"transactions[{index}].date must be a datetime, got {txn.date!r}")
        if txn.type not in TRANSACTION_TYPES:
            raise InvalidInputError(f"transactions[{index}].type must be credit or debit, got {txn.type!r}")
        if not _is_number(txn.amount):
            raise InvalidInputError(f"transactions[{index}].amount must be a finite number, got {txn.amount!r}")
        if txn.amount < 0:
            raise InvalidInputError(f"transactions[{index}].amount must be >= 0, got {txn.amount}")
        if not _is_number(txn.balance):
            raise InvalidInputError(f"transactions[{index}].balance must be a finite number, got {txn.balance!r}")
        if not isinstance(txn.category, str):
            raise InvalidInputError(f"transactions[{index}].category must be a string, got {txn.category!r}")
