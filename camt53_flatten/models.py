#!/usr/bin/env python3

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

DEFAULT_IBAN = "IBAN"
ZERO_AMOUNT = "0"


@dataclass
class StatementInfo:
    iban: str = DEFAULT_IBAN
    entries_count: int = 0


@dataclass
class FlatEntry:
    """One flattened statement row.

    Amounts stay the literal text of the statement, exactly one of `debit` and
    `credit` carries it while the other is "0".
    """

    FIELDS: ClassVar[tuple[str, ...]] = (
        "account",
        "date",
        "description",
        "debit",
        "credit",
        "ntry_type",
    )

    account: str
    date: str
    description: str
    debit: str = ZERO_AMOUNT
    credit: str = ZERO_AMOUNT
    ntry_type: str = ""

    def as_row(self) -> dict[str, str]:
        return {name: getattr(self, name) for name in self.FIELDS}

