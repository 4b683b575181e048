#!/usr/bin/env python3

from __future__ import annotations

import csv
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation

from beancount.core import flags
from beancount.core.data import EMPTY_SET, Amount, Posting, Transaction, new_metadata
from beancount.parser import printer

from camt53_flatten.errors import FormatError
from camt53_flatten.models import FlatEntry

logger = logging.getLogger(__name__)


def write_csv(filename, flat_entries: Sequence[FlatEntry], delimiter: str = ";") -> None:
    with open(filename, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(
            f, fieldnames=FlatEntry.FIELDS, delimiter=delimiter, lineterminator="\n"
        )
        # the header comes with the first record, no records means an empty file
        if flat_entries:
            writer.writeheader()
        for flat_entry in flat_entries:
            writer.writerow(flat_entry.as_row())
    logger.info(f"Wrote {len(flat_entries)} records to {filename}")


@dataclass
class BeancountExporter:
    """Writes flat entries as single-posting beancount transactions.

    The posting goes to the account mapped to the statement IBAN in
    `accounts`, or to `account`. Credits are positive, debits negative.
    """

    account: str = "Assets:Bank"
    currency: str = "EUR"
    accounts: Mapping[str, str] = field(default_factory=dict)
    flag: str = flags.FLAG_OKAY

    def account_for(self, iban: str) -> str:
        return self.accounts.get(iban, self.account)

    def signed_amount(self, flat_entry: FlatEntry) -> Decimal:
        return _parse_amount(flat_entry.credit) - _parse_amount(flat_entry.debit)

    def to_transaction(self, flat_entry: FlatEntry, fname: str, lineno: int) -> Transaction:
        try:
            booking_date = date.fromisoformat(flat_entry.date[:10])
        except ValueError as e:
            raise FormatError(f"booking date is not an ISO date: {flat_entry.date!r}") from e

        posting = Posting(
            account=self.account_for(flat_entry.account),
            units=Amount(self.signed_amount(flat_entry), self.currency),
            cost=None,
            price=None,
            flag=None,
            meta=None,
        )
        meta = new_metadata(
            filename=fname,
            lineno=lineno,
            kvlist={"iban": flat_entry.account, "ntry_type": flat_entry.ntry_type},
        )
        transaction = Transaction(
            meta=meta,
            date=booking_date,
            flag=self.flag,
            payee=None,
            narration=flat_entry.description,
            tags=EMPTY_SET,
            links=EMPTY_SET,
            postings=[posting],
        )
        logger.debug(f"Converted to {transaction=}")
        return transaction

    def write(self, filename, flat_entries: Sequence[FlatEntry]) -> None:
        # nothing is written unless every entry converts
        transactions = [
            self.to_transaction(flat_entry, fname=str(filename), lineno=i + 1)
            for i, flat_entry in enumerate(flat_entries)
        ]
        with open(filename, "w", encoding="utf-8") as f:
            for transaction in transactions:
                f.write(printer.format_entry(transaction))
                f.write("\n")
        logger.info(f"Wrote {len(transactions)} transactions to {filename}")


def _parse_amount(amount: str) -> Decimal:
    try:
        return Decimal(amount)
    except InvalidOperation as e:
        raise FormatError(f"amount is not a decimal number: {amount!r}") from e
