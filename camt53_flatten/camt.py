#!/usr/bin/env python3

from __future__ import annotations

import logging
import re
from copy import deepcopy
from pathlib import Path

from lxml import etree

from camt53_flatten.elements import (
    children,
    find_child,
    find_path,
    is_tag,
    require_child,
    require_path,
    text_of,
)
from camt53_flatten.errors import FormatError, MissingFieldError
from camt53_flatten.models import ZERO_AMOUNT, FlatEntry, StatementInfo

logger = logging.getLogger(__name__)

CREDIT = "CRDT"
DEBIT = "DBIT"

UNKNOWN_PARTNER = "unknown_partner"
UNKNOWN_PARTY_IBAN = "unknown_iban"
MISSING_ACCOUNT_IBAN = "UNKNOWN IBAN"

_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_file(path: str | Path) -> list[FlatEntry]:
    logger.info(f"processing file: {path}")
    with open(path, "rb") as f:
        xml_content = f.read()
    root = etree.fromstring(xml_content)
    return parse_statement(root)


def parse_statement(root: etree._Element) -> list[FlatEntry]:
    """Flatten the `BkToCstmrStmt/Stmt` of a CAMT.053 document.

    Entries are bound to the IBAN seen so far in the scan, so an `Ntry` that
    comes before `Acct` keeps the placeholder IBAN.
    """
    if is_tag(root, "BkToCstmrStmt"):
        customer_statement = root
    else:
        customer_statement = require_child(
            root, "BkToCstmrStmt", "no BkToCstmrStmt in document"
        )
    stmt = require_child(customer_statement, "Stmt", "no Stmt in BkToCstmrStmt")

    stmt_info = StatementInfo()
    flat_entries: list[FlatEntry] = []
    for child in children(stmt):
        if is_tag(child, "ElctrncSeqNb"):
            stmt_info.entries_count = _parse_integer(text_of(child), "ElctrncSeqNb")

        elif is_tag(child, "Acct"):
            stmt_info.iban = text_of(
                require_path(child, "Id", "IBAN", message="no IBAN in Acct")
            )

        elif is_tag(child, "Ntry"):
            logger.debug(f"Parsing Ntry for {stmt_info.iban=}")
            flat_entries.extend(ntry_to_flat_entries(child, stmt_info.iban))

    logger.info(
        f"Statement {stmt_info.iban} (sequence {stmt_info.entries_count}): "
        f"{len(flat_entries)} records"
    )
    return flat_entries


def ntry_to_flat_entries(ntry: etree._Element, iban: str) -> list[FlatEntry]:
    amount = text_of(require_child(ntry, "Amt", "no Amt in Ntry"))
    booking_date = text_of(
        require_path(ntry, "BookgDt", "Dt", message="no Dt in BookgDt")
    )
    description = text_of(
        require_child(ntry, "AddtlNtryInf", "no AddtlNtryInf in Ntry")
    )
    indicator = text_of(require_child(ntry, "CdtDbtInd", "no CdtDbtInd in Ntry"))

    template = FlatEntry(
        account=iban,
        date=booking_date,
        description=description,
        ntry_type=indicator,
    )
    if indicator == CREDIT:
        template.credit = amount
    else:
        template.debit = amount

    flat_entries = []
    for ntry_dtls in children(ntry):
        if not is_tag(ntry_dtls, "NtryDtls"):
            continue
        for tx_dtls in children(ntry_dtls):
            if is_tag(tx_dtls, "TxDtls"):
                flat_entries.append(txdtls_to_flat_entry(template, tx_dtls))

    if not flat_entries:
        flat_entries.append(template)
    logger.debug(f"Converted Ntry to {flat_entries=}")
    return flat_entries


def txdtls_to_flat_entry(template: FlatEntry, tx_dtls: etree._Element) -> FlatEntry:
    flat_entry = deepcopy(template)
    operation: str | None = None
    amount: str | None = None

    for child in children(tx_dtls):
        if is_tag(child, "Amt"):
            amount = text_of(child)

        elif is_tag(child, "CdtDbtInd"):
            operation = text_of(child)

        elif is_tag(child, "RltdPties"):
            partner_name, partner_iban = _related_party(child)
            flat_entry.description = f"{partner_name} - {partner_iban}"

        elif is_tag(child, "RmtInf"):
            ustrd = require_child(child, "Ustrd", "RmtInf without Ustrd")
            flat_entry.description += text_of(ustrd)

    if amount is None:
        raise MissingFieldError("amount")
    if operation is None:
        raise MissingFieldError("operation type")

    if operation == DEBIT:
        flat_entry.debit = amount
        flat_entry.credit = ZERO_AMOUNT
    else:
        flat_entry.credit = amount
        flat_entry.debit = ZERO_AMOUNT
    return flat_entry


def _related_party(related_parties: etree._Element) -> tuple[str, str]:
    # the debtor wins when both parties are given
    partner_name = UNKNOWN_PARTNER
    partner_iban = UNKNOWN_PARTY_IBAN
    for party, account in (("Cdtr", "CdtrAcct"), ("Dbtr", "DbtrAcct")):
        party_element = find_child(related_parties, party)
        if party_element is None:
            continue
        partner_name = text_of(
            require_child(party_element, "Nm", f"{party} without Nm")
        )
        iban = find_path(related_parties, account, "Id", "IBAN")
        partner_iban = MISSING_ACCOUNT_IBAN if iban is None else text_of(iban)
    return partner_name, partner_iban


def _parse_integer(text: str, name: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise FormatError(f"{name} is not an integer: {text!r}")
    return int(text)
