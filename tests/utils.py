#!/usr/bin/env python3

import random
import string
from collections.abc import Sequence

from lxml import etree

CAMT_NAMESPACE = "urn:iso:std:iso:20022:tech:xsd:camt.053.001.02"


def random_string(size: int, letters: bool = False, digits: bool = False):
    population = ""
    if letters:
        population += string.ascii_letters
    if digits:
        population += string.digits
    return "".join(random.choices(population=population, k=size))


def fake_iban():
    return "DE" + random_string(size=20, digits=True)


def make_document(*stmt_children: str, namespace: str | None = CAMT_NAMESPACE) -> str:
    xmlns = f' xmlns="{namespace}"' if namespace else ""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f"<Document{xmlns}>"
        "<BkToCstmrStmt>"
        "<GrpHdr><MsgId>MSG-1</MsgId></GrpHdr>"
        f"<Stmt><Id>STMT-1</Id>{''.join(stmt_children)}</Stmt>"
        "</BkToCstmrStmt>"
        "</Document>"
    )


def parse_document(xml: str) -> etree._Element:
    return etree.fromstring(xml.encode("utf-8"))


def make_acct(iban: str) -> str:
    return f"<Acct><Id><IBAN>{iban}</IBAN></Id><Ccy>EUR</Ccy></Acct>"


def make_ntry(
    amount: str | None = "100.00",
    indicator: str | None = "CRDT",
    booking_date: str | None = "2023-01-31",
    description: str | None = "descr",
    details: Sequence[Sequence[str]] = (),
) -> str:
    """An `Ntry`, `details` holds the `TxDtls` of each `NtryDtls` wrapper."""
    parts = []
    if amount is not None:
        parts.append(f'<Amt Ccy="EUR">{amount}</Amt>')
    if indicator is not None:
        parts.append(f"<CdtDbtInd>{indicator}</CdtDbtInd>")
    parts.append("<Sts>BOOK</Sts>")
    if booking_date is not None:
        parts.append(f"<BookgDt><Dt>{booking_date}</Dt></BookgDt>")
    parts.append("<ValDt><Dt>2023-01-31</Dt></ValDt>")
    for tx_dtls in details:
        parts.append(f"<NtryDtls>{''.join(tx_dtls)}</NtryDtls>")
    if description is not None:
        parts.append(f"<AddtlNtryInf>{description}</AddtlNtryInf>")
    return f"<Ntry>{''.join(parts)}</Ntry>"


def make_tx_dtls(
    amount: str | None = "42.50",
    indicator: str | None = "DBIT",
    related_parties: str = "",
    remittance: str = "",
) -> str:
    parts = ["<Refs><EndToEndId>NOTPROVIDED</EndToEndId></Refs>"]
    if amount is not None:
        parts.append(f'<Amt Ccy="EUR">{amount}</Amt>')
    if indicator is not None:
        parts.append(f"<CdtDbtInd>{indicator}</CdtDbtInd>")
    parts.append(related_parties)
    parts.append(remittance)
    return f"<TxDtls>{''.join(parts)}</TxDtls>"


def make_related_parties(
    cdtr: str | None = None,
    cdtr_iban: str | None = None,
    dbtr: str | None = None,
    dbtr_iban: str | None = None,
) -> str:
    parts = []
    if dbtr is not None:
        parts.append(f"<Dbtr><Nm>{dbtr}</Nm></Dbtr>")
    if dbtr_iban is not None:
        parts.append(f"<DbtrAcct><Id><IBAN>{dbtr_iban}</IBAN></Id></DbtrAcct>")
    if cdtr is not None:
        parts.append(f"<Cdtr><Nm>{cdtr}</Nm></Cdtr>")
    if cdtr_iban is not None:
        parts.append(f"<CdtrAcct><Id><IBAN>{cdtr_iban}</IBAN></Id></CdtrAcct>")
    return f"<RltdPties>{''.join(parts)}</RltdPties>"


def make_remittance(ustrd: str) -> str:
    return f"<RmtInf><Ustrd>{ustrd}</Ustrd></RmtInf>"
