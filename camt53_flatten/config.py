#!/usr/bin/env python3

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import yaml

from camt53_flatten.exporters import BeancountExporter

logger = logging.getLogger(__name__)

FORMATS = ("csv", "beancount")


@dataclass
class Config:
    output: str = "output.csv"
    delimiter: str = ";"
    format: str = "csv"
    ledger_account: str = "Assets:Bank"
    currency: str = "EUR"
    ledger_accounts: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_yaml(cls, fname) -> Config:
        with open(fname) as f:
            raw = yaml.safe_load(f)
        logger.debug(f"Loaded {raw=} from {fname}")
        return cls.from_mapping({} if raw is None else raw)

    @classmethod
    def from_mapping(cls, raw: dict[str, Any]) -> Config:
        if not isinstance(raw, dict):
            raise TypeError(f"{raw=} was not of type `dict`")
        unknown = set(raw) - {"output", "delimiter", "format", "ledger"}
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")

        ledger = raw.get("ledger") or {}
        if not isinstance(ledger, dict):
            raise TypeError(f"{ledger=} was not of type `dict`")
        unknown = set(ledger) - {"account", "currency", "accounts"}
        if unknown:
            raise ValueError(f"Unknown ledger configuration keys: {sorted(unknown)}")

        config = cls()
        for key in ("output", "delimiter", "format"):
            if key in raw:
                setattr(config, key, _as_str(key, raw[key]))
        if "account" in ledger:
            config.ledger_account = _as_str("ledger.account", ledger["account"])
        if "currency" in ledger:
            config.currency = _as_str("ledger.currency", ledger["currency"])

        accounts = ledger.get("accounts") or {}
        if not isinstance(accounts, dict):
            raise TypeError(f"{accounts=} was not of type `dict`")
        config.ledger_accounts = {
            _as_str("ledger.accounts key", iban): _as_str(f"ledger.accounts.{iban}", acc)
            for iban, acc in accounts.items()
        }

        config.validate()
        return config

    def validate(self) -> None:
        if self.format not in FORMATS:
            raise ValueError(f"{self.format=} is not one of {FORMATS}")
        if len(self.delimiter) != 1:
            raise ValueError(f"{self.delimiter=} must be a single character")

    def beancount_exporter(self) -> BeancountExporter:
        return BeancountExporter(
            account=self.ledger_account,
            currency=self.currency,
            accounts=self.ledger_accounts,
        )


def _as_str(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name}={value!r} was not of type `str`")
    return value
