"""Shared fixtures for the statement analyzer tests.

Upload staging and log files default to directories relative to the working
tree. Every test gets its own temporary directories instead so runs never
leave files behind or see each other's state.
"""

from __future__ import annotations

import textwrap
from datetime import date
from pathlib import Path

import pytest

from config import Config
from extractors.categorizer import classify
from extractors.financial_rules import Polarity, Transaction


@pytest.fixture(autouse=True)
def _isolate_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(Config, "UPLOAD_DIR", tmp_path / "uploads")
    monkeypatch.setattr(Config, "LOG_DIR", tmp_path / "logs")


def _dedent(s: str) -> str:
    return textwrap.dedent(s).lstrip("\n")


@pytest.fixture
def scenario_csv() -> str:
    return _dedent(
        """
        Date,Description,Amount,Type
        2025-06-01,Salary,5200,credit
        2025-06-03,Grocery Store,150,debit
        """
    )


@pytest.fixture
def make_txn():
    """Build a canonical transaction with the classifier's category."""

    def _make(
        description: str,
        amount: float,
        polarity: Polarity = Polarity.DEBIT,
        on: date = date(2025, 3, 15),
    ) -> Transaction:
        return Transaction(
            date=on,
            description=description,
            amount=amount,
            polarity=polarity,
            category=classify(description),
        )

    return _make
