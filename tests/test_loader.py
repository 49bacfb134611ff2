"""Tests for trade, payout and checklist file loaders."""

import json
import logging
import tempfile
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from tradejournal.analytics import aggregate, latest_payout_date, payout_summary
from tradejournal.io import load_checklist, load_payouts, load_trades
from tradejournal.models import Payout


@pytest.fixture
def data_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestLoadTrades:
    """JSON and CSV trade files."""

    def test_json_list(self, data_dir: Path):
        path = data_dir / "trades.json"
        path.write_text(json.dumps([{"date": "2024-03-01", "pnl": 10}, "junk", {"date": "2024-03-02"}]))

        rows = load_trades(path)

        assert rows == [{"date": "2024-03-01", "pnl": 10}, {"date": "2024-03-02"}]

    def test_json_object(self, data_dir: Path):
        path = data_dir / "trades.json"
        path.write_text(json.dumps({"trades": [{"date": "2024-03-01", "pnl": 10}]}))

        assert len(load_trades(path)) == 1

    def test_csv_header_normalised(self, data_dir: Path):
        path = data_dir / "trades.csv"
        path.write_text("Date,PnL,Symbol\n2024-03-01,12.5,ES\n2024-03-01,-2.5,NQ\n2024-03-02,,ES\n")

        daily = aggregate(load_trades(path))

        assert daily["2024-03-01"].net_pnl == 10
        assert daily["2024-03-02"].count == 1
        assert daily["2024-03-02"].net_pnl == 0

    def test_errors(self, data_dir: Path):
        with pytest.raises(ValueError, match="not found"):
            load_trades(data_dir / "missing.json")

        bad_suffix = data_dir / "trades.txt"
        bad_suffix.write_text("x")
        with pytest.raises(ValueError, match="Unsupported"):
            load_trades(bad_suffix)

        bad_json = data_dir / "trades.json"
        bad_json.write_text("{not json")
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_trades(bad_json)

        scalar = data_dir / "scalar.json"
        scalar.write_text("42")
        with pytest.raises(ValueError, match="list of records"):
            load_trades(scalar)


class TestLoadPayouts:
    """Payout files are validated into Payout models."""

    def test_payouts_key(self, data_dir: Path):
        path = data_dir / "payouts.json"
        path.write_text(json.dumps({"payouts": [{"date": "2024-03-05", "amount": 500}]}))

        assert load_payouts(path) == [Payout(date=date(2024, 3, 5), amount=Decimal("500"))]

    def test_csv_with_optional_columns(self, data_dir: Path):
        path = data_dir / "payouts.csv"
        path.write_text("Date,Amount,Source,Notes\n2024-02-20,500.50,Apex,\n2024-03-05T10:00:00,750,,first\n")

        payouts = load_payouts(path)

        assert payouts == [
            Payout(date=date(2024, 2, 20), amount=Decimal("500.50"), source="Apex"),
            Payout(date=date(2024, 3, 5), amount=Decimal("750"), notes="first"),
        ]

    def test_invalid_rows_are_skipped(self, data_dir: Path, caplog):
        path = data_dir / "payouts.json"
        path.write_text(json.dumps([
            {"date": "2024-03-05", "amount": 500},
            {"date": "someday", "amount": 100},
            {"amount": 100},
            {"date": "2024-03-06", "amount": "lots"},
            {"date": "2024-03-07"},
            {"date": "2024-03-08", "amount": 250, "source": 42},
        ]))

        with caplog.at_level(logging.WARNING):
            payouts = load_payouts(path)

        assert [p.date for p in payouts] == [date(2024, 3, 5), date(2024, 3, 8)]
        assert payouts[1].source == "42"
        assert caplog.text.count("Skipping invalid payout row") == 4

    def test_models_feed_payout_engines(self, data_dir: Path):
        path = data_dir / "payouts.csv"
        path.write_text("date,amount\n2024-02-20,500\n2024-03-05,750\n")

        payouts = load_payouts(path)

        assert latest_payout_date(payouts) == date(2024, 3, 5)
        assert payout_summary(payouts, date(2024, 3, 14)).total == Decimal("1250")


class TestLoadChecklist:
    """Checklist files in each supported shape."""

    def test_json_mapping(self, data_dir: Path):
        path = data_dir / "checklist.json"
        path.write_text(json.dumps({"Bias set": True, "Levels": False, "News": "yes"}))

        assert load_checklist(path) == {"Bias set": True, "Levels": False, "News": True}

    def test_json_nested_list(self, data_dir: Path):
        path = data_dir / "checklist.json"
        path.write_text(json.dumps({"checklist": [
            {"label": "Bias set", "done": True},
            {"label": "", "done": True},
            {"label": "Levels", "done": 0},
        ]}))

        assert load_checklist(path) == {"Bias set": True, "Levels": False}

    def test_csv(self, data_dir: Path):
        path = data_dir / "checklist.csv"
        path.write_text("label,done\nBias set,x\nLevels,\nNews,true\n")

        assert load_checklist(path) == {"Bias set": True, "Levels": False, "News": True}
