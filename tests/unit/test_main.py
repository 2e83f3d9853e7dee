"""Unit tests for the replay entry point."""

from __future__ import annotations

import io
import json

import pytest

from decision_engine.main import main


class TestReplay:
    def test_valid_file(self, tmp_path, sample_response, capsys):
        path = tmp_path / "response.txt"
        path.write_text(sample_response, encoding="utf-8")

        code = main(["--equity", "10000", str(path)])

        assert code == 0
        out = json.loads(capsys.readouterr().out)
        assert out["narrative"].startswith("BTC is pressing")
        assert [d["symbol"] for d in out["decisions"]] == ["BTCUSDT", "ETHUSDT"]

    def test_rejected_prints_narrative(self, tmp_path, sample_response, capsys):
        path = tmp_path / "response.txt"
        path.write_text(sample_response, encoding="utf-8")

        # 50000 USDT on BTC exceeds 10x of 1000 equity
        code = main(["--equity", "1000", str(path)])

        assert code == 1
        assert "BTC is pressing" in capsys.readouterr().out

    def test_reads_stdin(self, monkeypatch, capsys):
        text = 'Wait.\n[{"symbol": "SOLUSDT", "action": "wait", "reasoning": "Chop"}]'
        monkeypatch.setattr("sys.stdin", io.StringIO(text))

        code = main(["--equity", "500"])

        assert code == 0
        assert json.loads(capsys.readouterr().out)["decisions"][0]["action"] == "wait"

    def test_no_array(self, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("Model refused to answer."))
        assert main(["--equity", "500"]) == 1

    @pytest.mark.parametrize("equity", ["0", "-5", "nan", "inf", "lots"])
    def test_bad_equity_exits_with_usage(self, equity, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--equity", equity])
        assert exc_info.value.code == 2
        assert "--equity" in capsys.readouterr().err
