import requests

from ingestion import cli


class FakeResp:
    def __init__(self, json_data, status_code=200):
        self._json = json_data
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"status {self.status_code}")

    def json(self):
        return self._json


BLOCKS = {
    "0x4b7": {"transactions": [
        {"hash": "0xH1", "from": "0xAAA", "to": "0xBBB", "value": "0x1", "gasPrice": "0x2"},
    ]},
    "0x4b8": None,
}


def _fake_post(url, json, timeout):
    blk = json["params"][0]
    if blk not in BLOCKS:
        return FakeResp({}, status_code=500)
    return FakeResp({"jsonrpc": "2.0", "id": 1, "result": BLOCKS[blk]})


def test_cli_prints_history(tmp_path, monkeypatch, capsys):
    monkeypatch.delenv("RPC_URL_OVERRIDE", raising=False)
    monkeypatch.setattr(requests, "post", _fake_post)

    rc = cli.main(["--address", "0xAAA", "--address", "0xCCC",
                   "--block", "1207", "--block", "1208",
                   "--config", str(tmp_path / "missing.yaml")])

    out = capsys.readouterr().out
    assert rc == 0
    assert "Current block 1208" in out
    assert "Transactions for address 0xAAA: 1" in out
    assert "Hash: 0xH1" in out
    assert "Gas Price: 0x2" in out
    assert "Transactions for address 0xCCC: 0" in out


def test_cli_reports_failed_block(tmp_path, monkeypatch, capsys):
    monkeypatch.delenv("RPC_URL_OVERRIDE", raising=False)
    monkeypatch.setattr(requests, "post", _fake_post)

    rc = cli.main(["--address", "0xAAA", "--block", "1207", "--block", "5",
                   "--config", str(tmp_path / "missing.yaml")])

    captured = capsys.readouterr()
    assert rc == 1
    assert "ERROR block 5" in captured.err
    assert "Current block 1207" in captured.out


def test_cli_bad_config(tmp_path, monkeypatch, capsys):
    monkeypatch.delenv("RPC_URL_OVERRIDE", raising=False)
    cfg = tmp_path / "config.yaml"
    cfg.write_text('rpc:\n  url: "http://plain.example"\n')
    rc = cli.main(["--address", "0xAAA", "--block", "1", "--config", str(cfg)])
    assert rc == 2
    assert "Configuration error" in capsys.readouterr().err
