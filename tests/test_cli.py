"""Tests for the mfckeys command line."""

import pytest
from conftest import build_dump
from mfckeys import cli, config, keyfiles
from mfckeys.cli import main


@pytest.fixture
def dump_file(tmp_path, dump_1k):
    path = tmp_path / "mycard.mfd"
    path.write_bytes(dump_1k)
    return path


class TestGuiMode:
    def test_writes_a_and_b_files(self, tmp_path, dump_file, capsys):
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        assert main(["-m", "-o", str(out_dir), str(dump_file)]) == 0

        a_file = out_dir / "adeadbeef.dump"
        b_file = out_dir / "bdeadbeef.dump"
        assert a_file.read_bytes()[:6] == bytes.fromhex("A00011223300")
        assert len(a_file.read_bytes()) == 96
        assert len(b_file.read_bytes()) == 96

        out = capsys.readouterr().out
        assert "| 1K|            deadbeef             |" in out
        assert f"Wrote keys to: {a_file}" in out
        assert f"Wrote keys to: {b_file}" in out

    def test_quiet_skips_table(self, tmp_path, dump_file, capsys):
        assert main(["-m", "-q", "-o", str(tmp_path), str(dump_file)]) == 0
        out = capsys.readouterr().out
        assert "|sec|" not in out
        assert "Wrote keys to:" in out


class TestProxmarkMode:
    def test_4k_writes_480_byte_bin(self, tmp_path, capsys):
        dump = tmp_path / "card4k.bin"
        dump.write_bytes(build_dump(4096))
        assert main(["--proxmark", "-o", str(tmp_path), str(dump)]) == 0
        assert len((tmp_path / "deadbeef.bin").read_bytes()) == 480

    def test_eml_input(self, tmp_path, dump_1k):
        eml = tmp_path / "card.eml"
        eml.write_text("\n".join(dump_1k[i:i + 16].hex() for i in range(0, 1024, 16)))
        assert main(["-p", "-o", str(tmp_path), str(eml)]) == 0
        assert len((tmp_path / "deadbeef.bin").read_bytes()) == 192


class TestErrors:
    def test_wrong_size_writes_nothing(self, tmp_path, capsys):
        bad = tmp_path / "bad.mfd"
        bad.write_bytes(bytes(500))
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        assert main(["-m", "-o", str(out_dir), str(bad)]) == 1
        assert list(out_dir.iterdir()) == []
        assert "is not the correct size" in capsys.readouterr().err

    def test_missing_input_file(self, tmp_path, capsys):
        assert main(["-p", "-o", str(tmp_path), str(tmp_path / "nope.mfd")]) == 1
        assert "Can not open file" in capsys.readouterr().err

    def test_unwritable_output(self, tmp_path, dump_file, capsys):
        assert main(["-p", "-o", str(tmp_path / "missing-dir"), str(dump_file)]) == 1
        assert "Can not write the file" in capsys.readouterr().err

    def test_mode_required(self, dump_file):
        with pytest.raises(SystemExit) as exc:
            main([str(dump_file)])
        assert exc.value.code == 2

    def test_modes_are_exclusive(self, dump_file):
        with pytest.raises(SystemExit) as exc:
            main(["-m", "-p", str(dump_file)])
        assert exc.value.code == 2

    def test_input_required(self):
        with pytest.raises(SystemExit) as exc:
            main(["-m"])
        assert exc.value.code == 2


class TestFlags:
    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["-v"])
        assert exc.value.code == 0
        assert config.VERSION in capsys.readouterr().out

    def test_debug_flag(self, tmp_path, dump_file):
        assert main(["-p", "-d", "-q", "-o", str(tmp_path), str(dump_file)]) == 0

    def test_unknown_log_level_falls_back(self, tmp_path, dump_file, monkeypatch, caplog):
        monkeypatch.setattr(config, "LOG_LEVEL", "loud")
        assert main(["-p", "-q", "-o", str(tmp_path), str(dump_file)]) == 0
        assert "Unknown log level 'loud'" in caplog.text


class TestAllocationFailure:
    def test_encode_out_of_memory(self, tmp_path, dump_file, monkeypatch, capsys):
        def no_memory(table, mode):
            raise MemoryError()

        monkeypatch.setattr(cli, "encode", no_memory)
        assert main(["-m", "-q", "-o", str(tmp_path), str(dump_file)]) == 1
        assert "Can not allocate enough memory!" in capsys.readouterr().err
        assert not (tmp_path / "adeadbeef.dump").exists()

    def test_read_out_of_memory(self, tmp_path, dump_file, monkeypatch, capsys):
        def no_memory(*args, **kwargs):
            raise MemoryError()

        monkeypatch.setattr(keyfiles, "open", no_memory, raising=False)
        assert main(["-p", "-o", str(tmp_path), str(dump_file)]) == 1
        assert "Can not allocate enough memory!" in capsys.readouterr().err
