import json

import pytest

from autopass.cli import main


def run(capsys, *argv):
    code = main(list(argv))
    out, err = capsys.readouterr()
    return code, out, err


def test_generate_prints_and_saves(capsys, history_path):
    code, out, _ = run(capsys, "--history-file", str(history_path), "generate", "-l", "20")
    assert code == 0
    password = out.strip()
    assert len(password) == 20
    saved = json.loads(history_path.read_text(encoding="utf-8"))
    assert saved[0]["password"] == password
    assert saved[0]["mode"] == "random"


def test_generate_with_hint_and_count(capsys, history_path):
    code, out, _ = run(
        capsys, "--history-file", str(history_path),
        "generate", "--hint", "my dog", "-l", "10", "-n", "3",
    )
    assert code == 0
    lines = out.splitlines()
    assert len(lines) == 3
    assert all(line.startswith("mydog") and len(line) == 10 for line in lines)


def test_generate_without_classes(capsys, history_path):
    code, out, _ = run(
        capsys, "--history-file", str(history_path), "generate",
        "--no-uppercase", "--no-numbers", "--no-symbols", "--no-save", "-l", "30",
    )
    assert code == 0
    assert out.strip().isalpha() and out.strip().islower()
    assert not history_path.exists()


def test_generate_show_strength(capsys, history_path):
    code, out, _ = run(capsys, "--history-file", str(history_path), "generate", "-s", "--no-save")
    password, strength = out.rstrip("\n").split("\t")
    assert len(password) == 16
    assert strength.endswith("/100)")


def test_generate_too_short_is_an_error(capsys, history_path):
    code, out, err = run(capsys, "--history-file", str(history_path), "generate", "-l", "2")
    assert code == 2
    assert out == ""
    assert err.startswith("error: ")


def test_blank_hint_is_an_error(capsys, history_path):
    code, _, err = run(capsys, "--history-file", str(history_path), "generate", "--hint", "  ")
    assert code == 2
    assert "Please enter a hint" in err


def test_score(capsys):
    code, out, _ = run(capsys, "score", "aaaaaaaaaa")
    assert code == 0
    assert out.strip() == "Fair (32/100)"


def test_history_list_clear_export(capsys, history_path, tmp_path):
    run(capsys, "--history-file", str(history_path), "generate", "-n", "2")

    code, out, _ = run(capsys, "--history-file", str(history_path), "history", "list")
    assert code == 0
    assert out.startswith(" 1. ")
    assert len(out.splitlines()) == 2

    export_dir = tmp_path / "out"
    export_dir.mkdir()
    code, out, _ = run(capsys, "--history-file", str(history_path), "history", "export", str(export_dir))
    assert code == 0
    exported = list(export_dir.glob("passwords_*.txt"))
    assert len(exported) == 1

    code, out, _ = run(capsys, "--history-file", str(history_path), "history", "clear")
    assert out.strip() == "All passwords cleared"
    code, out, _ = run(capsys, "--history-file", str(history_path), "history", "clear")
    assert out.strip() == "History is already empty"


def test_history_export_empty_is_an_error(capsys, history_path, tmp_path):
    code, _, err = run(capsys, "--history-file", str(history_path), "history", "export", str(tmp_path))
    assert code == 2
    assert "No passwords to export" in err


def test_history_file_from_environment(capsys, monkeypatch, tmp_path):
    target = tmp_path / "env_history.json"
    monkeypatch.setenv("AUTOPASS_HISTORY_FILE", str(target))
    run(capsys, "generate")
    assert target.exists()


def test_command_is_required(capsys):
    with pytest.raises(SystemExit):
        main([])


def test_history_export_to_missing_directory(capsys, history_path, tmp_path):
    run(capsys, "--history-file", str(history_path), "generate")
    code, _, err = run(
        capsys, "--history-file", str(history_path), "history", "export", str(tmp_path / "nope"),
    )
    assert code == 2
    assert err.startswith("error: Cannot export")


def test_encrypted_history_round_trip(capsys, history_path, tmp_path):
    key_file = tmp_path / "history.key"
    opts = ("--history-file", str(history_path), "--history-key-file", str(key_file))

    _, out, _ = run(capsys, *opts, "generate")
    password = out.strip()
    assert key_file.exists()
    assert password not in history_path.read_text(encoding="utf-8")

    code, out, _ = run(capsys, *opts, "history", "list")
    assert code == 0
    assert password in out

    # without the key the encrypted file is refused, not replaced
    before = history_path.read_text(encoding="utf-8")
    code, _, err = run(capsys, "--history-file", str(history_path), "generate")
    assert code == 2
    assert "key is required" in err
    assert history_path.read_text(encoding="utf-8") == before


def test_history_key_file_from_environment(capsys, monkeypatch, history_path, tmp_path):
    key_file = tmp_path / "env.key"
    monkeypatch.setenv("AUTOPASS_HISTORY_KEY_FILE", str(key_file))
    _, out, _ = run(capsys, "--history-file", str(history_path), "generate")
    assert key_file.exists()
    assert out.strip() not in history_path.read_text(encoding="utf-8")


def test_undecodable_history_lists_as_empty(capsys, history_path):
    history_path.write_bytes(b"\xff\xfe\x00garbage")
    code, out, _ = run(capsys, "--history-file", str(history_path), "history", "list")
    assert code == 0
    assert out.strip() == "No passwords generated yet"
