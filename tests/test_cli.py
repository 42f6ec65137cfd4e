from __future__ import annotations

import json

from manuscript_studio import cli


def test_title_page(capsys):
    assert cli.main(["title-page", "--title", "T", "--author", "A", "--style", "mla"]) == 0
    assert "Professor [Name]" in capsys.readouterr().out


def test_default_style_comes_from_environment(monkeypatch, capsys):
    monkeypatch.setenv("MANUSCRIPT_STYLE", "mla")

    assert cli.main(["title-page", "--title", "T", "--author", "A"]) == 0
    assert "Professor [Name]" in capsys.readouterr().out


def test_format_writes_output_file(tmp_path):
    source = tmp_path / "chapter.txt"
    source.write_text("Hello there.", encoding="utf-8")
    target = tmp_path / "formatted.txt"

    assert cli.main(["format", str(source), "--style", "apa", "--out", str(target)]) == 0
    assert target.read_text(encoding="utf-8") == "    Hello there.\n"


def test_audit_exit_codes(tmp_path, capsys):
    clean = tmp_path / "clean.txt"
    clean.write_text("    Indented paragraph.", encoding="utf-8")
    messy = tmp_path / "messy.txt"
    messy.write_text("Not indented.", encoding="utf-8")

    assert cli.main(["audit", str(clean)]) == 0
    assert cli.main(["audit", str(messy), "--style", "apa"]) == cli.ISSUES_FOUND
    assert "fix:     Not indented." in capsys.readouterr().out


def test_import_prints_json_and_exports(tmp_path, capsys):
    source = tmp_path / "thesis.tex"
    source.write_text("\\chapter{One}First.\\chapter{Two}Second.", encoding="utf-8")
    out_dir = tmp_path / "chapters"

    assert cli.main(["import", str(source), "--json", "--out", str(out_dir)]) == 0

    manifest = json.loads(capsys.readouterr().out)
    assert [entry["title"] for entry in manifest] == ["One", "Two"]
    assert sorted(path.name for path in out_dir.iterdir()) == ["01-one.txt", "02-two.txt", "chapters.json"]


def test_errors_return_nonzero(tmp_path):
    assert cli.main(["format", str(tmp_path / "missing.txt")]) == 1
