import os
import sys

import pytest

import droidprep
import droidprep_utils
from plugin_version import DPPluginVersion

from conftest import write_file


def test_rules_match_whole_relative_path():
    rules = droidprep.convert_rules(["*.map", "docs/*"])

    assert droidprep._in_rules("js/index.js.map", rules)
    assert droidprep._in_rules("docs\\readme.txt", rules)
    assert not droidprep._in_rules("js/index.map.js", rules)


def test_copy_files_with_exclude_rules(tmp_path):
    src = tmp_path / "src"
    write_file(src / "a.png", "a")
    write_file(src / "sub" / "b.png", "b")
    write_file(src / "sub" / "c.txt", "c")

    droidprep.copy_files_with_config({"from": "src", "to": "out", "exclude": ["*.png"]},
                                     str(tmp_path), str(tmp_path))

    assert not (tmp_path / "out" / "a.png").exists()
    assert not (tmp_path / "out" / "sub" / "b.png").exists()
    assert (tmp_path / "out" / "sub" / "c.txt").is_file()


def test_help_lists_commands(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["droidprep"])

    with pytest.raises(SystemExit):
        droidprep.main()

    out = capsys.readouterr().out
    assert "prepare" in out
    assert "version" in out


def test_pushd_restores_directory(tmp_path):
    previous = os.getcwd()

    with pytest.raises(RuntimeError):
        with droidprep.pushd(str(tmp_path)):
            assert os.getcwd() == str(tmp_path.resolve())
            raise RuntimeError()

    assert os.getcwd() == previous


def test_run_cmd_failure_raises():
    with pytest.raises(droidprep.DPPluginError, match="return code: 3"):
        droidprep.CMDRunner.run_cmd("exit 3", verbose=True)


def test_parse_plugins_registers_builtin_commands():
    plugins = droidprep.parse_plugins()

    assert plugins["prepare"].plugin_name() == "prepare"
    assert plugins["version"] is DPPluginVersion


def test_main_prints_version(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["droidprep", "-v"])

    with pytest.raises(SystemExit) as exc:
        droidprep.main()

    assert exc.value.code == 0
    assert capsys.readouterr().out.strip() == droidprep.DROIDPREP_VERSION


def test_main_reports_unknown_command(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["droidprep", "build"])

    with pytest.raises(SystemExit) as exc:
        droidprep.main()

    assert exc.value.code == 1
    assert "argument 'build' not found" in capsys.readouterr().out


def test_main_reports_plugin_errors(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr(sys, "argv", ["droidprep", "prepare", "-s", str(tmp_path)])

    with pytest.raises(SystemExit) as exc:
        droidprep.main()

    assert exc.value.code == 1
    assert "found no project" in capsys.readouterr().out


def test_remove_empty_dirs_stops_at_root(tmp_path):
    root = tmp_path / "src"
    (root / "a" / "b" / "c").mkdir(parents=True)
    write_file(root / "a" / "keep.txt", "x")

    droidprep_utils.remove_empty_dirs(str(root / "a" / "b" / "c"), str(root))

    assert not (root / "a" / "b").exists()
    assert (root / "a" / "keep.txt").is_file()


def test_sed_to_replaces_first_match_only(tmp_path):
    src = write_file(tmp_path / "A.java", "package a.b;\n// package x.y;\n")
    dst = tmp_path / "out" / "A.java"

    droidprep_utils.sed_to(str(src), r"package [\w\.]*;", "package c.d;", str(dst))

    assert dst.read_text() == "package c.d;\n// package x.y;\n"


def test_version_plugin(app_project, capsys):
    DPPluginVersion().run(["-s", str(app_project)])

    out = capsys.readouterr().out
    assert "droidprep %s" % droidprep.DROIDPREP_VERSION in out
    assert "android platform 5.1.1" in out


def test_version_plugin_without_version_file(app_project):
    os.remove(str(app_project / "platforms" / "android" / "cordova" / "version"))

    with pytest.raises(droidprep.DPPluginError, match="Couldn't find version info"):
        DPPluginVersion().run(["-s", str(app_project)])
