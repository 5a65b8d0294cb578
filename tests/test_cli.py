import json

import pytest

from bandbrot.__main__ import parse_arguments, parse_bounds, parse_complex, parse_pair
from bandbrot.complex import Complex
from bandbrot.settings import DEFAULTS, load_settings


def test_parse_pair():
    assert parse_pair("800x600", 'x', int) == (800, 600)
    assert parse_pair("1.5,-2", ',', float) == (1.5, -2.0)
    assert parse_pair("800", 'x', int) is None
    assert parse_pair("axb", 'x', int) is None
    assert parse_pair("10x", 'x', int) is None


def test_parse_bounds_requires_positive():
    assert parse_bounds("640x480") == (640, 480)
    assert parse_bounds("0x480") is None
    assert parse_bounds("-1.95,1.15") is None


def test_parse_complex():
    assert parse_complex("-1.95,1.15") == Complex(-1.95, 1.15)
    assert parse_complex("800x800") is None


def test_no_arguments_uses_defaults(capsys):
    options, verbose = parse_arguments([], settings=dict(DEFAULTS))
    assert options['bounds'] == (800, 800)
    assert options['upper_left'] == Complex(-1.95, 1.15)
    assert options['max_iter'] == 256
    assert options['pixel_delta'] == 0.0031415
    assert options['workers'] is None
    assert not verbose
    assert "default arguments" in capsys.readouterr().out


def test_both_positionals():
    options, _ = parse_arguments(["640x480", "-0.5,0.75"], settings=dict(DEFAULTS))
    assert options['bounds'] == (640, 480)
    assert options['upper_left'] == Complex(-0.5, 0.75)


def test_single_positional_bounds_or_corner():
    options, _ = parse_arguments(["320x200"], settings=dict(DEFAULTS))
    assert options['bounds'] == (320, 200)
    assert options['upper_left'] == Complex(-1.95, 1.15)

    options, _ = parse_arguments(["-1.5,1.0"], settings=dict(DEFAULTS))
    assert options['bounds'] == (800, 800)
    assert options['upper_left'] == Complex(-1.5, 1.0)


def test_options_override_settings():
    options, verbose = parse_arguments(
        ["--iterations", "1000", "--workers", "3", "--pixel-delta", "0.01", "-v"],
        settings=dict(DEFAULTS),
    )
    assert options['max_iter'] == 1000
    assert options['workers'] == 3
    assert options['pixel_delta'] == 0.01
    assert verbose


@pytest.mark.parametrize('argv', [
    ["nonsense"],
    ["800x800", "nonsense"],
    ["abc", "-1.95,1.15"],
    ["800x800", "-1.95,1.15", "extra"],
    ["--iterations", "0"],
    ["--workers", "0"],
    ["--pixel-delta", "-1"],
    ["--bogus"],
])
def test_bad_arguments_exit(argv):
    with pytest.raises(SystemExit):
        parse_arguments(argv, settings=dict(DEFAULTS))


def test_load_settings_merges_over_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({'max_iterations': 512, 'colour': 'red'}))
    settings = load_settings(str(path))
    assert settings['max_iterations'] == 512
    assert settings['width'] == DEFAULTS['width']
    assert 'colour' not in settings


def test_load_settings_missing_file(tmp_path, capsys):
    settings = load_settings(str(tmp_path / "missing.json"))
    assert settings == DEFAULTS
    assert "Warning" in capsys.readouterr().out


def test_load_settings_malformed(tmp_path, capsys):
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    assert load_settings(str(path)) == DEFAULTS
    assert "Warning" in capsys.readouterr().out


def test_packaged_settings_match_defaults():
    assert load_settings() == DEFAULTS
