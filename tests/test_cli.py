"""Tests for the recolour-tool command line (recolour.__main__)."""

import json
import sys
from pathlib import Path

import pytest
from PIL import Image
from recolour.__main__ import main


@pytest.fixture(autouse=True)
def isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test from a fake repo root so no stray .env or RECOLOUR_* leaks in."""
    for name in ('RECOLOUR_BOX', 'RECOLOUR_PALETTE', 'RECOLOUR_RESAMPLER', 'RECOLOUR_LOG_LEVEL'):
        monkeypatch.delenv(name, raising=False)
    (tmp_path / '.git').mkdir()
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> int:
    monkeypatch.setattr(sys, 'argv', ['recolour-tool', *argv])
    try:
        main()
    except SystemExit as e:
        return int(e.code or 0)
    return 0


@pytest.fixture
def image(isolated: Path) -> Path:
    path = isolated / 'in.png'
    Image.new('RGB', (300, 50), (255, 0, 0)).save(path)
    return path


class TestConvert:
    def test_text_output(self, monkeypatch, capsys, image, isolated):
        assert _run(monkeypatch, 'convert', str(image), str(isolated / 'out.png')) == 0
        out = capsys.readouterr().out
        assert '→ 285×48 in box 285×160' in out
        assert 'census: red4:100.0%' in out
        with Image.open(isolated / 'out.png') as img:
            assert img.size == (285, 48)

    def test_json_output_with_options(self, monkeypatch, capsys, image, isolated):
        code = _run(
            monkeypatch,
            'convert',
            str(image),
            str(isolated / 'out.png'),
            '--box',
            '30x30',
            '--palette',
            'greyscale',
            '--resampler',
            'nearest',
            '--json',
        )
        assert code == 0
        obj = json.loads(capsys.readouterr().out)
        assert obj['dimensions'] == {'width': 30, 'height': 5}
        assert obj['resampler'] == 'nearest'
        assert obj['usage'][0]['name'] == 'grey2'

    def test_env_file_sets_defaults(self, monkeypatch, capsys, image, isolated):
        (isolated / '.env').write_text('RECOLOUR_BOX=60x60\n')
        assert _run(monkeypatch, 'convert', str(image), str(isolated / 'out.png'), '--json') == 0
        captured = capsys.readouterr()
        assert json.loads(captured.out)['dimensions'] == {'width': 60, 'height': 10}
        assert 'recolour-tool: loaded' in captured.err

    def test_missing_image(self, monkeypatch, capsys, isolated):
        assert _run(monkeypatch, 'convert', str(isolated / 'nope.png'), str(isolated / 'out.png')) == 1
        assert 'Error: image not found' in capsys.readouterr().err

    def test_unreadable_image(self, monkeypatch, capsys, isolated):
        bad = isolated / 'bad.png'
        bad.write_text('nope')
        assert _run(monkeypatch, 'convert', str(bad), str(isolated / 'out.png')) == 1
        assert 'not a readable image' in capsys.readouterr().err

    def test_invalid_box(self, monkeypatch, capsys, image, isolated):
        assert _run(monkeypatch, 'convert', str(image), str(isolated / 'out.png'), '--box', '0x160') == 1
        assert 'Error:' in capsys.readouterr().err

    def test_unknown_palette(self, monkeypatch, capsys, image, isolated):
        assert _run(monkeypatch, 'convert', str(image), str(isolated / 'out.png'), '--palette', 'cga') == 1
        assert 'Unknown palette: cga' in capsys.readouterr().err


class TestOtherCommands:
    def test_plan(self, monkeypatch, capsys):
        assert _run(monkeypatch, 'plan', '300', '50', '--box', '285x160') == 0
        assert capsys.readouterr().out.strip() == '285x48'

    def test_plan_default_box(self, monkeypatch, capsys):
        assert _run(monkeypatch, 'plan', '100', '400') == 0
        assert capsys.readouterr().out.strip() == '40x160'

    def test_plan_bad_source(self, monkeypatch, capsys):
        assert _run(monkeypatch, 'plan', '0', '10') == 1
        assert 'source dimensions must be positive' in capsys.readouterr().err

    def test_resamplers(self, monkeypatch, capsys):
        assert _run(monkeypatch, 'resamplers') == 0
        out = capsys.readouterr().out
        for name in ('bilinear', 'nearest', 'pillow'):
            assert name in out

    def test_palettes(self, monkeypatch, capsys):
        assert _run(monkeypatch, 'palettes') == 0
        out = capsys.readouterr().out
        assert 'default    32 colours' in out
        assert 'greyscale  8 colours' in out

    def test_no_command(self, monkeypatch, capsys):
        assert _run(monkeypatch) == 1
