import pytest

from dotfont import cli
from dotfont.io.parser import parse_array
from dotfont.text.pipeline import RasterizationPipeline

from .conftest import FakeRasterizer


@pytest.fixture
def fake_pipeline(monkeypatch):
    monkeypatch.setattr(cli, "RasterizationPipeline",
                        lambda: RasterizationPipeline(FakeRasterizer()))


def test_generate_to_stdout(fake_pipeline, capsys):
    assert cli.main(["generate", "Fake", "-W", "3", "-H", "8", "-c", "AB", "-f", "hex"]) == 0
    out, err = capsys.readouterr()
    assert out.splitlines() == ["00 FF 00 00", "00 FF 00 00"]
    assert "Rendering 2 chars" in err


def test_generate_with_config_file(fake_pipeline, tmp_path, capsys):
    config = tmp_path / "opts.json"
    config.write_text('{"width": 4, "height": 5, "spacing": 0}', encoding="utf-8")
    assert cli.main(["generate", "Fake", "--config", str(config), "-c", "A", "-f", "hex"]) == 0
    assert capsys.readouterr().out.strip() == "00 00 1F 00"


def test_generate_binary_dynamic(fake_pipeline, tmp_path, capsys):
    out = tmp_path / "font.bin"
    assert cli.main(["generate", "Fake", "-c", "AB", "--dynamic", "-f", "bin", "-o", str(out)]) == 0
    assert out.read_bytes() == b"\xff\xff"
    assert (tmp_path / "font.bin.widths.bin").read_bytes() == b"\x01\x01"
    assert (tmp_path / "font.bin.offsets.bin").read_bytes() == b"\x00\x00\x00\x00\x01\x00\x00\x00"
    assert "Created:" in capsys.readouterr().out


def test_binary_needs_output_path(fake_pipeline, capsys):
    assert cli.main(["generate", "Fake", "-c", "A", "-f", "bin"]) == 1
    assert "requires an output file" in capsys.readouterr().err


def test_import_and_convert(tmp_path, capsys):
    data = tmp_path / "font.c"
    data.write_text("const unsigned char f[] = { 0x00, 0x7E, 0x00, 0x18, 0x18, 0x00 };",
                    encoding="utf-8")
    assert cli.main(["import", str(data), "-c", "AB", "-H", "8", "-W", "3",
                     "--convert", "--name", "demo"]) == 0
    out, err = capsys.readouterr()
    assert "font_demo_2x8_widths[]" in out
    data_block = out.split("_data[] = {", 1)[1]
    assert parse_array("{" + data_block) == [0x7E, 0x18, 0x18]
    assert "Converted to dynamic width" in err


def test_import_error_reports_and_fails(tmp_path, capsys):
    data = tmp_path / "font.c"
    data.write_text("{1, 2, 3}", encoding="utf-8")
    assert cli.main(["import", str(data), "-c", "AB", "-H", "8", "-W", "2"]) == 1
    assert "Expected 4 bytes" in capsys.readouterr().err


def test_missing_file_fails(tmp_path, capsys):
    assert cli.main(["import", str(tmp_path / "nope.c"), "-c", "A", "-H", "8", "-W", "1"]) == 1
    assert capsys.readouterr().err.startswith("Error:")


def test_preview_goes_to_stderr_when_code_is_on_stdout(fake_pipeline, capsys):
    assert cli.main(["generate", "Fake", "-W", "3", "-H", "8", "-c", "A",
                     "-f", "hex", "--preview", "A"]) == 0
    out, err = capsys.readouterr()
    assert out.splitlines() == ["00 FF 00 00"]
    assert "Preview:" in err and "'A' (U+0041)" in err


def test_preview_only_prints_to_stdout(fake_pipeline, capsys):
    assert cli.main(["generate", "Fake", "-c", "A", "--preview", "A", "--preview-only"]) == 0
    assert "Preview:" in capsys.readouterr().out


def test_import_preview_with_output_file(tmp_path, capsys):
    data = tmp_path / "font.c"
    data.write_text("{0x7E}", encoding="utf-8")
    out = tmp_path / "out.py"
    assert cli.main(["import", str(data), "-c", "A", "-H", "8", "-W", "1",
                     "-f", "python", "-o", str(out), "--preview", "A"]) == 0
    assert "Preview:" in capsys.readouterr().out
    assert parse_array(out.read_text(encoding="utf-8")) == [0x7E]
