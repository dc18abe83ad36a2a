import pytest

from image_banner.cli import main


@pytest.fixture
def no_config(tmp_path):
    return str(tmp_path / "absent.json")


def test_raw_output(make_image, no_config, capsys):
    path = make_image((4, 2), (0, 0, 0))
    code = main([str(path), "--raw", "--max-width", "2", "--aspect-ratio", "1.0", "--config", no_config])
    assert code == 0
    out = capsys.readouterr().out
    assert out == "${AnsiBackground.DEFAULT}${AnsiColor.BLACK}@${AnsiColor.BLACK}@${AnsiColor.DEFAULT}\n"


def test_invert_flag(make_image, no_config, capsys):
    path = make_image((1, 1), (0, 0, 0))
    assert main([str(path), "--raw", "--invert", "--config", no_config]) == 0
    assert capsys.readouterr().out.startswith("${AnsiBackground.BLACK}${AnsiColor.BLACK} ")


def test_missing_image(tmp_path, no_config, capsys):
    assert main([str(tmp_path / "nope.png"), "--config", no_config]) == 2
    assert "Image not found" in capsys.readouterr().err


def test_no_image_at_all(no_config):
    assert main(["--config", no_config]) == 2


def test_invalid_width(make_image, no_config):
    assert main([str(make_image()), "--max-width", "0", "--config", no_config]) == 2


def test_broken_image_gives_empty_banner(tmp_path, no_config, capsys):
    path = tmp_path / "broken.png"
    path.write_bytes(b"garbage")
    assert main([str(path), "--raw", "--config", no_config]) == 1
    assert capsys.readouterr().out == ""


def test_config_supplies_defaults(make_image, tmp_path, capsys):
    import json
    path = make_image((10, 10), (255, 255, 255))
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"banner": {"image": str(path), "max_width": 5, "aspect_ratio": 0.2}}))
    assert main(["--raw", "--config", str(cfg)]) == 0
    assert capsys.readouterr().out.count("\n") == 1


def test_no_invert_overrides_config(make_image, tmp_path, capsys):
    import json
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"banner": {"invert": True}}))
    path = make_image((1, 1), (0, 0, 0))
    assert main([str(path), "--raw", "--no-invert", "--config", str(cfg)]) == 0
    assert capsys.readouterr().out.startswith("${AnsiBackground.DEFAULT}${AnsiColor.BLACK}@")
    assert main([str(path), "--raw", "--config", str(cfg)]) == 0
    assert capsys.readouterr().out.startswith("${AnsiBackground.BLACK}")


def test_invert_flags_are_exclusive(make_image, no_config):
    with pytest.raises(SystemExit):
        main([str(make_image()), "--invert", "--no-invert", "--config", no_config])


def test_unreadable_config_is_reported_after_logging_setup(make_image, tmp_path, caplog):
    import logging
    cfg = tmp_path / "cfg.json"
    cfg.write_text("{broken")
    with caplog.at_level(logging.WARNING):
        assert main([str(make_image()), "--raw", "--config", str(cfg)]) == 0
    messages = [(r.name, r.getMessage()) for r in caplog.records if "Ignoring unreadable config" in r.getMessage()]
    assert len(messages) == 1
    assert messages[0][0] == "image_banner.cli"
