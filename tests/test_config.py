"""Tests for configuration loading and schema."""

import json
import pytest
from pathlib import Path
import tempfile
import yaml
from pydantic import ValidationError

from slide_export_toolkit.config import (
    ExportConfig,
    SubSlideSpec,
    SpecialSlide,
    load_config,
    parse_config,
    save_config,
    create_default_config,
)


def test_defaults_applied():
    """Test that optional fields get the installer defaults."""
    config = parse_config({"devServerUrl": "http://localhost:5173", "totalSlides": 4})
    assert config.hide_ui_elements is True
    assert config.animation_wait_time == 2000
    assert config.slide_transition_wait_time == 1000
    assert config.sub_slide_transition_wait_time == 2000
    assert (config.viewport.width, config.viewport.height) == (1920, 1080)
    assert config.selectors.progress_bar == '[role="progressbar"]'
    assert config.selectors.main_content == "main"
    assert config.slides_with_sub_slides == {}


def test_unknown_fields_ignored():
    config = parse_config({"devServerUrl": "http://x", "totalSlides": 1, "somethingElse": True})
    assert not hasattr(config, "somethingElse")


@pytest.mark.parametrize("data", [
    {"totalSlides": 3},
    {"devServerUrl": "http://localhost:3000"},
    {"devServerUrl": "", "totalSlides": 3},
    {"devServerUrl": "http://localhost:3000", "totalSlides": 0},
])
def test_missing_required_fields(data):
    """Test that URL and slide count are required."""
    with pytest.raises(ValueError, match="missing required fields"):
        parse_config(data)


def test_negative_slide_count_rejected():
    with pytest.raises(ValidationError):
        parse_config({"devServerUrl": "http://x", "totalSlides": -2})


def test_config_is_immutable(config):
    with pytest.raises(ValidationError):
        config.total_slides = 10


def test_sub_slide_spec_numbering():
    """Test the two numbering conventions."""
    sub = SubSlideSpec(type="subSlide", max=2)
    assert sub.indices() == [0, 1, 2]
    assert [sub.display_number(i) for i in sub.indices()] == [1, 2, 3]
    assert sub.count == 3

    step = SubSlideSpec(type="step", max=3)
    assert step.indices() == [1, 2, 3]
    assert [step.display_number(i) for i in step.indices()] == [1, 2, 3]
    assert step.count == 3


def test_sub_slide_spec_rejects_unknown_type():
    with pytest.raises(ValidationError):
        SubSlideSpec(type="fragment", max=2)


def test_out_of_range_keys_are_kept(config_data):
    """Slide indices beyond totalSlides are not a validation error."""
    config_data["slidesWithSubSlides"]["7"] = {"type": "step", "max": 3}
    config = parse_config(config_data)
    assert config.sub_slides_for(7).type == "step"


def test_special_for_defaults():
    config = parse_config({
        "devServerUrl": "http://x",
        "totalSlides": 20,
        "specialSlides": {"14": {"typewriterEffect": True}},
    })
    special = config.special_for(14)
    assert special.typewriter_effect is True
    assert special.effective_wait_time == 3000
    assert config.special_for(3).typewriter_effect is False


def test_integer_keys_from_yaml_are_normalized():
    config = parse_config({
        "devServerUrl": "http://x",
        "totalSlides": 3,
        "slidesWithSubSlides": {2: {"type": "step", "max": 3}},
    })
    assert config.sub_slides_for(2) is not None


def test_load_config_json(config_data):
    """Test loading config from JSON file."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
        json.dump(config_data, f)
        temp_path = f.name

    try:
        config = load_config(temp_path)
        assert config.dev_server_url == "http://localhost:3000"
        assert config.total_slides == 3
        assert config.sub_slides_for(1).max == 2
    finally:
        Path(temp_path).unlink()


def test_load_config_yaml(config_data):
    """Test loading config from YAML file."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        yaml.dump(config_data, f)
        temp_path = f.name

    try:
        config = load_config(temp_path)
        assert config.total_slides == 3
    finally:
        Path(temp_path).unlink()


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "pdf-export.config.json")


def test_load_config_defaults_to_working_directory(tmp_path, monkeypatch, config_data):
    (tmp_path / "pdf-export.config.json").write_text(json.dumps(config_data), encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert load_config().total_slides == 3


def test_load_config_malformed_json(tmp_path):
    path = tmp_path / "pdf-export.config.json"
    path.write_text('{"devServerUrl": "http://x",', encoding="utf-8")
    with pytest.raises(ValueError, match="Malformed"):
        load_config(path)


def test_load_config_unsupported_suffix(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError, match="Unsupported"):
        load_config(path)


def test_save_writes_camel_case(tmp_path):
    """Test that saved files use the installer's key spelling."""
    config = create_default_config(
        dev_server_url="http://localhost:3000",
        total_slides=5,
        slides_with_sub_slides={"2": SubSlideSpec(type="step", max=3)},
        special_slides={"4": SpecialSlide(typewriter_effect=True, typewriter_wait_time=3000)},
    )
    path = tmp_path / "pdf-export.config.json"
    save_config(config, path)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["devServerUrl"] == "http://localhost:3000"
    assert data["totalSlides"] == 5
    assert data["slidesWithSubSlides"]["2"] == {"type": "step", "max": 3}
    assert data["specialSlides"]["4"]["typewriterEffect"] is True
    assert data["selectors"]["progressBar"] == '[role="progressbar"]'
    assert load_config(path) == config
