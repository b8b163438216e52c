import json
import pytest
from app.core.config_loader import load_dashboard_config, get_default_restrictions, get_label
from app.core.security import is_admin
from app.models.api_models import CurrentUser

def test_is_admin():
    assert is_admin(CurrentUser(role="admin")) is True
    assert is_admin(CurrentUser(role="user")) is False
    assert is_admin(None) is False
    assert is_admin(CurrentUser(role="staff"), admin_role="staff") is True

def test_load_dashboard_config(tmp_path):
    path = tmp_path / "dashboard_config.json"
    path.write_text(json.dumps({
        "default_restrictions": {"level": "low", "message": "ok"},
        "level_labels": {"low": "Low - Normal Operations"},
    }), encoding="utf-8")

    config = load_dashboard_config(str(path))

    assert get_default_restrictions(config) == {"level": "low", "message": "ok"}
    assert get_label(config, "level_labels", "low") == "Low - Normal Operations"
    assert get_label(config, "level_labels", "high") == "High"

def test_missing_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_dashboard_config(str(tmp_path / "missing.json"))

def test_invalid_json_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_dashboard_config(str(path))

def test_shipped_config_has_defaults():
    config = load_dashboard_config("data/dashboard_config.json")
    defaults = get_default_restrictions(config)
    assert defaults["level"] == "medium"
    assert defaults["density_limits"] == "1 person per 4 sqm"
