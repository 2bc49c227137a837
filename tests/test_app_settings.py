import types
from pathlib import Path

from config import get_settings_module
from src.workshop_ops.workshop_ops.main import load_settings


def test_settings_module_follows_app_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "prod")
    assert get_settings_module() == "config.production"

    monkeypatch.setenv("APP_ENV", "testing")
    assert get_settings_module() == "config.testing"

    monkeypatch.delenv("APP_ENV")
    assert get_settings_module() == "config.development"


def test_reconciliation_settings_read_named_thresholds():
    module = types.SimpleNamespace(
        TIMEZONE="UTC",
        MISMATCH_THRESHOLD_MINUTES=30,
        EXCESSIVE_WORK_THRESHOLD_MINUTES=90,
        MERGE_GAP_MINUTES=2,
        SCAN_MAX_WORKERS="4",
    )

    settings = load_settings(module)

    assert settings.timezone == "UTC"
    assert settings.mismatch_threshold_minutes == 30
    assert settings.excessive_work_threshold_minutes == 90
    assert settings.merge_gap_minutes == 2
    assert settings.scan_max_workers == 4


def test_missing_settings_fall_back_to_defaults():
    settings = load_settings(types.SimpleNamespace())

    assert settings.timezone == "Asia/Tokyo"
    assert settings.mismatch_threshold_minutes == 60
    assert settings.excessive_work_threshold_minutes == 60
    assert settings.merge_gap_minutes == 1


def test_package_metadata_has_no_requirements_readme():
    pyproject = Path(__file__).resolve().parents[1] / "pyproject.toml"
    lines = [line.strip() for line in pyproject.read_text(encoding="utf-8").splitlines()]

    assert not any(line.startswith("readme") for line in lines)
