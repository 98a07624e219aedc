"""Tests for config loading and report storage."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from orghealth.config import config_from_dict, load_config
from orghealth.consts import CONFIG_ENV_VAR
from orghealth.evaluators.engine import ScoringEngine
from orghealth.models.model_eval import ScoringConfig
from orghealth.models.model_score import Category
from orghealth.storage import load_bundle_file, save_report


class TestLoadConfig:
    """Tests for load_config and config_from_dict."""

    def test_defaults_without_path(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        assert load_config() == ScoringConfig()

    def test_partial_weight_override(self, temp_dir: Path) -> None:
        path = temp_dir / "config.json"
        path.write_text(
            json.dumps(
                {"technical_weights": {"weights": {"performance": 0.3, "codeQuality": 0.15}}}
            ),
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.technical_weights.weight_for(Category.PERFORMANCE) == 0.3
        assert config.technical_weights.weight_for(Category.CODE_QUALITY) == 0.15
        assert config.technical_weights.weight_for(Category.TEST_COVERAGE) == 0.2
        assert config.financial_weights == ScoringConfig().financial_weights

    def test_env_var(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = temp_dir / "env_config.json"
        path.write_text(json.dumps({"license_monthly_cost": 150}), encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        assert load_config().license_monthly_cost == 150

    def test_explicit_path_wins_over_env(
        self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        env_path = temp_dir / "env.json"
        env_path.write_text(json.dumps({"license_monthly_cost": 150}), encoding="utf-8")
        explicit_path = temp_dir / "explicit.json"
        explicit_path.write_text(json.dumps({"license_monthly_cost": 99}), encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(env_path))

        assert load_config(explicit_path).license_monthly_cost == 99

    def test_invalid_weights_raise(self) -> None:
        with pytest.raises(ValidationError):
            config_from_dict({"financial_weights": {"weights": {"licenses": 0.9}}})

    def test_unknown_category_raises(self) -> None:
        with pytest.raises(ValidationError):
            config_from_dict({"technical_weights": {"weights": {"bogus": 0.1}}})

    def test_missing_file(self, temp_dir: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(temp_dir / "missing.json")

    def test_invalid_json(self, temp_dir: Path) -> None:
        path = temp_dir / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(json.JSONDecodeError):
            load_config(path)

    def test_non_object_json(self, temp_dir: Path) -> None:
        path = temp_dir / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ValueError, match="JSON object"):
            load_config(path)


class TestStorage:
    """Tests for bundle loading and report saving."""

    def test_load_bundle_file(self, bundle_file: Path, sample_raw_bundle: dict) -> None:
        assert load_bundle_file(bundle_file) == sample_raw_bundle

    def test_load_missing_bundle(self, temp_dir: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_bundle_file(temp_dir / "missing.json")

    def test_load_invalid_bundle(self, temp_dir: Path) -> None:
        path = temp_dir / "broken.json"
        path.write_text("not json at all", encoding="utf-8")

        with pytest.raises(json.JSONDecodeError):
            load_bundle_file(path)

    def test_load_non_object_bundle(self, temp_dir: Path) -> None:
        path = temp_dir / "list.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(ValueError, match="JSON object"):
            load_bundle_file(path)

    def test_save_report(self, temp_dir: Path, sample_raw_bundle: dict) -> None:
        report = ScoringEngine().analyze(sample_raw_bundle)

        path = save_report(report, temp_dir / "reports" / "report.json")

        assert path.exists()
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["breakdown"]["overall"] == 81
        assert data["breakdown"]["technical"]["components"]["codeQuality"]["score"] == 87
        assert data["recommendations"][0]["priority"] == "critical"
        assert data["summary"]["health_status"] == "Good"
        assert data["summary"]["potential_savings"]["total"] == pytest.approx(101000)
        assert "generated_at" in data
