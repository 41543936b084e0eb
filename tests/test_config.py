import pytest

from bid_tracker.config import AUTO_REJECT_AFTER_DAYS, Settings, load_config


def test_defaults():
    cfg = Settings()
    assert cfg.auto_reject_after_days == AUTO_REJECT_AFTER_DAYS == 14
    assert cfg.weight_tolerance == 0.001
    assert abs(cfg.default_layer_weights.total() - 1.0) < 1e-9


def test_load_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "auto_reject_after_days: 7\n"
        "log_level: WARNING\n"
        "default_layer_weights:\n"
        "  frontend: 0.5\n"
        "  backend: 0.5\n"
        "  database: 0\n"
        "  cloud: 0\n"
        "  devops: 0\n"
        "  others: 0\n",
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.auto_reject_after_days == 7
    assert cfg.default_layer_weights.backend == 0.5
    assert cfg.weight_tolerance == 0.001


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == Settings()


def test_weights_must_sum_to_one(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "default_layer_weights: {frontend: 0.5, backend: 0.6, database: 0, cloud: 0, devops: 0, others: 0}\n",
        encoding="utf-8",
    )
    with pytest.raises(ValueError, match="sum to 1.0"):
        load_config(str(path))


def test_yaml_must_be_a_mapping(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError, match="dict"):
        load_config(str(path))


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.yaml"))
