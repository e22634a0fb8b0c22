"""
Tests for configuration management.
"""

import pytest
import yaml

from rank_lookup import build_service
from rank_lookup.matching import build_engine
from rank_lookup.matching.resolution_engine import ResolutionEngine
from rank_lookup.matching.match_result import NoMatch, UniqueMatch
from rank_lookup.matching.types import MatchTier
from rank_lookup.utils.config_manager import ConfigManager, DEFAULT_CONFIG_PATH, InvalidConfig


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "resolver_config.yaml"
    path.write_text(
        "thresholds:\n"
        "  fuzzy_accept: 0.95\n"
        "extra:\n"
        "  note: kept\n"
    )
    return path


def write_config(tmp_path, text):
    path = tmp_path / "custom.yaml"
    path.write_text(text)
    return path


# ============================================================================
# Loading
# ============================================================================

def test_defaults_when_file_missing(tmp_path):
    cfg = ConfigManager(tmp_path / "missing.yaml")

    assert cfg.get_threshold('fuzzy_accept') == pytest.approx(0.72)
    assert cfg.get_matching_param('min_acronym_token_length') == 2
    assert cfg.get_matching_param('substring_autofill') is False
    assert cfg.get_session_param('ttl_seconds') == 300


def test_shipped_config_matches_defaults():
    cfg = ConfigManager(DEFAULT_CONFIG_PATH)

    assert cfg.validate_config() == []
    assert cfg.config == ConfigManager.DEFAULT_CONFIG


def test_partial_file_merges_over_defaults(config_file):
    cfg = ConfigManager(config_file)

    assert cfg.get_threshold('fuzzy_accept') == pytest.approx(0.95)
    assert cfg.get_session_param('ttl_seconds') == 300
    assert cfg.config['extra'] == {'note': 'kept'}


def test_empty_file_uses_defaults(tmp_path):
    cfg = ConfigManager(write_config(tmp_path, ""))

    assert cfg.config == ConfigManager.DEFAULT_CONFIG


def test_defaults_not_shared_between_instances():
    first = ConfigManager()
    first.config['session']['ttl_seconds'] = 1

    assert ConfigManager().get_session_param('ttl_seconds') == 300
    assert ConfigManager.DEFAULT_CONFIG['session']['ttl_seconds'] == 300


def test_invalid_yaml_raises(tmp_path):
    with pytest.raises(yaml.YAMLError):
        ConfigManager(write_config(tmp_path, "thresholds: [unclosed\n"))


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigManager().load_config(tmp_path / "missing.yaml")


@pytest.mark.parametrize("getter", ["get_threshold", "get_matching_param", "get_session_param"])
def test_unknown_keys_raise(getter):
    with pytest.raises(KeyError):
        getattr(ConfigManager(), getter)("nope")


def test_non_mapping_section_raises_key_error(tmp_path):
    cfg = ConfigManager(write_config(tmp_path, "session: 300\n"))

    with pytest.raises(KeyError):
        cfg.get_session_param('ttl_seconds')


# ============================================================================
# Validation
# ============================================================================

@pytest.mark.parametrize("text,key", [
    ("thresholds:\n  fuzzy_accept: 1.5\n", "fuzzy_accept"),
    ("thresholds:\n  fuzzy_accept: high\n", "fuzzy_accept"),
    ("matching:\n  min_acronym_token_length: 0\n", "min_acronym_token_length"),
    ("matching:\n  min_acronym_token_length: true\n", "min_acronym_token_length"),
    ("matching:\n  substring_autofill: 'yes'\n", "substring_autofill"),
    ("session:\n  ttl_seconds: '300'\n", "ttl_seconds"),
    ("session:\n  ttl_seconds: -5\n", "ttl_seconds"),
])
def test_validate_config_reports_bad_value(tmp_path, text, key):
    errors = ConfigManager(write_config(tmp_path, text)).validate_config()

    assert len(errors) == 1
    assert key in errors[0]


def test_require_valid_collects_every_error(tmp_path):
    path = write_config(
        tmp_path,
        "thresholds:\n  fuzzy_accept: 3\n"
        "session:\n  ttl_seconds: 0\n",
    )

    with pytest.raises(InvalidConfig) as exc_info:
        ConfigManager(path).require_valid()

    assert len(exc_info.value.errors) == 2
    assert exc_info.value.path == path


def test_string_ttl_rejected_by_build_service(tmp_path):
    path = write_config(tmp_path, "session:\n  ttl_seconds: \"300\"\n")

    with pytest.raises(InvalidConfig, match="ttl_seconds"):
        build_service(config_path=path)


def test_bad_threshold_rejected_by_engine(tmp_path):
    path = write_config(tmp_path, "thresholds:\n  fuzzy_accept: -0.1\n")

    with pytest.raises(InvalidConfig, match="fuzzy_accept"):
        ResolutionEngine(config_path=path)


def test_invalid_config_is_value_error():
    assert issubclass(InvalidConfig, ValueError)


# ============================================================================
# Engine and service wiring
# ============================================================================

def test_engine_reads_threshold_from_file(config_file, sample_levels):
    engine = ResolutionEngine(config_path=config_file)

    assert engine.config.fuzzy_threshold == pytest.approx(0.95)
    assert isinstance(engine.resolve(sample_levels, "hopless pursuit"), NoMatch)
    assert isinstance(engine.resolve(sample_levels, "hopeless pursuit"), UniqueMatch)


def test_engine_reads_substring_autofill_from_file(tmp_path, sample_levels):
    path = write_config(tmp_path, "matching:\n  substring_autofill: true\n")

    outcome = build_engine(config_path=path).resolve(sample_levels, "generator v")

    assert outcome.tier is MatchTier.SUBSTRING
    assert outcome.name == "Generator v2.0"


def test_service_reads_ttl_from_file(tmp_path, clock, sample_levels):
    path = write_config(tmp_path, "session:\n  ttl_seconds: 10\n")
    service = build_service(config_path=path, clock=clock)

    service.handle_query("user-1", "rv", sample_levels)
    clock.advance(11)

    assert service.sessions.get("user-1") is None
