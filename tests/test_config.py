from pathlib import Path

from omegaconf import OmegaConf
from pydantic import ValidationError
import pytest

from lifeevo.config import load_config, register_resolvers
from lifeevo.evolution import SearchConfig
from lifeevo.exceptions import ConfigurationError
from lifeevo.simulation import Bound

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


def test_defaults_match_reference_run():
    config = SearchConfig()
    assert config.board_size == 5
    assert config.trials == 10000
    assert config.max_ticks == 10000
    assert config.top_n == 101
    assert config.workers >= 1
    assert config.bound_for() == Bound(1000, 1000)


def test_explicit_window_overrides_default():
    config = SearchConfig(window=7)
    assert config.bound_for() == Bound(7, 7)
    assert config.bound_for(50) == Bound(7, 7)


def test_bound_follows_budget_override():
    assert SearchConfig().bound_for(300) == Bound(30, 30)


@pytest.mark.parametrize(
    "field, value",
    [
        ("board_size", 0),
        ("trials", -5),
        ("max_ticks", 0),
        ("mutation_fraction", 1.5),
        ("mutation_fraction", 0.0),
        ("seed_fraction", -0.1),
        ("workers", 0),
    ],
)
def test_invalid_values_are_rejected(field, value):
    with pytest.raises(ValidationError):
        SearchConfig(**{field: value})


def test_tiny_budget_needs_explicit_window():
    with pytest.raises(ValidationError):
        SearchConfig(max_ticks=5)
    assert SearchConfig(max_ticks=5, window=3).bound_for() == Bound(3, 3)


def test_unknown_keys_are_rejected():
    with pytest.raises(ValidationError):
        SearchConfig(board=5)


def test_load_config_wraps_validation_errors():
    with pytest.raises(ConfigurationError):
        load_config({"board_size": 0})


def test_load_config_ignores_non_search_sections():
    config = load_config({"board_size": 6, "logging": {"level": "DEBUG"}})
    assert config.board_size == 6


def test_load_config_resolves_interpolations():
    register_resolvers()
    cfg = OmegaConf.create(
        {"max_ticks": 300, "window": "${floordiv:${max_ticks},10}", "workers": "${cpu_count:}"}
    )
    config = load_config(cfg)
    assert config.window == 30
    assert config.workers >= 1


def test_shipped_config_is_valid():
    register_resolvers()
    config = load_config(OmegaConf.load(CONFIG_DIR / "config.yaml"))
    assert config.board_size == 5
    assert config.bound_for() == Bound(1000, 1000)
    assert config.seed is None
