"""Turn Hydra/OmegaConf configs into validated :class:`SearchConfig` objects."""

from typing import Any, Mapping

from omegaconf import DictConfig, OmegaConf
from pydantic import ValidationError

from lifeevo.evolution.config import SearchConfig
from lifeevo.exceptions import ConfigurationError

SEARCH_KEYS = tuple(SearchConfig.model_fields)


def load_config(cfg: DictConfig | Mapping[str, Any]) -> SearchConfig:
    """Validate the search section of ``cfg``.

    Keys that are not search parameters (``logging``, ``hydra`` ...) are
    ignored. Invalid values raise :class:`ConfigurationError`.
    """
    if isinstance(cfg, DictConfig):
        data = OmegaConf.to_container(cfg, resolve=True)
    else:
        data = dict(cfg)
    search = {k: v for k, v in data.items() if k in SEARCH_KEYS}
    try:
        return SearchConfig.model_validate(search)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid search configuration:\n{exc}") from exc
