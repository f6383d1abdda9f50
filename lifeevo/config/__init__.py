from lifeevo.config.helpers import load_config
from lifeevo.config.resolvers import register_resolvers

__all__ = ["load_config", "register_resolvers"]
