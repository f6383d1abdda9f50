import os

from omegaconf import OmegaConf


def register_resolvers() -> None:
    """Resolvers available to ``config/*.yaml``. Safe to call more than once."""
    if not OmegaConf.has_resolver("floordiv"):
        OmegaConf.register_new_resolver("floordiv", lambda x, y: int(x) // int(y))
    if not OmegaConf.has_resolver("cpu_count"):
        OmegaConf.register_new_resolver("cpu_count", lambda: os.cpu_count() or 1)
