class LifeEvoError(Exception):
    """Base for all lifeevo exceptions."""

    pass


class ConfigurationError(LifeEvoError):
    """Invalid search parameters (size, counts, fractions, budgets)."""

    pass


class EmptyBoardError(LifeEvoError):
    """A board with no live cells cannot be laid out as a dense grid."""

    pass


class EvolutionError(LifeEvoError):
    """Evolution process failures."""

    pass
