class RecipeRemixError(Exception):
    """Base for failures surfaced to the user as a short message."""


class NetworkError(RecipeRemixError):
    """The recipe service could not be reached or returned garbage."""


class RecipeNotFound(RecipeRemixError):
    """The recipe service answered but had no match."""


class RemixError(RecipeRemixError):
    """The completion service failed or produced nothing."""


class EmptySession(RecipeRemixError):
    """An action needs a loaded recipe and there is none."""


class Superseded(RecipeRemixError):
    """A later load finished first or was issued after this one."""
