import itertools

from domain.errors import EmptySession
from domain.models import Recipe, Remix


class SessionState:
    """The recipe currently on screen, and the remix made from it.

    Loads take a ticket from `begin_load` so that a slow response cannot
    overwrite the result of a load issued after it.
    """

    def __init__(self) -> None:
        self._recipe: Recipe | None = None
        self.remix: Remix | None = None
        self._tickets = itertools.count(1)
        self._latest = 0

    def begin_load(self) -> int:
        self._latest = next(self._tickets)
        return self._latest

    def is_current(self, ticket: int) -> bool:
        return ticket == self._latest

    def set(self, recipe: Recipe, *, ticket: int | None = None) -> bool:
        if ticket is not None and not self.is_current(ticket):
            return False
        self._recipe = recipe
        self.remix = None
        return True

    def get(self) -> Recipe | None:
        return self._recipe

    def require(self) -> Recipe:
        if self._recipe is None:
            raise EmptySession("No recipe loaded.")
        return self._recipe

    def clear(self) -> None:
        self._recipe = None
        self.remix = None
