# healthconnect/routes/doctors/search.py
"""
Directory search.

`search_doctors` applies the search semantics to an in-memory list (the same
rules `build_doctor_query` expresses in SQL). `DoctorQueryController` owns the
state of one live directory view: it re-runs the store query whenever the
parameters change and cancels the request it is replacing, so only the most
recent parameter set can land in `state`.
"""
import asyncio
import logging
from typing import Any, Awaitable, Callable, Iterable, List, Optional, Sequence

from healthconnect.config.constants import ALL_REGIONS, SortKey
from healthconnect.core.errors import StoreUnavailable
from healthconnect.schemas.doctor import DoctorOut, DoctorQuery, DoctorSearchState

logger = logging.getLogger(__name__)

Fetcher = Callable[[DoctorQuery], Awaitable[Sequence[Any]]]
Listener = Callable[[DoctorSearchState], Awaitable[None]]

_SORT_FIELDS = {
    SortKey.RATING: ("rating", True),
    SortKey.EXPERIENCE: ("experience", True),
    SortKey.FEE_LOW: ("consultation_fee", False),
    SortKey.FEE_HIGH: ("consultation_fee", True),
}


def filter_doctors(
    doctors: Iterable[Any],
    search_text: Optional[str] = None,
    region: Optional[str] = None,
) -> List[Any]:
    """Keep doctors whose specialty or name contains the text and whose region matches."""
    result = list(doctors)

    if search_text:
        needle = search_text.lower()
        result = [
            d for d in result
            if needle in d.specialty.lower() or needle in d.name.lower()
        ]

    if region and region != ALL_REGIONS:
        result = [d for d in result if d.region == region]

    return result


def sort_doctors(doctors: Iterable[Any], sort: Optional[str] = None) -> List[Any]:
    """Order by the sort key; equal keys keep their input order."""
    field, descending = _SORT_FIELDS[SortKey.parse(sort)]
    return sorted(doctors, key=lambda d: getattr(d, field), reverse=descending)


def search_doctors(doctors: Iterable[Any], query: DoctorQuery) -> List[Any]:
    return sort_doctors(filter_doctors(doctors, query.search_text, query.region), query.sort)


class DoctorQueryController:
    """
    Holds the search parameters and results of one directory view.

    Every `update` with a parameter set different from the current one
    cancels the in-flight fetch (if any) and starts exactly one new fetch.
    `listener`, when given, is awaited with the new state when a fetch starts
    and when it finishes.
    """

    def __init__(self, fetch: Fetcher, listener: Optional[Listener] = None):
        self._fetch = fetch
        self._listener = listener
        self._query: Optional[DoctorQuery] = None
        self._task: Optional[asyncio.Task] = None
        self._generation = 0
        self.state = DoctorSearchState(query=DoctorQuery())

    @property
    def query(self) -> Optional[DoctorQuery]:
        return self._query

    def update(self, query: DoctorQuery) -> Optional[asyncio.Task]:
        """Re-run the search if any input changed. Returns the new fetch task."""
        if query == self._query:
            return None
        self._query = query
        return self.refetch()

    def refetch(self) -> asyncio.Task:
        """Re-run the current search unconditionally."""
        query = self._query or DoctorQuery()
        self._cancel_running()
        self._generation += 1
        self._task = asyncio.create_task(self._run(query, self._generation))
        return self._task

    async def wait(self) -> DoctorSearchState:
        """Wait for the latest fetch to settle and return the resulting state."""
        if self._task is not None:
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        return self.state

    async def close(self) -> None:
        self._cancel_running()
        self._generation += 1
        if self._task is not None:
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self.state = self.state.model_copy(update={"loading": False})

    def _cancel_running(self) -> None:
        if self._task is not None and not self._task.done():
            logger.debug("Cancelling superseded doctor search")
            self._task.cancel()

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def _run(self, query: DoctorQuery, generation: int) -> None:
        self.state = DoctorSearchState(query=query, loading=True, doctors=self.state.doctors)
        await self._notify()

        try:
            rows = await self._fetch(query)
            doctors = [DoctorOut.model_validate(row) for row in rows]
        except StoreUnavailable as e:
            if self._is_current(generation):
                self.state = self.state.model_copy(update={"error": e.message})
        except Exception as e:
            logger.error(f"Doctor search failed: {e}", exc_info=True)
            if self._is_current(generation):
                self.state = self.state.model_copy(update={"error": str(e) or "Failed to fetch doctors"})
        else:
            if self._is_current(generation):
                self.state = DoctorSearchState(query=query, loading=True, doctors=doctors)
        finally:
            # a superseded run leaves the state to the run that replaced it
            if self._is_current(generation):
                self.state = self.state.model_copy(update={"loading": False})

        if self._is_current(generation):
            await self._notify()

    async def _notify(self) -> None:
        if self._listener is None:
            return
        try:
            await self._listener(self.state)
        except Exception:
            logger.exception("Doctor search listener failed")
