"""
Lead search orchestration.

One LeadServiceClient.search call per selected profile, all started at once
(fan-out) and combined in profile order once they settle (fan-in).

Failure modes:
  all_or_nothing  the first failure fails the whole search; leads from the
                  other profiles are discarded. Calls still in flight are not
                  cancelled, their results are ignored.
  partial         successful profiles keep their leads, failed profiles are
                  reported individually. Fails only if every profile failed.

Each run carries the id handed out by `begin()`. A `reset()` or a newer
run makes the old id stale, and a stale run no longer touches state.
Callers check `state` before calling `begin()`.
"""
import time
import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from models.internal import Lead, ProfileFailure, SavedProfile
from models.responses import SearchState
from services.lead_service import LeadServiceClient
from services.errors import LeadSearchError
from config import settings

logger = logging.getLogger(__name__)

ALL_OR_NOTHING = "all_or_nothing"
PARTIAL = "partial"

ProgressCallback = Callable[[str, dict], Awaitable[None]]


class SearchOrchestrator:
    def __init__(self, client: LeadServiceClient, failure_mode: Optional[str] = None):
        self.client = client
        self.failure_mode = failure_mode or settings.search_failure_mode
        if self.failure_mode not in (ALL_OR_NOTHING, PARTIAL):
            raise ValueError(f"Unknown search failure mode: {self.failure_mode}")
        self._run_id = 0
        self.reset()

    def reset(self) -> None:
        """Back to idle. Any run still in flight becomes stale and can no longer change state."""
        self._run_id += 1
        self.state = SearchState.IDLE
        self.leads: List[Lead] = []
        self.failures: List[ProfileFailure] = []
        self.error: Optional[Exception] = None
        self.elapsed: Optional[float] = None

    def begin(self) -> int:
        """Mark a search as started and return its run id. Synchronous, so callers can guard on `state`."""
        self.reset()
        self.state = SearchState.SEARCHING
        return self._run_id

    def is_current(self, run_id: int) -> bool:
        return run_id == self._run_id

    async def _search_one(
        self,
        saved: SavedProfile,
        index: int,
        on_progress: Optional[ProgressCallback],
    ) -> List[Lead]:
        if on_progress:
            await on_progress("profile_started", {"index": index, "profile_id": saved.id, "name": saved.name})
        try:
            leads = await self.client.search(saved.profile)
        except Exception as e:
            logger.warning(f"Search for profile '{saved.name}' failed: {type(e).__name__}: {e}")
            if on_progress:
                await on_progress("profile_failed", {
                    "index": index,
                    "profile_id": saved.id,
                    "name": saved.name,
                    "error_type": type(e).__name__,
                    "message": str(e),
                })
            raise
        if on_progress:
            await on_progress("profile_completed", {
                "index": index, "profile_id": saved.id, "name": saved.name, "lead_count": len(leads),
            })
        return leads

    async def run(
        self,
        selected: List[SavedProfile],
        on_progress: Optional[ProgressCallback] = None,
        run_id: Optional[int] = None,
    ) -> List[Lead]:
        if run_id is None:
            run_id = self.begin()
        start_time = time.time()
        logger.info(f"Lead search started for {len(selected)} profile(s), mode={self.failure_mode}")

        coros = [self._search_one(p, i, on_progress) for i, p in enumerate(selected)]
        failures: List[ProfileFailure] = []
        try:
            if self.failure_mode == PARTIAL:
                results = await asyncio.gather(*coros, return_exceptions=True)
                leads = self._collect_partial(selected, results, failures)
            else:
                results = await asyncio.gather(*coros)
                leads = [lead for result in results for lead in result]
        except Exception as e:
            elapsed = round(time.time() - start_time, 1)
            if self.is_current(run_id):
                self.elapsed = elapsed
                self.state = SearchState.FAILED
                self.error = e
                self.failures = failures
            logger.error(f"Lead search failed after {elapsed}s: {e}")
            raise

        elapsed = round(time.time() - start_time, 1)
        if not self.is_current(run_id):
            logger.info(f"Lead search finished after a reset ({len(leads)} leads); state left untouched")
            return leads
        self.elapsed = elapsed
        self.leads = leads
        self.failures = failures
        self.state = SearchState.SUCCESS
        logger.info(
            f"Lead search completed in {self.elapsed}s: {len(leads)} leads, "
            f"{len(failures)} failed profile(s)"
        )
        return leads

    def _collect_partial(
        self,
        selected: List[SavedProfile],
        results: list,
        failures: List[ProfileFailure],
    ) -> List[Lead]:
        leads: List[Lead] = []
        first_error: Optional[BaseException] = None
        for saved, result in zip(selected, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                first_error = first_error or result
                failures.append(ProfileFailure(
                    profile_id=saved.id,
                    profile_name=saved.name,
                    error_type=type(result).__name__,
                    message=str(result),
                ))
                continue
            leads.extend(result)
        if selected and len(failures) == len(selected):
            raise first_error
        return leads


def error_type_of(error: Optional[Exception]) -> Optional[str]:
    if error is None:
        return None
    return type(error).__name__ if isinstance(error, LeadSearchError) else "UnexpectedError"
