"""
Run AI turns away from the caller's event-handling path.

A deep search (god: depth 7) can take seconds. The worker runs it on a thread pool so one slow game does not stall the others,
and keeps the single-writer rule per game: requests for the same game ID run one at a time, in the order they were submitted.

Each game has its own FIFO queue. Only the head of a queue is handed to the pool; the next request for that game is handed over
when the previous one completes. A pool thread therefore never sits waiting for another request of the same game.
"""

import logging
import threading
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from types import TracebackType
from typing import Callable, Optional, Self
from uuid import UUID

from src.api.models import AiTurnRequest, MoveRequest, MoveResponse
from src.services.othello_service import OthelloService

logger = logging.getLogger(__name__)

Task = Callable[[], MoveResponse]
Job = tuple[Task, Future[MoveResponse]]


class AiMoveWorker:
    """Thread pool in front of an OthelloService.

    NOTE the service's repository is shared by the worker threads. Use one that tolerates that
    (InMemoryGameRepository does; a SQLAlchemy Session does not).
    """

    def __init__(self, service: OthelloService, max_workers: Optional[int] = None) -> None:
        self.service = service
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers or service.settings.ai_workers,
            thread_name_prefix="othello-ai",
        )
        self._registry_lock = threading.Lock()
        self._idle = threading.Condition(self._registry_lock)
        # game ID -> requests waiting behind the one that runs. A game is only in here while it has work.
        self._queues: dict[UUID, deque[Job]] = {}
        self._cancel_events: dict[UUID, threading.Event] = {}
        self._closed = False

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.shutdown()

    def play_ai_turn(self, game_id: UUID) -> Future[MoveResponse]:
        """Schedule the AI's move for this game."""
        return self._enqueue(game_id, lambda: self._run_ai_turn(game_id))

    def submit_move(self, request: MoveRequest) -> Future[MoveResponse]:
        """Schedule a human move: it runs after every earlier request for the same game."""
        return self._enqueue(request.game_id, lambda: self.service.submit_move(request))

    def cancel(self, game_id: UUID) -> bool:
        """Stop a running search early. It still plays: the best move found so far. False if nothing was running."""
        with self._registry_lock:
            event = self._cancel_events.get(game_id)
        if event is None:
            return False
        event.set()
        logger.info(f"Cancelling AI search for game {game_id}")
        return True

    def shutdown(self, wait: bool = True) -> None:
        """
        Stop accepting requests.
        ----
        wait=True: everything already submitted still runs, then the pool stops.
        wait=False: queued requests get cancelled and running searches are told to stop.
        """
        with self._registry_lock:
            self._closed = True
            dropped: list[Job] = []
            running: list[UUID] = []
            if not wait:
                for queue in self._queues.values():
                    dropped.extend(queue)
                    queue.clear()
                running = list(self._cancel_events)

        if not wait:
            for _, future in dropped:
                future.cancel()
            for game_id in running:
                self.cancel(game_id)
        else:
            with self._idle:
                self._idle.wait_for(lambda: not self._queues)
        self._executor.shutdown(wait=wait)

    # -- queueing --
    def _enqueue(self, game_id: UUID, task: Task) -> Future[MoveResponse]:
        future: Future[MoveResponse] = Future()
        with self._registry_lock:
            if self._closed:
                raise RuntimeError("AiMoveWorker is shut down.")
            queue = self._queues.get(game_id)
            if queue is not None:
                queue.append((task, future))
                logger.debug(f"Game {game_id} is busy: request queued ({len(queue)} waiting)")
                return future
            self._queues[game_id] = deque()

        self._executor.submit(self._run_job, game_id, task, future)
        return future

    def _run_job(self, game_id: UUID, task: Task, future: Future[MoveResponse]) -> None:
        try:
            if future.set_running_or_notify_cancel():
                try:
                    future.set_result(task())
                except Exception as exc:
                    future.set_exception(exc)
        finally:
            self._start_next(game_id)

    def _start_next(self, game_id: UUID) -> None:
        """Hand the next queued request of this game to the pool, or forget the game once its queue is empty."""
        with self._registry_lock:
            queue = self._queues[game_id]
            if not queue:
                del self._queues[game_id]
                self._idle.notify_all()
                return
            task, future = queue.popleft()

        self._executor.submit(self._run_job, game_id, task, future)

    # -- worker side --
    def _run_ai_turn(self, game_id: UUID) -> MoveResponse:
        event = threading.Event()
        with self._registry_lock:
            self._cancel_events[game_id] = event
        try:
            return self.service.play_ai_turn(AiTurnRequest(game_id=game_id), cancel_event=event)
        finally:
            with self._registry_lock:
                self._cancel_events.pop(game_id, None)
