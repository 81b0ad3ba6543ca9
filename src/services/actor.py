"""
GameActor: the one thread allowed to touch the board.

The presentation layer and the actor share no mutable state. They talk through two queues:
requests flow into the actor, responses flow out of it. The actor blocks on the request queue between
requests; the presentation side never blocks and polls the response queue once per render tick.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Optional

from src.api.models import QuitRequest, Request, Response
from src.chess.game import Game
from src.core.config import EngineSettings
from src.services.chess_service import ChessService

logger = logging.getLogger(__name__)

# Put on the request queue when the sending side goes away (the equivalent of a disconnected channel)
_SHUTDOWN = object()


class GameActor:
    """Runs a ChessService on a background daemon thread, one request at a time."""

    def __init__(
        self,
        service: ChessService,
        requests: queue.Queue,
        responses: queue.Queue,
        *,
        thread_name: str = "game-actor",
    ) -> None:
        self._service = service
        self._requests = requests
        self._responses = responses
        self._thread = threading.Thread(
            target=self._run_loop, daemon=True, name=thread_name,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        self._thread.start()

    def join(self, timeout: Optional[float] = None) -> None:
        self._thread.join(timeout)

    @property
    def is_alive(self) -> bool:
        return self._thread.is_alive()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _run_loop(self) -> None:
        logger.info("Game actor started")
        while True:
            item = self._requests.get()
            if item is _SHUTDOWN:
                logger.warning("Request channel disconnected, stopping game actor")
                break

            response = self._service.handle(item)
            if response is not None:
                self._responses.put(response)

            if isinstance(item, QuitRequest):
                logger.info("Quit requested, stopping game actor")
                break
        logger.info("Game actor stopped")


class EngineHandle:
    """
    The presentation layer's end of the channels.

    Sending never waits for the engine, and `poll` returns immediately, with or without a response.
    """

    def __init__(self, actor: GameActor, requests: queue.Queue, responses: queue.Queue) -> None:
        self._actor = actor
        self._requests = requests
        self._responses = responses
        self._closed = False

    def __enter__(self) -> EngineHandle:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def send(self, request: Request) -> None:
        if self._closed:
            logger.warning("Dropping %r: engine handle is closed", request)
            return
        self._requests.put(request)

    def poll(self) -> Optional[Response]:
        """One response if available, None otherwise"""
        try:
            return self._responses.get_nowait()
        except queue.Empty:
            return None

    def wait(self, timeout: float = 5.0) -> Response:
        """Blocking variant of `poll` (for scripts and tests, not for a render loop)"""
        return self._responses.get(timeout=timeout)

    def close(self, timeout: float = 5.0) -> None:
        """Disconnect from the actor and wait for its thread to finish"""
        if self._closed:
            return
        self._closed = True
        self._requests.put(_SHUTDOWN)
        self._actor.join(timeout)

    @property
    def engine_running(self) -> bool:
        return self._actor.is_alive


def start_engine(
    settings: Optional[EngineSettings] = None, game: Optional[Game] = None
) -> EngineHandle:
    """
    Set up a game, start its actor thread, and hand back the presentation layer's side of the channels.

    Without explicit settings, the CHESS_ENGINE_* environment variables are read (see EngineSettings.from_env).
    """
    settings = settings or EngineSettings.from_env()
    game = game or Game.new_game(settings)

    requests: queue.Queue = queue.Queue()
    responses: queue.Queue = queue.Queue()
    actor = GameActor(
        ChessService(game), requests, responses, thread_name=settings.actor_thread_name,
    )
    actor.start()
    return EngineHandle(actor, requests, responses)
