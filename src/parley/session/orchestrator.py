"""Exchange orchestrator: one prompt/reply round trip.

Sequences a submit against the transcript and the loading flag:

    Idle -> Validating -> Rejected
                       -> Pending -> Fulfilled | Failed -> Idle

Rejections (no user, busy, empty prompt, limit reached) leave the
transcript untouched and make no network call. An accepted prompt is
appended before the generation request is made; it stays in the
transcript if the request fails. A successful reply is appended and
then persisted remotely by a detached task whose failure is only logged.
"""

import asyncio

from loguru import logger

from ..llm import GenerationError, LLMProvider
from ..remote import ExchangeRecord, HistoryStore, RemoteStoreError
from ..transcript import Message, TranscriptBuffer
from .identity import IdentitySignal
from .models import LIMIT_NOTICE, ExchangeResult, SubmitOutcome

DEFAULT_MAX_MESSAGES_PER_SESSION = 20


class ExchangeOrchestrator:
    """Drives prompt submission against the generation service.

    At most one submit is pending at a time; a submit arriving while
    another is pending is rejected with ``SubmitOutcome.BUSY``.
    """

    def __init__(
        self,
        buffer: TranscriptBuffer,
        provider: LLMProvider,
        store: HistoryStore,
        identity: IdentitySignal,
        max_messages_per_session: int = DEFAULT_MAX_MESSAGES_PER_SESSION
    ):
        if max_messages_per_session < 1:
            raise ValueError("max_messages_per_session must be at least 1")

        self._buffer = buffer
        self._provider = provider
        self._store = store
        self._identity = identity
        self._max_messages = max_messages_per_session
        self._is_loading = False
        self._background: set[asyncio.Task] = set()
        self.draft = ""

    @property
    def is_loading(self) -> bool:
        """True while a generation request is pending ("Typing...")."""
        return self._is_loading

    @property
    def max_messages_per_session(self) -> int:
        return self._max_messages

    @property
    def pending_persistence(self) -> int:
        """Number of persistence tasks still running."""
        return len(self._background)

    def _validate(self, prompt: str) -> ExchangeResult | None:
        if not self._identity.is_present:
            logger.debug("Submit refused: no user present")
            return ExchangeResult(outcome=SubmitOutcome.UNAUTHENTICATED)
        if self._is_loading:
            logger.debug("Submit refused: another exchange is pending")
            return ExchangeResult(outcome=SubmitOutcome.BUSY)
        if not prompt.strip():
            return ExchangeResult(outcome=SubmitOutcome.EMPTY)
        if len(self._buffer) >= self._max_messages:
            logger.info("Submit refused: {} messages reached", len(self._buffer))
            return ExchangeResult(outcome=SubmitOutcome.LIMIT_REACHED, notice=LIMIT_NOTICE)
        return None

    async def submit(self, prompt_text: str | None = None) -> ExchangeResult:
        """Submit a prompt and wait for the reply.

        Args:
            prompt_text: Prompt to send; None sends the current ``draft``

        Returns:
            ExchangeResult describing the terminal state. Only unexpected
            exceptions propagate; the loading flag is cleared regardless.
        """
        prompt = self.draft if prompt_text is None else prompt_text

        rejection = self._validate(prompt)
        if rejection is not None:
            return rejection

        self._buffer.append(Message.user(prompt))
        self.draft = ""
        self._is_loading = True
        revision = self._buffer.revision

        try:
            try:
                response = await self._provider.generate(prompt)
            except GenerationError as e:
                logger.error("Error generating reply: {}", e)
                return ExchangeResult(
                    outcome=SubmitOutcome.FAILED,
                    prompt=prompt,
                    error=str(e)
                )

            appended = self._buffer.revision == revision
            if appended:
                self._buffer.append(Message.bot(response.content))
            else:
                logger.info("Transcript changed while waiting for the reply; not appending it")

            self._schedule_persistence(ExchangeRecord(prompt=prompt, response=response.content))
            return ExchangeResult(
                outcome=SubmitOutcome.FULFILLED,
                prompt=prompt,
                reply=response.content,
                appended=appended
            )
        finally:
            self._is_loading = False

    def _schedule_persistence(self, record: ExchangeRecord) -> None:
        task = asyncio.create_task(self._persist(record))
        self._background.add(task)
        task.add_done_callback(self._on_persistence_done)

    async def _persist(self, record: ExchangeRecord) -> None:
        try:
            await self._store.save_exchange(record)
        except RemoteStoreError as e:
            logger.warning("Error saving exchange: {}", e)

    def _on_persistence_done(self, task: asyncio.Task) -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.opt(exception=exc).error("Unexpected error while saving exchange")

    async def drain(self) -> None:
        """Wait for all outstanding persistence tasks to finish."""
        while self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)
