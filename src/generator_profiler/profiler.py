"""Per-step timing for generator functions.

``profile`` wraps a generator function so that every resume of the generators
it creates is bracketed by marks on a timing backend:

* ``gen{id}-start`` / ``gen{id}-end`` and the measure ``name(#id)`` span the
  whole generator, from the first ``next()`` until it finishes;
* ``gen{id}-next{n}-start`` / ``gen{id}-next{n}-end`` and the measure
  ``name(#id).next(#n)`` span step ``n``.

The start mark of step ``n + 1`` is recorded as soon as step ``n`` has been
measured, before control returns to the caller. A step's duration is
therefore the time since the previous step completed, including however long
the caller waited before resuming.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Iterator, Optional, Tuple, Type, TypeVar, Union

from . import naming
from .config import ProfilerConfig
from .counter import allocate_generator_id
from .timeline import Performance
from .utils.logging import get_logger

LOGGER = get_logger("profiler")

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class StepResult(Generic[T]):
    """Outcome of a single :meth:`ProfiledGenerator.advance` call."""

    value: Optional[T]
    done: bool


def _throw_into(iterator: Any, exc: Union[BaseException, Type[BaseException]]) -> Any:
    thrower = getattr(iterator, "throw", None)
    if thrower is None:
        raise exc
    return thrower(exc)


class ProfiledGenerator(Generic[T]):
    """Generator proxy that records timing marks around each resume.

    The underlying generator is created lazily on the first :meth:`advance`,
    so instances that are never driven cost nothing and record nothing.
    Single consumer only: resuming from inside the wrapped generator raises
    ``ValueError`` just like a plain generator would.
    """

    def __init__(
        self,
        generator: Callable[..., Iterator[T]],
        performance: Performance,
        args: Tuple[Any, ...] = (),
        kwargs: Optional[Dict[str, Any]] = None,
        *,
        config: Optional[ProfilerConfig] = None,
    ) -> None:
        self._generator = generator
        self._performance = performance
        self._args = args
        self._kwargs = dict(kwargs or {})
        self._config = config or ProfilerConfig()
        self._name = naming.generator_name(generator)
        self._iterator: Optional[Iterator[T]] = None
        self._running = False
        self.generator_id: Optional[int] = None
        self.step_index = 0
        self.done = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def started(self) -> bool:
        return self._iterator is not None

    def advance(self, value: Any = None) -> StepResult[T]:
        """Resume the wrapped generator once, forwarding ``value``.

        The value passed to the first call is discarded since a fresh
        generator cannot receive one. Returns ``StepResult(value, False)``
        for a yielded value and ``StepResult(return_value, True)`` once the
        generator finishes; every later call returns ``StepResult(None, True)``
        without touching the generator or the backend. Exceptions raised by
        the generator propagate unchanged after the step has been measured.
        """

        if self.done:
            return StepResult(None, True)
        self._enter()
        try:
            if self._iterator is None:
                self._start()
                value = None
            if value is None:
                return self._step(next)
            return self._step(lambda iterator: iterator.send(value))
        finally:
            self._running = False

    def send(self, value: Any) -> T:
        result = self.advance(value)
        if result.done:
            raise StopIteration(result.value)
        return result.value  # type: ignore[return-value]

    def throw(self, exc: Union[BaseException, Type[BaseException]]) -> T:
        """Raise ``exc`` inside the wrapped generator as a timed step.

        Like a plain generator, throwing into an instance that has not
        started or has already finished raises ``exc`` straight away and
        leaves the instance finished.
        """

        if self.done or self._iterator is None:
            self.done = True
            raise exc
        self._enter()
        try:
            result = self._step(lambda iterator: _throw_into(iterator, exc))
        finally:
            self._running = False
        if result.done:
            raise StopIteration(result.value)
        return result.value  # type: ignore[return-value]

    def close(self) -> None:
        """Close the generator, ending the pending step and the generator window.

        An instance that was never advanced records nothing.
        """

        if self.done:
            return
        self._enter()
        self.done = True
        iterator, self._iterator = self._iterator, None
        try:
            if iterator is None:
                return
            closer = getattr(iterator, "close", None)
            try:
                if closer is not None:
                    closer()
            finally:
                self._close_step()
                self._close_generator()
            LOGGER.debug(
                "generator_closed | name=%s | id=%s | steps=%d",
                self._name,
                self.generator_id,
                self.step_index,
            )
        finally:
            self._running = False

    def __iter__(self) -> "ProfiledGenerator[T]":
        return self

    def __next__(self) -> T:
        return self.send(None)

    def __repr__(self) -> str:
        return (
            f"<ProfiledGenerator {self._name} id={self.generator_id} "
            f"step={self.step_index} done={self.done}>"
        )

    def _enter(self) -> None:
        if self._running:
            raise ValueError("generator already executing")
        self._running = True

    def _start(self) -> None:
        if self._config.enabled:
            self.generator_id = allocate_generator_id()
            self._performance.mark(naming.generator_start_mark(self.generator_id))
            LOGGER.debug("generator_start | name=%s | id=%d", self._name, self.generator_id)
        try:
            self._iterator = iter(self._generator(*self._args, **self._kwargs))
            self._open_step(0)
        except BaseException:
            self._fail()
            raise

    def _step(self, resume: Callable[[Any], T]) -> StepResult[T]:
        iterator = self._iterator
        assert iterator is not None
        try:
            try:
                produced = resume(iterator)
            finally:
                self._close_step()
        except StopIteration as stop:
            self._finish()
            return StepResult(stop.value, True)
        except BaseException:
            self._fail()
            raise
        # the next step only exists once its start mark is recorded
        try:
            self._open_step(self.step_index + 1)
        except BaseException:
            self._fail()
            raise
        self.step_index += 1
        return StepResult(produced, False)

    def _open_step(self, step_index: int) -> None:
        if self.generator_id is None:
            return
        self._performance.mark(naming.step_start_mark(self.generator_id, step_index))

    def _close_step(self) -> None:
        if self.generator_id is None:
            return
        start = naming.step_start_mark(self.generator_id, self.step_index)
        end = naming.step_end_mark(self.generator_id, self.step_index)
        self._performance.mark(end)
        self._performance.measure(
            naming.step_measure(self._name, self.generator_id, self.step_index), start, end
        )

    def _close_generator(self) -> None:
        if self.generator_id is None:
            return
        start = naming.generator_start_mark(self.generator_id)
        end = naming.generator_end_mark(self.generator_id)
        self._performance.mark(end)
        self._performance.measure(naming.generator_measure(self._name, self.generator_id), start, end)

    def _finish(self) -> None:
        self.done = True
        self._iterator = None
        self._close_generator()
        LOGGER.debug(
            "generator_done | name=%s | id=%s | steps=%d",
            self._name,
            self.generator_id,
            self.step_index,
        )

    def _fail(self) -> None:
        self.done = True
        self._iterator = None
        if self._config.close_window_on_failure:
            self._close_generator()
            LOGGER.debug(
                "generator_failed | name=%s | id=%s | step=%d",
                self._name,
                self.generator_id,
                self.step_index,
            )
            return
        LOGGER.warning(
            "generator_failed_window_open | name=%s | id=%s | step=%d",
            self._name,
            self.generator_id,
            self.step_index,
        )


def profile(
    generator: Callable[..., Iterator[T]],
    performance: Performance,
    *,
    config: Optional[ProfilerConfig] = None,
) -> Callable[..., ProfiledGenerator[T]]:
    """Wrap ``generator`` so each generator it creates is timed on ``performance``.

    Both arguments are required. The returned callable accepts the same
    arguments as ``generator`` and returns a :class:`ProfiledGenerator`
    without running any of the wrapped code.
    """

    settings = config or ProfilerConfig()

    @functools.wraps(generator)
    def profiled_generator(*args: Any, **kwargs: Any) -> ProfiledGenerator[T]:
        return ProfiledGenerator(generator, performance, args, kwargs, config=settings)

    return profiled_generator


def profiled(
    performance: Performance, *, config: Optional[ProfilerConfig] = None
) -> Callable[[Callable[..., Iterator[T]]], Callable[..., ProfiledGenerator[T]]]:
    """Decorator form of :func:`profile`."""

    def decorator(generator: Callable[..., Iterator[T]]) -> Callable[..., ProfiledGenerator[T]]:
        return profile(generator, performance, config=config)

    return decorator


__all__ = ["ProfiledGenerator", "StepResult", "profile", "profiled"]
