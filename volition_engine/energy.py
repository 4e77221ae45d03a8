"""Energy state settings with explicit get/set and change notification."""

from __future__ import annotations

import contextlib
import json
import logging
from pathlib import Path
from typing import Callable, Optional, Union

from volition_engine.schema import DEFAULT_ENERGY_STATE, EnergyState

logger = logging.getLogger(__name__)

EnergyHandler = Callable[[EnergyState], None]

_STORAGE_KEY = "energy_state"


def parse_energy_state(value: Union[EnergyState, str]) -> EnergyState:
    """Coerce an energy state or its name; raise ValueError for anything else."""

    if isinstance(value, EnergyState):
        return value
    message = f"Unknown energy state '{value}', expected one of HIGH, MED, LOW"
    if isinstance(value, str):
        try:
            return EnergyState(value.strip().upper())
        except ValueError as exc:
            raise ValueError(message) from exc
    raise ValueError(message)


class EnergySettings:
    """Owns the user's energy state.

    When ``path`` is set the state is read from and written to a small JSON file.
    Storage problems are logged and never block the in-memory state.
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        default: Union[EnergyState, str] = DEFAULT_ENERGY_STATE,
    ) -> None:
        self._path = Path(path) if path is not None else None
        self._default = parse_energy_state(default)
        self._handlers: list[EnergyHandler] = []
        self._state = self._load()

    @property
    def path(self) -> Optional[Path]:
        return self._path

    @property
    def state(self) -> EnergyState:
        return self._state

    def get(self) -> EnergyState:
        return self._state

    def set(self, state: Union[EnergyState, str]) -> EnergyState:
        new_state = parse_energy_state(state)
        if new_state == self._state:
            return new_state
        self._state = new_state
        logger.info("Energy state changed to %s", new_state.value)
        self._save()
        for handler in list(self._handlers):
            try:
                handler(new_state)
            except Exception:  # noqa: BLE001
                logger.exception("Energy state handler %r failed", handler)
        return new_state

    def subscribe(self, handler: EnergyHandler) -> Callable[[], None]:
        self._handlers.append(handler)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._handlers.remove(handler)

        return _unsubscribe

    def _load(self) -> EnergyState:
        if self._path is None or not self._path.exists():
            return self._default
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Failed to load energy state from %s: %s", self._path, exc)
            return self._default

        stored = payload.get(_STORAGE_KEY) if isinstance(payload, dict) else None
        try:
            return parse_energy_state(stored)
        except ValueError:
            logger.warning("Ignoring stored energy state %r in %s", stored, self._path)
            return self._default

    def _save(self) -> None:
        if self._path is None:
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps({_STORAGE_KEY: self._state.value}), encoding="utf-8")
        except OSError as exc:
            logger.warning("Failed to save energy state to %s: %s", self._path, exc)
