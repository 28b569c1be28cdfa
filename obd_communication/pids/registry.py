"""
registry.py

Implements the PidRegistry: an immutable, ordered mapping from parameter keys
to PID definitions, with per-key invocation through a command channel.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from obd_communication.config import Units
from obd_communication.communicator.command_channel import CommandChannel
from obd_communication.errors import InvalidStateError, NotFoundError
from obd_communication.param_types import PidDefinition
from obd_communication.pids.decoders import decode
from obd_communication.pids.definitions import PID_DEFINITIONS


class PidRegistry:
    """
    Ordered, read-only table of PID definitions.
    """

    def __init__(self, definitions: Optional[Iterable[PidDefinition]] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Builds the registry. Definitions can only be registered here.

        Args:
            definitions: PID definitions in enumeration order (defaults to PID_DEFINITIONS).
            logger: Optional logger instance.
        """
        self.logger = logger or logging.getLogger(__name__)
        self._definitions: Dict[str, PidDefinition] = {}
        self._frozen = False
        for definition in (PID_DEFINITIONS if definitions is None else definitions):
            self.register(definition)
        self._frozen = True

    def register(self, definition: PidDefinition) -> None:
        """
        Adds a definition while the registry is being built.

        Raises:
            InvalidStateError: If called after construction.
            ValueError: If the key is already registered.
        """
        if self._frozen:
            raise InvalidStateError("PID registry is immutable after construction")
        if definition.key in self._definitions:
            raise ValueError(f"Duplicate PID key: {definition.key}")
        self._definitions[definition.key] = definition

    def keys(self) -> List[str]:
        """
        Returns all registered keys in registration order.
        """
        return list(self._definitions)

    def get(self, key: str) -> PidDefinition:
        """
        Looks up a definition by key.

        Raises:
            NotFoundError: If the key is not registered.
        """
        try:
            return self._definitions[key]
        except KeyError:
            raise NotFoundError(f"Unknown PID: {key}") from None

    def invoke(self, key: str, channel: CommandChannel, units: Units = Units.ENGLISH,
               header_width: Optional[int] = None) -> str:
        """
        Issues the PID's command once and decodes the reply.

        Args:
            key: The PID key (e.g., "engine_rpm").
            channel: The command channel to query.
            units: The active unit system.
            header_width: Overrides the channel's derived echo width.

        Returns:
            The formatted value, or the "not supported" sentinel.
        """
        definition = self.get(key)
        response = channel.command(definition.command)
        width = channel.header_width if header_width is None else header_width
        value = decode(definition, response, units, width)
        self.logger.debug(f"{key} ({definition.command}): {response!r} -> {value}")
        return value

    def __contains__(self, key: str) -> bool:
        return key in self._definitions

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._definitions)
