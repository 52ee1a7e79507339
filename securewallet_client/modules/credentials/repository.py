"""Repository protocol for durable credential storage."""

from __future__ import annotations

from typing import Iterable, Mapping, Protocol


class CredentialRepository(Protocol):
    """Key/value storage that survives process restarts."""

    async def get_values(self, keys: Iterable[str]) -> dict[str, str]:
        ...

    async def put_values(self, values: Mapping[str, str]) -> None:
        ...

    async def delete_values(self, keys: Iterable[str]) -> None:
        ...


class MemoryCredentialRepository:
    """Process-local repository; nothing is persisted."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    async def get_values(self, keys: Iterable[str]) -> dict[str, str]:
        return {key: self._values[key] for key in keys if key in self._values}

    async def put_values(self, values: Mapping[str, str]) -> None:
        self._values.update(values)

    async def delete_values(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._values.pop(key, None)
