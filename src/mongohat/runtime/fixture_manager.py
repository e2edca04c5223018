# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Fixture data management for the working database.

The manager remembers the most recently attempted fixture set so ``refresh``
can put the database back into that state between tests.

Partial Failure:
    Collections are inserted concurrently. The fixture set is recorded once
    every insert has been issued, before any of them completes, so a failed
    ``load`` still leaves its data as the set ``refresh`` replays. A failed
    ``load`` raises the first insert error once every insert has settled;
    inserts that committed are not rolled back.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import OperationFailure, PyMongoError

from mongohat.enums import EnumInfraTransportType
from mongohat.errors import FixtureDataError, ModelInfraErrorContext
from mongohat.models import ModelFixtureLoadResult

logger = logging.getLogger(__name__)

FixtureSet = Mapping[str, Sequence[Mapping[str, Any]]]

# MongoDB server error code for NamespaceNotFound
_NAMESPACE_NOT_FOUND = 26


class FixtureManager:
    """Loads, replays and removes fixture documents in one database.

    Attributes:
        database: The motor database all operations run against

    Example:
        >>> manager = FixtureManager(client.get_database("orders"))
        >>> result = await manager.load({"users": [{"name": "ada"}]})
        >>> result.total_inserted
        1
        >>> await manager.refresh()
    """

    def __init__(self, database: AsyncIOMotorDatabase) -> None:
        self.database = database
        self._fixture_set: FixtureSet | None = None

    @property
    def fixture_set(self) -> FixtureSet | None:
        """The fixture set ``refresh`` would replay, if any."""
        return self._fixture_set

    def get_collection(self, name: str) -> AsyncIOMotorCollection:
        return self.database.get_collection(name)

    async def load(
        self, data: FixtureSet, retain_previous: bool = False
    ) -> ModelFixtureLoadResult:
        """Insert ``data`` into the database.

        Args:
            data: Collection name mapped to the documents to insert.
            retain_previous: Keep documents already in the targeted
                collections instead of dropping them first.

        Returns:
            Inserted document count per collection.

        Raises:
            FixtureDataError: If dropping or inserting any collection fails.
        """
        if not retain_previous:
            await self.clean(data)

        tasks = [
            asyncio.ensure_future(self._insert(name, documents))
            for name, documents in data.items()
        ]
        self._fixture_set = data
        try:
            counts = await asyncio.gather(*tasks)
        except FixtureDataError:
            # Settle every insert before the first failure propagates
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        result = ModelFixtureLoadResult(inserted_counts=dict(zip(data.keys(), counts)))
        logger.debug(
            "Loaded %d documents into %d collections",
            result.total_inserted,
            len(result.inserted_counts),
            extra={"db_name": self.database.name, "collections": list(data.keys())},
        )
        return result

    async def refresh(self) -> ModelFixtureLoadResult | None:
        """Reload the last fixture set, replacing the targeted collections.

        An absent or empty fixture set is a logged no-op.
        """
        if not self._fixture_set:
            logger.info("No fixture set to refresh")
            return None
        return await self.load(self._fixture_set)

    async def clean(self, data: FixtureSet | None = None) -> None:
        """Forget the fixture set and drop the collections ``data`` names.

        An empty or missing ``data`` drops every collection in the database.
        """
        self._fixture_set = None
        if not data:
            await self.drop_all()
            return

        existing = set(await self._list_collections())
        await asyncio.gather(
            *(self._drop_collection(name, existing) for name in data.keys())
        )

    async def drop(self) -> None:
        """Drop the whole database."""
        self._fixture_set = None
        try:
            await self.database.client.drop_database(self.database.name)
        except PyMongoError as e:
            raise FixtureDataError(
                f"Failed to drop database {self.database.name}: {e}",
                context=self._context("drop", self.database.name),
            ) from e

    async def drop_all(self) -> None:
        """Drop every collection, keeping the database itself."""
        self._fixture_set = None
        names = await self._list_collections()
        await asyncio.gather(*(self._drop_collection(name) for name in names))

    async def _insert(self, name: str, documents: Sequence[Mapping[str, Any]]) -> int:
        if not documents:
            return 0
        # insert_many assigns _id on the documents it is handed
        payload = [dict(document) for document in documents]
        try:
            result = await self.database.get_collection(name).insert_many(payload)
        except PyMongoError as e:
            raise FixtureDataError(
                f"Failed to insert fixtures into {name}: {e}",
                context=self._context("insert", name),
                collection=name,
            ) from e
        return len(result.inserted_ids)

    async def _list_collections(self) -> list[str]:
        try:
            return await self.database.list_collection_names()
        except PyMongoError as e:
            raise FixtureDataError(
                f"Failed to list collections of {self.database.name}: {e}",
                context=self._context("list_collections", self.database.name),
            ) from e

    async def _drop_collection(self, name: str, existing: set[str] | None = None) -> None:
        if existing is not None and name not in existing:
            logger.info("Collection not found: %s", name)
            return
        try:
            await self.database.drop_collection(name)
        except OperationFailure as e:
            if e.code != _NAMESPACE_NOT_FOUND:
                raise FixtureDataError(
                    f"Failed to drop collection {name}: {e}",
                    context=self._context("drop_collection", name),
                    collection=name,
                ) from e
            logger.info("Collection not found: %s", name)
        except PyMongoError as e:
            raise FixtureDataError(
                f"Failed to drop collection {name}: {e}",
                context=self._context("drop_collection", name),
                collection=name,
            ) from e

    @staticmethod
    def _context(operation: str, target: str) -> ModelInfraErrorContext:
        return ModelInfraErrorContext(
            transport_type=EnumInfraTransportType.DATABASE,
            operation=operation,
            target_name=target,
        )


__all__: list[str] = ["FixtureManager", "FixtureSet"]
