# Copyright 2020 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Per-session record of what we inserted, so edits restyle instead of re-insert.

All work for one artifact is serialized: a newer apply waits for the one in
flight to settle. schedule_apply debounces edits; only the most recently
scheduled apply for an artifact ever runs.
"""
import asyncio
import itertools
from absl import logging
from typing import Dict, Hashable, Optional
from svgrestyle.host import (
    ALL,
    HostTree,
    HostTreeError,
    MaterializedInsertion,
    PathTarget,
    check_path_target,
    materialize,
    restyle,
)
from svgrestyle.normalize import normalize
from svgrestyle.style import StyleSet
from svgrestyle.svg import clean_svg_content, is_valid_svg


DEFAULT_DEBOUNCE_SECONDS = 0.3

ArtifactId = Hashable


class InsertionSession:
    """Owns the artifact => MaterializedInsertion map for one UI session."""

    def __init__(self, host: HostTree, debounce_seconds=DEFAULT_DEBOUNCE_SECONDS):
        self.host = host
        self.debounce_seconds = debounce_seconds
        self._insertions: Dict[ArtifactId, MaterializedInsertion] = {}
        self._locks: Dict[ArtifactId, asyncio.Lock] = {}
        self._pending: Dict[ArtifactId, asyncio.Task] = {}
        self._generation: Dict[ArtifactId, int] = {}
        self._generations = itertools.count(1)

    def insertion(self, artifact_id: ArtifactId) -> Optional[MaterializedInsertion]:
        return self._insertions.get(artifact_id)

    async def _notify(self, kind: str, message: str):
        try:
            await self.host.notify(kind, message)
        except Exception as e:
            logging.error("Unable to notify user (%s: %s): %s", kind, message, e)

    def _lock(self, artifact_id: ArtifactId) -> asyncio.Lock:
        if artifact_id not in self._locks:
            self._locks[artifact_id] = asyncio.Lock()
        return self._locks[artifact_id]

    async def apply(
        self,
        artifact_id: ArtifactId,
        source_text: str,
        styles: StyleSet,
        path_target: PathTarget = ALL,
    ) -> Optional[MaterializedInsertion]:
        """Restyle what we inserted for artifact_id, inserting it first if need be.

        Returns the insertion, or None if nothing was inserted. Problems are
        reported to the user through the host, never raised.
        """
        check_path_target(path_target)
        async with self._lock(artifact_id):
            return await self._apply(artifact_id, source_text, styles, path_target)

    async def _apply(self, artifact_id, source_text, styles, path_target):
        existing = self._insertions.get(artifact_id)
        try:
            if await restyle(self.host, existing, styles, path_target):
                return existing

            source_text = clean_svg_content(source_text or "")
            if not is_valid_svg(source_text):
                await self._notify("Error", "Please provide valid SVG code.")
                return None

            result = normalize(source_text, styles)
            if result.path_count == 0:
                await self._notify("Warning", "SVG has no shapes to insert.")
                return None
            if path_target != ALL and path_target >= result.path_count:
                await self._notify(
                    "Warning", f"SVG has no shape at index {path_target}."
                )
                return existing

            insertion = await materialize(
                self.host, result.document, styles, path_target
            )
        except HostTreeError as e:
            logging.warning("Apply of %r failed: %s", artifact_id, e)
            await self._notify("Error", f"Unable to apply SVG: {e}")
            return existing
        self._insertions[artifact_id] = insertion
        await self._notify("Success", "SVG inserted.")
        return insertion

    def schedule_apply(
        self,
        artifact_id: ArtifactId,
        source_text: str,
        styles: StyleSet,
        path_target: PathTarget = ALL,
        delay: Optional[float] = None,
    ) -> asyncio.Task:
        """Apply after delay unless another apply is scheduled for artifact_id first.

        Must be called from within a running event loop.
        """
        check_path_target(path_target)
        if delay is None:
            delay = self.debounce_seconds

        pending = self._pending.pop(artifact_id, None)
        if pending is not None:
            pending.cancel()
        generation = next(self._generations)
        self._generation[artifact_id] = generation

        async def _delayed_apply():
            await asyncio.sleep(delay)
            # past this point we run to completion, no more cancelling
            if self._pending.get(artifact_id) is task:
                del self._pending[artifact_id]
            async with self._lock(artifact_id):
                if self._generation.get(artifact_id) != generation:
                    logging.debug("Superseded apply of %r skipped", artifact_id)
                    return None
                return await self._apply(artifact_id, source_text, styles, path_target)

        task = asyncio.ensure_future(_delayed_apply())
        self._pending[artifact_id] = task
        return task

    def remove(self, artifact_id: ArtifactId):
        """Forget artifact_id; the nodes we inserted stay in the host tree."""
        pending = self._pending.pop(artifact_id, None)
        if pending is not None:
            pending.cancel()
        self._generation.pop(artifact_id, None)
        self._insertions.pop(artifact_id, None)
        lock = self._locks.get(artifact_id)
        if lock is not None and not lock.locked():
            del self._locks[artifact_id]

    def close(self):
        for artifact_id in list(self._pending):
            self.remove(artifact_id)
        self._insertions.clear()
        self._generation.clear()
        self._locks.clear()
