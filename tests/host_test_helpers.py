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

import asyncio
import itertools
from typing import Dict, List, Optional
from svgrestyle.host import HostTree


class FakeNode:
    """A host node; refs handed out by the fake are these."""

    def __init__(self, node_id: int, parent: Optional["FakeNode"]):
        self.node_id = node_id
        self.parent = parent
        self.tag = None
        self.attrib: Dict[str, str] = {}
        self.children: List["FakeNode"] = []

    def __repr__(self):
        return f"FakeNode({self.node_id}, {self.tag})"


class FakeHostTree(HostTree):
    """In-memory host tree that records every call it receives."""

    def __init__(self, selected=None, leaf_tags=(), fail_after=None):
        self._ids = itertools.count()
        self.top_level: List[FakeNode] = []
        self.selected = selected
        # nodes with these tags refuse children
        self.leaf_tags = set(leaf_tags)
        # raise once this many set_attribute calls have gone through
        self.fail_after = fail_after
        self.calls = []
        self.notices = []

    def new_node(self, tag=None, parent=None) -> FakeNode:
        node = FakeNode(next(self._ids), parent)
        node.tag = tag
        if parent is None:
            self.top_level.append(node)
        else:
            parent.children.append(node)
        return node

    async def create_child_node(self, parent):
        self.calls.append(("create_child_node", parent))
        await asyncio.sleep(0)
        return self.new_node(parent=parent)

    async def set_tag(self, node, tag):
        self.calls.append(("set_tag", node, tag))
        node.tag = tag

    async def set_attribute(self, node, name, value):
        set_attribute_calls = sum(1 for c in self.calls if c[0] == "set_attribute")
        if self.fail_after is not None and set_attribute_calls >= self.fail_after:
            raise RuntimeError("host went away")
        self.calls.append(("set_attribute", node, name, value))
        assert isinstance(value, str), f"{name}={value!r} is not a str"
        node.attrib[name] = value

    async def get_selected_node(self):
        return self.selected

    async def can_host_children(self, node):
        return node.tag not in self.leaf_tags

    async def notify(self, kind, message):
        self.notices.append((kind, message))

    def nodes_with_tag(self, tag) -> List[FakeNode]:
        result = []
        stack = list(reversed(self.top_level))
        while stack:
            node = stack.pop()
            if node.tag == tag:
                result.append(node)
            stack.extend(reversed(node.children))
        return result
