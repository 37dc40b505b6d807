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

"""Build normalized svg in a host document tree and restyle it in place.

The host tree is asynchronous and opaque: node refs it hands back are only
ever passed back to it, never inspected.
"""
import abc
import dataclasses
from absl import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union
from svgrestyle.geometric_types import Rect
from svgrestyle.normalize import NormalizedDocument, PathElement
from svgrestyle.svg_meta import ROOT_MARKER_ATTR, ntos, parse_view_box
from svgrestyle.style import StyleSet


# Target every path rather than a single shape index
ALL = "all"

PathTarget = Union[str, int]

HostNodeRef = Any

_CONTAINER_TAG = "div"


class HostTreeError(Exception):
    """The host tree refused or failed an operation."""


class HostTree(abc.ABC):
    """The document tree we insert into."""

    @abc.abstractmethod
    async def create_child_node(self, parent: Optional[HostNodeRef]) -> HostNodeRef:
        """Create a node under parent; None means at the top of the document."""

    @abc.abstractmethod
    async def set_tag(self, node: HostNodeRef, tag: str):
        ...

    @abc.abstractmethod
    async def set_attribute(self, node: HostNodeRef, name: str, value: str):
        ...

    @abc.abstractmethod
    async def get_selected_node(self) -> Optional[HostNodeRef]:
        ...

    async def can_host_children(self, node: HostNodeRef) -> bool:
        return True

    async def notify(self, kind: str, message: str):
        """Show the user a Success, Warning or Error notice."""
        if kind == "Error":
            logging.error("%s", message)
        elif kind == "Warning":
            logging.warning("%s", message)
        else:
            logging.info("%s", message)


@dataclasses.dataclass(frozen=True)
class MaterializedInsertion:
    container: HostNodeRef
    svg_root: HostNodeRef
    paths: Tuple[HostNodeRef, ...]
    # shape index of each of paths, same order
    shape_indices: Tuple[int, ...]
    view_box: Rect


def check_path_target(path_target: PathTarget):
    if path_target == ALL:
        return
    # bool is an int; True is not a shape index
    if isinstance(path_target, bool) or not isinstance(path_target, int):
        raise ValueError(
            f'Path target must be "{ALL}" or an index, not {path_target!r}'
        )
    if path_target < 0:
        raise ValueError(f"Path target index must be >= 0, not {path_target}")


def _selected(path_target: PathTarget, index: int) -> bool:
    return path_target == ALL or index == path_target


def _paint_attrib(styles: StyleSet, view_box: Rect) -> Dict[str, str]:
    attrib = {
        "opacity": ntos(float(styles.opacity)),
        "fill": styles.fill_color,
        "stroke": styles.stroke_color,
        "stroke-width": ntos(float(styles.stroke_width)),
    }
    transform = styles.transform_attr(view_box)
    if transform:
        attrib["transform"] = transform
    return attrib


async def _set_attributes(
    host: HostTree, node: HostNodeRef, attrib: Mapping[str, str]
):
    for name, value in attrib.items():
        # hosts reject empty attribute values
        if value is None or value == "":
            continue
        await host.set_attribute(node, name, str(value))


async def _append_with_tag(
    host: HostTree, parent: Optional[HostNodeRef], tag: str, attrib: Mapping[str, str]
) -> HostNodeRef:
    node = await host.create_child_node(parent)
    await host.set_tag(node, tag)
    await _set_attributes(host, node, attrib)
    return node


async def _container(host: HostTree) -> HostNodeRef:
    selected = await host.get_selected_node()
    if selected is not None and await host.can_host_children(selected):
        return selected
    container = await _append_with_tag(host, None, _CONTAINER_TAG, {})
    if not await host.can_host_children(container):
        raise HostTreeError("Host refused to create a container for the svg")
    return container


async def materialize(
    host: HostTree,
    document: NormalizedDocument,
    styles: StyleSet,
    path_target: PathTarget = ALL,
) -> MaterializedInsertion:
    """Create container > svg > path nodes for document in the host tree.

    Paths are created one at a time in document order, so the nth node ref
    is the nth selected path. Nodes created before a failure stay where they
    are; the failure is raised as HostTreeError.

    Args:
        host: the tree to build in.
        document: normalized paths, paint and transform included.
        styles: the StyleSet document was normalized with. Not read; its
            paint is already in document, which also kept any explicit
            "none". Taken so materialize and restyle share a signature.
        path_target: ALL, or the index of the one shape to insert.
    """
    check_path_target(path_target)
    del styles  # already applied by normalize
    selected_paths: Sequence[PathElement] = [
        p for p in document.paths if _selected(path_target, p.index)
    ]
    try:
        container = await _container(host)
        root_attrib = dict(document.root_attrib())
        root_attrib[ROOT_MARKER_ATTR] = "1"
        svg_root = await _append_with_tag(host, container, "svg", root_attrib)
        paths = []
        for path in selected_paths:
            paths.append(await _append_with_tag(host, svg_root, "path", path.attrib()))
    except HostTreeError:
        raise
    except Exception as e:
        raise HostTreeError(f"Unable to insert svg: {e}") from e

    logging.info("Inserted svg with %d of %d paths", len(paths), len(document.paths))
    return MaterializedInsertion(
        container=container,
        svg_root=svg_root,
        paths=tuple(paths),
        shape_indices=tuple(p.index for p in selected_paths),
        view_box=parse_view_box(document.view_box),
    )


async def restyle(
    host: HostTree,
    insertion: Optional[MaterializedInsertion],
    styles: StyleSet,
    path_target: PathTarget = ALL,
) -> bool:
    """Overwrite paint on already inserted paths.

    Returns False if there is nothing to restyle, in which case the caller
    should materialize instead.

    Fill and stroke are always overwritten, even where the source said
    "none": the host gives us no way to read back what a node had.
    """
    check_path_target(path_target)
    if insertion is None:
        return False
    targets = [
        node
        for node, index in zip(insertion.paths, insertion.shape_indices)
        if _selected(path_target, index)
    ]
    if not targets:
        logging.info("No inserted path matches %r", path_target)
        return False

    attrib = _paint_attrib(styles, insertion.view_box)
    try:
        for node in targets:
            await _set_attributes(host, node, attrib)
    except HostTreeError:
        raise
    except Exception as e:
        raise HostTreeError(f"Unable to restyle svg: {e}") from e

    logging.info("Restyled %d paths", len(targets))
    return True
