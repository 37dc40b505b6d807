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

"""Rewrite arbitrary svg as a path-only document carrying our paint.

Every convertible shape becomes one <path>, in document order, tagged with
its index so a single shape can be restyled later.
"""
import dataclasses
from absl import logging
from lxml import etree  # pytype: disable=import-error
from typing import Dict, NamedTuple, Optional, Tuple
from svgrestyle.svg import SVG
from svgrestyle.svg_meta import (
    DEFAULT_VIEW_BOX,
    PRESERVE_ASPECT_RATIO,
    SHAPE_INDEX_ATTR,
    ntos,
    parse_view_box,
    strip_ns,
    svgns,
    view_box_string,
)
from svgrestyle.style import StyleSet


@dataclasses.dataclass(frozen=True)
class PathElement:
    index: int
    d: str
    fill: str
    stroke: str
    stroke_width: float
    opacity: float
    transform: Optional[str] = None

    def attrib(self) -> Dict[str, str]:
        attrib = {"d": self.d, "fill": self.fill}
        if self.stroke != "none":
            attrib["stroke"] = self.stroke
            attrib["stroke-width"] = ntos(float(self.stroke_width))
        attrib["opacity"] = ntos(float(self.opacity))
        if self.transform:
            attrib["transform"] = self.transform
        attrib[SHAPE_INDEX_ATTR] = str(self.index)
        return attrib

    @classmethod
    def from_element(cls, el: etree.Element) -> "PathElement":
        return cls(
            index=int(el.attrib[SHAPE_INDEX_ATTR]),
            d=el.attrib.get("d", ""),
            fill=el.attrib.get("fill", "none"),
            stroke=el.attrib.get("stroke", "none"),
            stroke_width=float(el.attrib.get("stroke-width", 0)),
            opacity=float(el.attrib.get("opacity", 1)),
            transform=el.attrib.get("transform"),
        )


@dataclasses.dataclass(frozen=True)
class NormalizedDocument:
    view_box: str = view_box_string(DEFAULT_VIEW_BOX)
    paths: Tuple[PathElement, ...] = ()

    def __post_init__(self):
        indices = [p.index for p in self.paths]
        if indices != list(range(len(indices))):
            raise ValueError(f"Path indices must count up from 0, got {indices}")

    def root_attrib(self) -> Dict[str, str]:
        return {
            "xmlns": svgns(),
            "viewBox": self.view_box,
            "preserveAspectRatio": PRESERVE_ASPECT_RATIO,
        }

    def toetree(self) -> etree.Element:
        root = etree.Element(f"{{{svgns()}}}svg", nsmap={None: svgns()})
        for name, value in self.root_attrib().items():
            if name != "xmlns":  # lxml owns namespace declarations
                root.attrib[name] = value
        for path in self.paths:
            etree.SubElement(root, f"{{{svgns()}}}path", path.attrib())
        return root

    def tostring(self, pretty_print=False) -> str:
        return etree.tostring(
            self.toetree(), encoding="unicode", pretty_print=pretty_print
        )

    @classmethod
    def fromstring(cls, string) -> "NormalizedDocument":
        """Recover a document from our own serialized output."""
        svg = SVG.fromstring(string)
        paths = tuple(
            PathElement.from_element(el)
            for el in svg.svg_root.iterdescendants()
            if isinstance(el.tag, str)
            and strip_ns(el.tag) == "path"
            and SHAPE_INDEX_ATTR in el.attrib
        )
        view_box = parse_view_box(svg.svg_root.attrib["viewBox"])
        return cls(view_box=view_box_string(view_box), paths=paths)


class NormalizeResult(NamedTuple):
    document: NormalizedDocument
    path_count: int


def _paint(shape, attr_name: str, color: str) -> str:
    if shape.paints_none(attr_name):
        return "none"
    return color


def normalize(source_text, styles: StyleSet) -> NormalizeResult:
    """Convert source_text to a path-only document painted with styles.

    Never raises for bad input: unparseable text, or text that isn't an svg,
    gives an empty document and a path_count of 0.
    """
    try:
        svg = SVG.fromstring(source_text)
    except Exception as e:
        logging.warning("Unable to parse svg, nothing to normalize: %s", e)
        return NormalizeResult(NormalizedDocument(), 0)

    view_box = svg.view_box_or_default()
    transform = styles.transform_attr(view_box)

    paths = []
    for shape in svg.shapes():
        d = shape.as_path_data()
        if d is None:
            logging.debug("Skipping %s, nothing to draw", type(shape).__name__)
            continue
        stroke = _paint(shape, "stroke", styles.stroke_color)
        paths.append(
            PathElement(
                index=len(paths),
                d=d,
                fill=_paint(shape, "fill", styles.fill_color),
                stroke=stroke,
                stroke_width=styles.stroke_width if stroke != "none" else 0.0,
                opacity=styles.opacity,
                transform=transform,
            )
        )

    if not paths:
        logging.warning("No drawable shapes in svg")
    document = NormalizedDocument(
        view_box=view_box_string(view_box), paths=tuple(paths)
    )
    return NormalizeResult(document, len(paths))
