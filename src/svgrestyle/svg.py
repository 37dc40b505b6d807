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

import dataclasses
from absl import logging
from lxml import etree  # pytype: disable=import-error
from typing import Generator, Optional, Tuple
from svgrestyle.geometric_types import Rect
from svgrestyle.svg_meta import (
    DEFAULT_VIEW_BOX,
    parse_number,
    parse_view_box,
    strip_ns,
    xlinkns,
)
from svgrestyle.svg_types import (
    SVGCircle,
    SVGEllipse,
    SVGLine,
    SVGPath,
    SVGPolygon,
    SVGPolyline,
    SVGRect,
    SVGShape,
)


_SHAPE_CLASSES = {
    "circle": SVGCircle,
    "ellipse": SVGEllipse,
    "line": SVGLine,
    "path": SVGPath,
    "polygon": SVGPolygon,
    "polyline": SVGPolyline,
    "rect": SVGRect,
}

_XLINK_TEMP = "xlink_"


def _attr_name(field_name: str) -> str:
    return field_name.replace("_", "-")


def _is_element(el) -> bool:
    # comments and processing instructions have a function for a tag
    return isinstance(el.tag, str)


def _is_shape(tag) -> bool:
    return strip_ns(tag) in _SHAPE_CLASSES


def _is_svg(tag) -> bool:
    return strip_ns(tag) == "svg"


def _copy_new_nsmap(tree, nsm):
    new_tree = etree.Element(tree.tag, nsmap=nsm)
    new_tree.attrib.update(tree.attrib)
    new_tree[:] = tree[:]
    return new_tree


def _fix_xlink_ns(tree):
    """Declare xlink and restore the href attributes we renamed to parse."""
    if "xlink" in tree.nsmap or not len(tree.xpath(f"//*[@{_XLINK_TEMP}]")):
        return tree
    nsm = dict(tree.nsmap)
    nsm["xlink"] = xlinkns()
    tree = _copy_new_nsmap(tree, nsm)
    for el in tree.xpath(f"//*[@{_XLINK_TEMP}]"):
        # try to retain attrib order, unexpected when they shuffle
        attrs = [(k, v) for k, v in el.attrib.items()]
        el.attrib.clear()
        for name, value in attrs:
            if name == _XLINK_TEMP:
                name = f"{{{xlinkns()}}}href"
            el.attrib[name] = value
    return tree


def from_element(el) -> SVGShape:
    if not _is_shape(el.tag):
        raise ValueError(f"Bad tag <{el.tag}>")
    data_type = _SHAPE_CLASSES[strip_ns(el.tag)]
    args = {}
    for f in dataclasses.fields(data_type):
        raw = el.attrib.get(_attr_name(f.name))
        if raw is None:
            continue
        args[f.name] = parse_number(raw) if f.type is float else raw
    return data_type(**args)


def clean_svg_content(text: str) -> str:
    return text.strip()


def is_valid_svg(text) -> bool:
    """True if text parses as XML and has an <svg> root. Never raises."""
    try:
        SVG.fromstring(text)
    except Exception as e:  # any failure just means "not an svg we can use"
        logging.debug("Rejecting svg: %s", e)
        return False
    return True


class SVG:

    svg_root: etree.Element

    def __init__(self, svg_root):
        self.svg_root = svg_root

    def view_box(self) -> Optional[Rect]:
        """The viewBox, else a box derived from width/height, else None."""
        raw_view_box = self.svg_root.attrib.get("viewBox", "")
        if raw_view_box.strip():
            try:
                return parse_view_box(raw_view_box)
            except ValueError as e:
                logging.debug("Ignoring viewBox: %s", e)

        # if there is no usable viewbox try to use width/height, minus any unit
        w = parse_number(self.svg_root.attrib.get("width"))
        h = parse_number(self.svg_root.attrib.get("height"))
        if w > 0 and h > 0:
            return Rect(0, 0, w, h)
        return None

    def view_box_or_default(self) -> Rect:
        view_box = self.view_box()
        if view_box is None:
            return DEFAULT_VIEW_BOX
        return view_box

    def iter_shape_elements(self) -> Generator[etree.Element, None, None]:
        """Shape elements below the root, in document order."""
        for el in self.svg_root.iterdescendants():
            if _is_element(el) and _is_shape(el.tag):
                yield el

    def shapes(self) -> Tuple[SVGShape, ...]:
        """Returns all shapes in order encountered."""
        return tuple(from_element(el) for el in self.iter_shape_elements())

    def tostring(self, pretty_print=False):
        return etree.tostring(
            self.svg_root, encoding="unicode", pretty_print=pretty_print
        )

    @classmethod
    def fromstring(cls, string):
        if isinstance(string, bytes):
            string = string.decode("utf-8")
        string = clean_svg_content(string)

        # svgs are fond of not declaring xlink
        # based on https://mailman-mail5.webfaction.com/pipermail/lxml/20100323/021184.html
        if "xlink" in string and "xmlns:xlink" not in string:
            string = string.replace("xlink:href", _XLINK_TEMP)

        # encode because fromstring dislikes xml encoding decl if input is str
        parser = etree.XMLParser(
            remove_blank_text=True, resolve_entities=False, no_network=True
        )
        tree = etree.fromstring(string.encode("utf-8"), parser)
        if not _is_svg(tree.tag):
            raise ValueError(f"Root must be <svg>, not <{strip_ns(tree.tag)}>")
        tree = _fix_xlink_ns(tree)
        return cls(tree)
