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

"""Restyle svg markup in place for on-screen preview.

Unlike normalize, shapes keep their kind; only paint and sizing change.
"""
from absl import logging
from svgrestyle.svg import SVG
from svgrestyle.svg_meta import (
    STYLEABLE_TAGS,
    ntos,
    paints_none,
    strip_ns,
    view_box_string,
)
from svgrestyle.style import StyleSet


def _del_attrs(el, *attr_names):
    for name in attr_names:
        if name in el.attrib:
            del el.attrib[name]


def _is_percentage(value: str) -> bool:
    return value.strip().endswith("%")


def _style_element(el, styles: StyleSet, transform):
    if not paints_none(el.attrib, "fill"):
        el.attrib["fill"] = styles.fill_color
    if not paints_none(el.attrib, "stroke"):
        el.attrib["stroke"] = styles.stroke_color
        el.attrib["stroke-width"] = ntos(float(styles.stroke_width))
    el.attrib["opacity"] = ntos(float(styles.opacity))
    if transform:
        # ours applies after whatever the element already does
        own_transform = el.attrib.get("transform", "").strip()
        el.attrib["transform"] = f"{transform} {own_transform}".strip()


def apply_preview_style(source_text, styles: StyleSet) -> str:
    """Returns source_text restyled for preview, or unchanged if we can't."""
    try:
        svg = SVG.fromstring(source_text)
        root = svg.svg_root
        view_box = svg.view_box_or_default()
        if not root.attrib.get("viewBox", "").strip():
            root.attrib["viewBox"] = view_box_string(view_box)
        # let the artwork scale to its container
        for name in ("width", "height"):
            if name in root.attrib and not _is_percentage(root.attrib[name]):
                _del_attrs(root, name)

        transform = styles.transform_attr(view_box)
        for el in root.iterdescendants():
            if isinstance(el.tag, str) and strip_ns(el.tag) in STYLEABLE_TAGS:
                _style_element(el, styles, transform)
        return svg.tostring()
    except Exception as e:
        logging.warning("Unable to style preview, returning it as is: %s", e)
        return source_text
