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

import math
import re
from lxml import etree  # pytype: disable=import-error
from typing import Dict, List, Mapping, Optional
from svgrestyle.geometric_types import Point, Rect


# Attribute tagging each generated <path> with its source shape index
SHAPE_INDEX_ATTR = "data-shape-index"

# Attribute marking the <svg> node created in the host tree
ROOT_MARKER_ATTR = "data-svg-root"

# When a document has neither viewBox nor usable width/height
DEFAULT_VIEW_BOX = Rect(0, 0, 24, 24)

PRESERVE_ASPECT_RATIO = "xMidYMid meet"

# Elements whose paint the preview rewrites, also the shapes we know how to convert
STYLEABLE_TAGS = frozenset(
    {"path", "rect", "circle", "ellipse", "line", "polyline", "polygon"}
)


def svgns():
    return "http://www.w3.org/2000/svg"


def xlinkns():
    return "http://www.w3.org/1999/xlink"


def splitns(name):
    qn = etree.QName(name)
    return qn.namespace, qn.localname


def strip_ns(tagname):
    return splitns(tagname)[1]


# https://www.w3.org/TR/SVG11/paths.html#PathData
_CMD_ARGS = {
    "M": 2,
    "Z": 0,
    "L": 2,
    "H": 1,
    "V": 1,
    "A": 7,
}


def check_cmd(cmd, args):
    if not cmd in _CMD_ARGS:
        raise ValueError(f'Invalid svg command "{cmd}"')
    cmd_args = _CMD_ARGS[cmd]
    if cmd_args == 0:
        if args:
            raise ValueError(f"{cmd} has no args, {len(args)} invalid")
    elif len(args) != cmd_args:
        raise ValueError(f"{cmd} takes {cmd_args} args, {len(args)} invalid")
    return cmd_args


def ntos(n: float) -> str:
    # strip superflous .0 decimals
    return str(int(n)) if isinstance(n, float) and n.is_integer() else str(n)


def path_segment(cmd, *args):
    # single spaces throughout, hosts compare path data as plain strings
    check_cmd(cmd, args)
    return " ".join([cmd] + [ntos(a) for a in args])


_FLOAT_RE = re.compile(
    r"\s*[-+]?"  # optional sign
    r"(?:"
    r"[0-9]+(?:\.[0-9]*)?"  # int or float
    r"|"
    r"(?:\.[0-9]+)"  # float with leading dot (e.g. '.42')
    r")"
    r"(?:[eE][-+]?[0-9]+)?"  # optional scientific notiation
)
_POINTS_SEPARATOR_RE = re.compile(r"[\s,]+")


def parse_number(s: Optional[str], default: float = 0.0) -> float:
    """Parse the leading number of an attribute value.

    Trailing garbage such as a unit suffix is ignored ("10px" => 10.0).
    Missing, unparseable and non-finite values yield default.
    """
    if s is None:
        return default
    match = _FLOAT_RE.match(s)
    if not match:
        return default
    value = float(match.group(0))
    if not math.isfinite(value):
        return default
    return value


def _finite_or_none(s: str) -> Optional[float]:
    try:
        value = float(s)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_points(s: str) -> List[Point]:
    """Parse a polyline/polygon points list.

    A trailing unpaired value is dropped, as is any pair with a value that
    isn't a finite number.
    """
    values = [v for v in _POINTS_SEPARATOR_RE.split(s.strip()) if v]
    points = []
    for i in range(0, len(values) - 1, 2):
        x, y = _finite_or_none(values[i]), _finite_or_none(values[i + 1])
        if x is None or y is None:
            continue
        points.append(Point(x, y))
    return points


def parse_css_declarations(style: str) -> Dict[str, str]:
    """Parse CSS declaration list into {property: value}.

    Args:
        style: CSS declaration list without the enclosing braces,
            as found in an SVG element's "style" attribute.

    Returns:
        The declared properties. A later declaration of a property overrides
        an earlier one. Only the first colon separates name from value, so
        values such as url(http://...) are kept whole; declarations with no
        colon at all are skipped.

    References:
    https://www.w3.org/TR/SVG/styling.html#ElementSpecificStyling
    https://www.w3.org/TR/2013/REC-css-style-attr-20131107/#syntax
    """
    output = {}
    for declaration in style.split(";"):
        property_name, sep, value = declaration.partition(":")
        property_name = property_name.strip()
        if not sep or not property_name:
            continue
        output[property_name] = value.strip()
    return output


def paints_none(attrib: Mapping[str, str], property_name: str) -> bool:
    """True if attrib explicitly turns fill or stroke off.

    The inline style outranks the presentation attribute of the same name.
    """
    declarations = parse_css_declarations(attrib.get("style") or "")
    value = declarations.get(property_name, attrib.get(property_name))
    return value is not None and value.strip() == "none"


def parse_view_box(s: str) -> Rect:
    box = tuple(float(v) for v in re.split(r"[\s,]+", s.strip()))
    if len(box) != 4:
        raise ValueError(f"Unable to parse viewBox: {s!r}")
    if not all(math.isfinite(v) for v in box):
        raise ValueError(f"Non-finite viewBox: {s!r}")
    return Rect(*box)


def view_box_string(box: Rect) -> str:
    return " ".join(ntos(float(v)) for v in box)
