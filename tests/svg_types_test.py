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

import pytest
from svgrestyle.svg_types import (
    SVGCircle,
    SVGEllipse,
    SVGLine,
    SVGPath,
    SVGPolygon,
    SVGPolyline,
    SVGRect,
)


@pytest.mark.parametrize(
    "shape, expected_result",
    [
        # plain rect
        (SVGRect(width=10, height=5), "M 0 0 H 10 V 5 H 0 Z"),
        # offset, decimals
        (SVGRect(x=1.5, y=2, width=3, height=4), "M 1.5 2 H 4.5 V 6 H 1.5 Z"),
        # explicit zero radius is a sharp corner
        (SVGRect(width=10, height=5, rx=0), "M 0 0 H 10 V 5 H 0 Z"),
        # rounded, both radii
        (
            SVGRect(width=10, height=6, rx=2, ry=1),
            "M 2 0 H 8 A 2 1 0 0 1 10 1 V 5 A 2 1 0 0 1 8 6 "
            "H 2 A 2 1 0 0 1 0 5 V 1 A 2 1 0 0 1 2 0 Z",
        ),
        # only rx given, ry follows
        (
            SVGRect(width=10, height=10, rx=2),
            "M 2 0 H 8 A 2 2 0 0 1 10 2 V 8 A 2 2 0 0 1 8 10 "
            "H 2 A 2 2 0 0 1 0 8 V 2 A 2 2 0 0 1 2 0 Z",
        ),
        # only ry given, rx follows
        (
            SVGRect(width=10, height=10, ry=3),
            "M 3 0 H 7 A 3 3 0 0 1 10 3 V 7 A 3 3 0 0 1 7 10 "
            "H 3 A 3 3 0 0 1 0 7 V 3 A 3 3 0 0 1 3 0 Z",
        ),
        # radii clamped to half the side
        (
            SVGRect(width=4, height=2, rx=10, ry=10),
            "M 2 0 H 2 A 2 1 0 0 1 4 1 V 1 A 2 1 0 0 1 2 2 "
            "H 2 A 2 1 0 0 1 0 1 V 1 A 2 1 0 0 1 2 0 Z",
        ),
        # negative radius ignored
        (SVGRect(width=10, height=5, rx=-1), "M 0 0 H 10 V 5 H 0 Z"),
    ],
)
def test_rect_path_data(shape, expected_result):
    actual = shape.as_path_data()
    print(f"A: {actual}")
    print(f"E: {expected_result}")
    assert actual == expected_result


@pytest.mark.parametrize(
    "shape",
    [
        SVGRect(width=0, height=5),
        SVGRect(width=5, height=0),
        SVGRect(width=-5, height=5),
        SVGCircle(cx=5, cy=5, r=0),
        SVGCircle(cx=5, cy=5, r=-1),
        SVGEllipse(cx=5, cy=5, rx=0, ry=3),
        SVGEllipse(cx=5, cy=5, rx=3, ry=0),
        SVGPolyline(points=""),
        SVGPolyline(points="1"),
        SVGPolygon(points="  "),
        SVGPolygon(points="a,b c,d"),
        SVGPath(),
        SVGPath(d="   "),
    ],
)
def test_not_representable(shape):
    assert shape.as_path_data() is None


def test_circle_is_two_arcs():
    d = SVGCircle(cx=5, cy=5, r=3).as_path_data()
    assert d == "M 2 5 A 3 3 0 1 0 8 5 A 3 3 0 1 0 2 5 Z"
    assert d.startswith("M 2 5 ")
    assert d.count("A ") == 2


def test_ellipse_is_two_arcs():
    d = SVGEllipse(cx=10, cy=20, rx=4, ry=2.5).as_path_data()
    assert d == "M 6 20 A 4 2.5 0 1 0 14 20 A 4 2.5 0 1 0 6 20 Z"


def test_line():
    assert SVGLine(x1=1, y1=2, x2=3.5, y2=4).as_path_data() == "M 1 2 L 3.5 4"


def test_degenerate_line_still_draws():
    assert SVGLine().as_path_data() == "M 0 0 L 0 0"


@pytest.mark.parametrize(
    "points, expected_polyline, expected_polygon",
    [
        ("0,0 10,0 10,10", "M 0 0 L 10 0 L 10 10", "M 0 0 L 10 0 L 10 10 Z"),
        # whitespace only, newlines, extra separators
        ("0 0\n10 0 ,  10 10", "M 0 0 L 10 0 L 10 10", "M 0 0 L 10 0 L 10 10 Z"),
        # trailing unpaired value dropped
        ("0,0 10,0 10", "M 0 0 L 10 0", "M 0 0 L 10 0 Z"),
        # non-finite pair dropped
        ("0,0 nan,1 inf,2 5,5", "M 0 0 L 5 5", "M 0 0 L 5 5 Z"),
        # a single point
        ("3,4", "M 3 4", "M 3 4 Z"),
        # negative, decimal, exponent
        ("-1.5,2e1 .5,-3", "M -1.5 20 L 0.5 -3", "M -1.5 20 L 0.5 -3 Z"),
    ],
)
def test_poly_path_data(points, expected_polyline, expected_polygon):
    assert SVGPolyline(points=points).as_path_data() == expected_polyline
    assert SVGPolygon(points=points).as_path_data() == expected_polygon


def test_path_passes_through():
    d = "m1,1 2,0 1,3 c1,-1 2,4 3,3z"
    assert SVGPath(d=d).as_path_data() == d


@pytest.mark.parametrize(
    "shape, attr_name, expected_result",
    [
        (SVGCircle(r=1, fill="none", stroke="red"), "fill", True),
        (SVGCircle(r=1, fill="none", stroke="red"), "stroke", False),
        (SVGRect(style="fill:none"), "fill", True),
        (SVGRect(style="stroke: none; opacity: 0.5"), "stroke", True),
        (SVGRect(fill="none", style="fill:blue"), "fill", False),
        (SVGRect(style="fill:none;mask:url(http://x/y#m)"), "fill", True),
        (SVGRect(style="fill"), "fill", False),
        (SVGRect(), "fill", False),
    ],
)
def test_paints_none(shape, attr_name, expected_result):
    assert shape.paints_none(attr_name) == expected_result

