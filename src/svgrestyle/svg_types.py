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
from typing import List, Optional
from svgrestyle import svg_meta
from svgrestyle.svg_meta import parse_points, path_segment


class _PathBuilder:
    """Accumulates path data, one command at a time."""

    def __init__(self):
        self._segments: List[str] = []

    def _add_cmd(self, cmd, *args):
        self._segments.append(path_segment(cmd, *args))

    def M(self, x, y):
        self._add_cmd("M", x, y)

    def L(self, x, y):
        self._add_cmd("L", x, y)

    def H(self, x):
        self._add_cmd("H", x)

    def V(self, y):
        self._add_cmd("V", y)

    def A(self, rx, ry, x, y, large_arc=0, sweep=1):
        self._add_cmd("A", rx, ry, 0, large_arc, sweep, x, y)

    def end(self):
        self._add_cmd("Z")

    def d(self) -> str:
        return " ".join(self._segments)


# Subset of https://www.w3.org/TR/SVG11/painting.html
# Empty string means the attribute was not given.
@dataclasses.dataclass
class SVGShape:
    id: str = ""
    fill: str = ""
    stroke: str = ""
    style: str = ""

    def as_path_data(self) -> Optional[str]:
        """Equivalent path data, or None if the shape has nothing to draw."""
        raise NotImplementedError("You should implement as_path_data")

    def paints_none(self, attr_name: str) -> bool:
        """True if this shape explicitly turns fill or stroke off.

        A declaration in the inline style wins over the attribute.
        """
        attrib = {attr_name: getattr(self, attr_name), "style": self.style}
        return svg_meta.paints_none(attrib, attr_name)


# https://www.w3.org/TR/SVG11/paths.html#PathElement
@dataclasses.dataclass
class SVGPath(SVGShape):
    d: str = ""

    def as_path_data(self) -> Optional[str]:
        # already a path, pass it through unchanged
        return self.d if self.d.strip() else None


# https://www.w3.org/TR/SVG11/shapes.html#CircleElement
@dataclasses.dataclass
class SVGCircle(SVGShape):
    r: float = 0
    cx: float = 0
    cy: float = 0

    def as_path_data(self) -> Optional[str]:
        return SVGEllipse(rx=self.r, ry=self.r, cx=self.cx, cy=self.cy).as_path_data()


# https://www.w3.org/TR/SVG11/shapes.html#EllipseElement
@dataclasses.dataclass
class SVGEllipse(SVGShape):
    rx: float = 0
    ry: float = 0
    cx: float = 0
    cy: float = 0

    def as_path_data(self) -> Optional[str]:
        rx, ry, cx, cy = self.rx, self.ry, self.cx, self.cy
        if rx <= 0 or ry <= 0:
            return None
        path = _PathBuilder()
        # Some renderers drop a single arc that ends where it starts,
        # draw two halves starting at 9 o'clock.
        path.M(cx - rx, cy)
        path.A(rx, ry, cx + rx, cy, large_arc=1, sweep=0)
        path.A(rx, ry, cx - rx, cy, large_arc=1, sweep=0)
        path.end()
        return path.d()


# https://www.w3.org/TR/SVG11/shapes.html#LineElement
@dataclasses.dataclass
class SVGLine(SVGShape):
    x1: float = 0
    y1: float = 0
    x2: float = 0
    y2: float = 0

    def as_path_data(self) -> Optional[str]:
        path = _PathBuilder()
        path.M(self.x1, self.y1)
        path.L(self.x2, self.y2)
        return path.d()


# https://www.w3.org/TR/SVG11/shapes.html#PolylineElement
@dataclasses.dataclass
class SVGPolyline(SVGShape):
    points: str = ""

    def _trace(self, closed: bool) -> Optional[str]:
        points = parse_points(self.points)
        if not points:
            return None
        path = _PathBuilder()
        first, *rest = points
        path.M(*first)
        for pt in rest:
            path.L(*pt)
        if closed:
            path.end()
        return path.d()

    def as_path_data(self) -> Optional[str]:
        return self._trace(closed=False)


# https://www.w3.org/TR/SVG11/shapes.html#PolygonElement
@dataclasses.dataclass
class SVGPolygon(SVGPolyline):
    def as_path_data(self) -> Optional[str]:
        return self._trace(closed=True)


# https://www.w3.org/TR/SVG11/shapes.html#RectElement
@dataclasses.dataclass
class SVGRect(SVGShape):
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    rx: float = 0
    ry: float = 0

    def __post_init__(self):
        if self.rx <= 0:
            self.rx = self.ry
        if self.ry <= 0:
            self.ry = self.rx
        self.rx = max(min(self.rx, self.width / 2), 0)
        self.ry = max(min(self.ry, self.height / 2), 0)

    def as_path_data(self) -> Optional[str]:
        x, y, w, h, rx, ry = (
            self.x,
            self.y,
            self.width,
            self.height,
            self.rx,
            self.ry,
        )
        if w <= 0 or h <= 0:
            return None
        path = _PathBuilder()
        if rx > 0 and ry > 0:
            path.M(x + rx, y)
            path.H(x + w - rx)
            path.A(rx, ry, x + w, y + ry)
            path.V(y + h - ry)
            path.A(rx, ry, x + w - rx, y + h)
            path.H(x + rx)
            path.A(rx, ry, x, y + h - ry)
            path.V(y + ry)
            path.A(rx, ry, x + rx, y)
        else:
            path.M(x, y)
            path.H(x + w)
            path.V(y + h)
            path.H(x)
        path.end()
        return path.d()
