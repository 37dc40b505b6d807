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
import math
from math import radians
from typing import Optional
from svgrestyle.geometric_types import Rect
from svgrestyle.svg_transform import Affine2D


# Rounding for emitted transform matrices
_TRANSFORM_NDIGITS = 6


# The paint we inject. Immutable; edits produce a new StyleSet.
@dataclasses.dataclass(frozen=True)
class StyleSet:
    fill_color: str = "currentColor"
    stroke_color: str = "none"
    stroke_width: float = 1.0
    opacity: float = 1.0
    scale: Optional[float] = None
    rotation: Optional[float] = None  # degrees

    def __post_init__(self):
        if not math.isfinite(self.stroke_width) or self.stroke_width < 0:
            raise ValueError(f"stroke_width must be >= 0, got {self.stroke_width}")
        if not 0 <= self.opacity <= 1:
            raise ValueError(f"opacity must be in [0, 1], got {self.opacity}")
        if self.scale is not None and not math.isfinite(self.scale):
            raise ValueError(f"scale must be finite, got {self.scale}")
        if self.rotation is not None and not math.isfinite(self.rotation):
            raise ValueError(f"rotation must be finite, got {self.rotation}")

    def replace(self, **changes) -> "StyleSet":
        return dataclasses.replace(self, **changes)

    def has_transform(self) -> bool:
        return self.scale is not None or self.rotation is not None

    def transform(self, view_box: Rect) -> Optional[Affine2D]:
        """Scale then rotate about the center of view_box.

        None if this StyleSet carries neither scale nor rotation.
        """
        if not self.has_transform():
            return None
        cx, cy = view_box.center()
        transform = Affine2D.identity()
        if self.rotation is not None:
            transform = transform.rotate(radians(self.rotation), cx, cy)
        if self.scale is not None:
            transform = (
                transform.translate(cx, cy).scale(self.scale).translate(-cx, -cy)
            )
        return transform.round(_TRANSFORM_NDIGITS)

    def transform_attr(self, view_box: Rect) -> Optional[str]:
        transform = self.transform(view_box)
        return transform.tostring() if transform is not None else None
