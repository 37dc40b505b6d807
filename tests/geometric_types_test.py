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

from svgrestyle.geometric_types import Point, Rect
import pytest


@pytest.mark.parametrize(
    "rect, expected_center",
    [
        (Rect(0, 0, 24, 24), Point(12, 12)),
        (Rect(-5, 10, 10, 5), Point(0, 12.5)),
        (Rect(1, 1, 0, 0), Point(1, 1)),
    ],
)
def test_rect_center(rect, expected_center):
    assert rect.center() == expected_center
