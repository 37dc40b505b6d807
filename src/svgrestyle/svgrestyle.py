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

"""Rewrite svg as restyleable paths.

Usage:
svgrestyle --fill='#ff0000' --stroke=black --stroke_width=2 icon.svg
<path-only svg dumped to stdout>

svgrestyle --preview --opacity=0.5 icon.svg
<original shapes, restyled, dumped to stdout>
"""
from absl import app
from absl import flags
from absl import logging
from svgrestyle.normalize import normalize
from svgrestyle.preview import apply_preview_style
from svgrestyle.style import StyleSet
from svgrestyle.svg import is_valid_svg
import sys


FLAGS = flags.FLAGS


flags.DEFINE_string("fill", "currentColor", "Fill color for shapes not filled 'none'")
flags.DEFINE_string("stroke", "none", "Stroke color for shapes not stroked 'none'")
flags.DEFINE_float("stroke_width", 1.0, "Stroke width", lower_bound=0.0)
flags.DEFINE_float("opacity", 1.0, "Opacity", lower_bound=0.0, upper_bound=1.0)
flags.DEFINE_float("scale", None, "Scale about the viewBox center")
flags.DEFINE_float("rotation", None, "Rotation in degrees about the viewBox center")
flags.DEFINE_bool("preview", False, "Restyle shapes in place instead of normalizing")
flags.DEFINE_string("output_file", "-", "Output SVG file ('-' means stdout)")


def _styles_from_flags() -> StyleSet:
    return StyleSet(
        fill_color=FLAGS.fill,
        stroke_color=FLAGS.stroke,
        stroke_width=FLAGS.stroke_width,
        opacity=FLAGS.opacity,
        scale=FLAGS.scale,
        rotation=FLAGS.rotation,
    )


def _run(argv):
    try:
        input_file = argv[1]
    except IndexError:
        input_file = None

    if input_file:
        with open(input_file, encoding="utf-8") as f:
            source = f.read()
    else:
        source = sys.stdin.read()

    if not is_valid_svg(source):
        raise app.UsageError(f"{input_file or 'stdin'} is not a valid svg")

    styles = _styles_from_flags()
    if FLAGS.preview:
        output = apply_preview_style(source, styles)
    else:
        result = normalize(source, styles)
        if result.path_count == 0:
            logging.warning("No shapes to convert in %s", input_file or "stdin")
        output = result.document.tostring(pretty_print=True)

    if FLAGS.output_file == "-":
        print(output)
    else:
        with open(FLAGS.output_file, "w", encoding="utf-8") as f:
            f.write(output)


def main(argv=None):
    # We don't seem to be __main__ when run as cli tool installed by setuptools
    app.run(_run, argv=argv)


if __name__ == "__main__":
    main()
