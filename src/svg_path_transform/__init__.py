# This file is part of svg-path-transform.
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

from .matrix import Matrix as Matrix
from .path_parser import ParseErrorKind as ParseErrorKind
from .path_parser import PathParseError as PathParseError
from .path_parser import PathParser as PathParser
from .svg import Point as Point
from .svg import SvgItem as SvgItem
from .svg import SvgPath as SvgPath
from .transform_parser import TransformParser as TransformParser

__version__ = "0.1.0"
