# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""Errors raised while reading ANTEX files"""

from typing import Optional


class AntexError(ValueError):
    """Base class of ANTEX parse errors.

    Parameters
    ----------
    message : str
        What went wrong
    line_number : int, optional
        1-based number of the line the error was detected on
    token : str, optional
        The offending token or line content
    """

    def __init__(self, message: str, line_number: Optional[int] = None,
                 token: Optional[str] = None):
        self.message = message
        self.line_number = line_number
        self.token = token
        super().__init__(self._render())

    def _render(self) -> str:
        parts = [self.message]
        if self.line_number is not None:
            parts.append(f"line={self.line_number}")
        if self.token is not None:
            parts.append(f"token='{self.token}'")
        return ", ".join(parts)


class FieldParseError(AntexError):
    """A float, integer or date field could not be parsed"""


class GrammarError(AntexError):
    """A record is out of place or a PCV row has the wrong shape"""


class TerminatorNotFoundError(AntexError):
    """END OF ANTENNA or END OF FREQUENCY was not found before end of input.

    ``compounded`` is set when the terminator went missing while skipping
    ahead after an earlier error; that error is then the ``__cause__``.
    """

    def __init__(self, message: str, line_number: Optional[int] = None,
                 token: Optional[str] = None, compounded: bool = False):
        self.compounded = compounded
        super().__init__(message, line_number, token)


class AntexHeaderError(AntexError):
    """The file header does not identify an ANTEX file"""
