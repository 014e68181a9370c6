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


"""Line source feeding the ANTEX parsers"""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union


class LineSource:
    """Sequential reader over physical lines with a line counter.

    ``next()`` returns lines stripped of their line terminator and
    ``line_number`` is the 1-based number of the line last returned.
    Lines may be handed back with ``push_back()`` (last read first); the
    counter steps back with them so diagnostics keep pointing at the right line.
    """

    def __init__(self, lines: Iterable[str]):
        self._lines = iter(lines)
        self._pending: List[str] = []
        self._exhausted = False
        self.line_number = 0

    @classmethod
    def from_text(cls, text: str) -> "LineSource":
        return cls(text.splitlines())

    @classmethod
    @contextmanager
    def from_path(cls, path: Union[str, Path]) -> Iterator["LineSource"]:
        """Open ``path`` and yield a LineSource over its lines"""
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(file_path)
        with file_path.open("r", encoding="utf-8", errors="replace") as fh:
            yield cls(fh)

    def has_next(self) -> bool:
        if self._pending:
            return True
        if self._exhausted:
            return False
        try:
            self._pending.append(next(self._lines))
        except StopIteration:
            self._exhausted = True
            return False
        return True

    def next(self) -> str:
        if not self.has_next():
            raise StopIteration
        line = self._pending.pop()
        self.line_number += 1
        return line.rstrip("\r\n")

    def push_back(self, line: str):
        """Return the line last read so that the next call yields it again"""
        if self.line_number == 0:
            raise RuntimeError("no line has been read yet")
        self._pending.append(line)
        self.line_number -= 1

    def read_line(self) -> Optional[str]:
        """Next line, or None at end of input"""
        return self.next() if self.has_next() else None

    def __iter__(self):
        return self

    def __next__(self) -> str:
        return self.next()
