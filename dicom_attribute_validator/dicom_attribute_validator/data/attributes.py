# Copyright 2026 TIER IV, inc.
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

"""In-memory attribute sets (data records) and sequences of nested items."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .tag_utils import to_string


StringValues = Tuple[str, ...]
Value = Union[StringValues, bytes, "Sequence"]


class Sequence:
    """Ordered list of nested attribute sets (sequence items)."""

    def __init__(self, items: Optional[Iterable["AttributeSet"]] = None):
        self._items: List[AttributeSet] = list(items) if items is not None else []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator["AttributeSet"]:
        return iter(self._items)

    def __getitem__(self, index: int) -> "AttributeSet":
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sequence):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"Sequence({self._items!r})"

    def is_empty(self) -> bool:
        return not self._items

    def append(self, item: "AttributeSet") -> None:
        if not isinstance(item, AttributeSet):
            raise TypeError(f"Sequence items must be AttributeSet, got {type(item).__name__}")
        self._items.append(item)

    def new_item(self) -> "AttributeSet":
        item = AttributeSet()
        self._items.append(item)
        return item

    def copy(self, selection: Optional["AttributeSet"] = None) -> "Sequence":
        """Deep copy; with *selection*, items keep only the tags it contains."""
        copied = Sequence()
        for item in self._items:
            new_item = copied.new_item()
            for tag in item.tags():
                new_item.add_selected(item, selection, tag)
        return copied


def _normalize(value: Any) -> Value:
    if value is None:
        return ()
    if isinstance(value, (Sequence, bytes)):
        return value
    if isinstance(value, bytearray):
        return bytes(value)
    if isinstance(value, str):
        return (value,)
    if isinstance(value, AttributeSet):
        raise TypeError("Nested attribute sets must be wrapped in a Sequence")
    if isinstance(value, (list, tuple)):
        return tuple("" if v is None else str(v) for v in value)
    return (str(value),)


class AttributeSet:
    """Mapping from tag to value, iterated in ascending tag order.

    A value is one of:

    * a tuple of strings; its length is the value multiplicity,
    * a :class:`Sequence` of nested attribute sets,
    * opaque ``bytes``.

    An absent key means the attribute is not present. An empty tuple or an
    empty sequence means the attribute is present with an empty value.
    """

    def __init__(self) -> None:
        self._values: Dict[int, Value] = {}
        self._vrs: Dict[int, str] = {}

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, tag: object) -> bool:
        return tag in self._values

    def __iter__(self) -> Iterator[int]:
        return iter(self.tags())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AttributeSet):
            return NotImplemented
        return self._values == other._values and self._vrs == other._vrs

    def __repr__(self) -> str:
        inner = ", ".join(f"{to_string(tag)}: {self._values[tag]!r}" for tag in self.tags())
        return f"AttributeSet({{{inner}}})"

    # ---- mutation -----------------------------------------------------------

    def set_value(self, tag: int, value: Any, vr: Optional[str] = None) -> None:
        """Set the value of *tag*; a known VR is kept when *vr* is None."""
        self._values[tag] = _normalize(value)
        if vr is not None:
            self._vrs[tag] = vr

    def set_strings(self, tag: int, *values: str, vr: Optional[str] = None) -> None:
        self.set_value(tag, tuple(values), vr=vr)

    def new_sequence(self, tag: int) -> Sequence:
        seq = Sequence()
        self.set_value(tag, seq, vr="SQ")
        return seq

    def remove(self, tag: int) -> bool:
        self._vrs.pop(tag, None)
        return self._values.pop(tag, None) is not None

    def add_selected(
        self,
        source: "AttributeSet",
        selection: Optional["AttributeSet"],
        tag: int,
    ) -> bool:
        """Copy the value of *tag* from *source* into this set.

        Nothing is copied if *source* does not contain *tag*, or if a
        *selection* is given that does not contain it. Sequence items are
        reduced to the tags of the first item of the matching selection
        sequence, if there is one. An existing entry for *tag* is replaced.

        Returns:
            True if a value was copied.
        """
        if tag not in source._values:
            return False
        if selection is not None and tag not in selection._values:
            return False

        value = source._values[tag]
        if isinstance(value, Sequence):
            item_selection = None
            if selection is not None:
                selected = selection._values[tag]
                if isinstance(selected, Sequence) and len(selected) > 0:
                    item_selection = selected[0]
            value = value.copy(item_selection)

        self._values[tag] = value
        vr = source._vrs.get(tag)
        if vr is not None:
            self._vrs[tag] = vr
        else:
            self._vrs.pop(tag, None)
        return True

    def copy(self) -> "AttributeSet":
        copied = AttributeSet()
        for tag in self.tags():
            copied.add_selected(self, None, tag)
        return copied

    # ---- queries ------------------------------------------------------------

    def contains(self, tag: int) -> bool:
        return tag in self._values

    def tags(self) -> List[int]:
        return sorted(self._values)

    def size(self) -> int:
        return len(self._values)

    def is_empty(self) -> bool:
        return not self._values

    def get_value(self, tag: int) -> Optional[Value]:
        return self._values.get(tag)

    def get_vr(self, tag: int) -> Optional[str]:
        return self._vrs.get(tag)

    def get_sequence(self, tag: int) -> Optional[Sequence]:
        value = self._values.get(tag)
        return value if isinstance(value, Sequence) else None

    def get_strings(self, tag: int) -> Optional[StringValues]:
        """Return the string values of *tag*, or None if it is not present.

        Opaque values are decoded as ASCII with backslash separated values;
        sequences have no string values.
        """
        if tag not in self._values:
            return None
        value = self._values[tag]
        if isinstance(value, tuple):
            return value
        if isinstance(value, bytes):
            text = value.decode("ascii", errors="replace").rstrip(" \x00")
            return tuple(text.split("\\")) if text else ()
        return ()

    def get_string(self, tag: int, index: int = 0, default: Optional[str] = None) -> Optional[str]:
        values = self.get_strings(tag)
        if values is None or len(values) <= index:
            return default
        return values[index]

    @staticmethod
    def is_empty_value(value: Value) -> bool:
        return len(value) == 0
