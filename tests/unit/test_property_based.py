"""Property-based tests using hypothesis."""

from __future__ import annotations

import string
from typing import List, Optional

from hypothesis import given
from hypothesis import strategies as st

from vmxcodec import VmxKey, VmxModel, decode, marshal, parse_lines

# Any character a quoted VMX value can hold
VALUE_ALPHABET = (
    "".join(c for c in string.printable if c not in '"\r\n\x0b\x0c') + "äöüé€ß \x85"
)


class Nic(VmxModel):
    """Repeated element for property testing."""

    present: bool = VmxKey("present", default=False)
    name: str = VmxKey("name", omitempty=True, default="")


class Record(VmxModel):
    """Record for property testing."""

    flag: bool = VmxKey("flag", default=False)
    count: int = VmxKey("count", omitempty=True, default=0)
    label: str = VmxKey("label", default="")
    nics: List[Nic] = VmxKey("ethernet", default_factory=list)


class Tuned(VmxModel):
    """Record whose defaults differ from the zero values."""

    enabled: bool = VmxKey("enabled", omitempty=True, default=True)
    size: int = VmxKey("size", omitempty=True, default=64)
    vlan: Optional[int] = VmxKey("vlan", default=7)
    label: str = VmxKey("label", omitempty=True, default="primary")
    nics: List[Nic] = VmxKey("ethernet", default_factory=lambda: [Nic(present=True)])


texts = st.text(alphabet=VALUE_ALPHABET, max_size=30)
nics = st.builds(Nic, present=st.booleans(), name=texts)
records = st.builds(
    Record,
    flag=st.booleans(),
    count=st.integers(),
    label=texts,
    nics=st.lists(nics, max_size=12),
)
tuned = st.builds(
    Tuned,
    enabled=st.booleans(),
    size=st.integers(),
    vlan=st.none() | st.integers(),
    label=texts,
    nics=st.lists(nics, max_size=4),
)


class TestCodecProperties:
    """Property-based tests for marshal/decode."""

    @given(record=records)
    def test_roundtrip(self, record: Record) -> None:
        """Test decode(marshal(r)) == r."""
        assert decode(Record, marshal(record)) == record

    @given(record=tuned)
    def test_roundtrip_with_defaults(self, record: Tuned) -> None:
        """Test that skipped fields do not come back as their defaults."""
        assert decode(Tuned, marshal(record)) == record

    @given(record=records)
    def test_deterministic(self, record: Record) -> None:
        assert marshal(record) == marshal(record)

    @given(record=records)
    def test_no_duplicate_keys(self, record: Record) -> None:
        data = marshal(record)
        assert len(parse_lines(data)) == data.count(b"\n")

    @given(record=records)
    def test_contiguous_indices(self, record: Record) -> None:
        """Test that element i is always encoded under ethernet<i>."""
        keys = list(parse_lines(marshal(record)))
        prefixes = [key.split(".")[0] for key in keys if key.startswith("ethernet")]
        assert list(dict.fromkeys(prefixes)) == [f"ethernet{i}" for i in range(len(record.nics))]
