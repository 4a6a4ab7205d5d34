"""End-to-end integration tests."""

from __future__ import annotations

import enum
import re
from typing import List, Optional

import pytest
from pydantic import Field

from vmxcodec import (
    TypeMismatchError,
    VmxKey,
    VmxModel,
    decode,
    key_layout,
    marshal,
    unmarshal,
)


class ConnectionType(str, enum.Enum):
    """Network connection type."""

    BRIDGED = "bridged"
    NAT = "nat"
    HOSTONLY = "hostonly"


class VirtualHardware(VmxModel):
    """Virtual hardware compatibility."""

    version: int = VmxKey("version", default=10, ge=3, le=21)
    compat: str = VmxKey("productCompatibility", default="hosted")


class Ethernet(VmxModel):
    """Virtual network adapter."""

    start_connected: bool = VmxKey("startConnected", default=True)
    present: bool = VmxKey("present", default=True)
    connection_type: ConnectionType = VmxKey("connectionType", default=ConnectionType.NAT)
    virtual_dev: str = VmxKey("virtualDev", default="e1000")
    address_type: str = VmxKey("addressType", default="generated")
    address: str = VmxKey("address", omitempty=True, default="")
    link_state: bool = VmxKey("linkStatePropagation.enable", omitempty=True, default=False)


class Disk(VmxModel):
    """Disk attached to a SCSI controller."""

    present: bool = VmxKey("present", default=True)
    file_name: str = VmxKey("fileName", default="")


class ScsiController(VmxModel):
    """SCSI controller with its disks."""

    present: bool = VmxKey("present", default=True)
    virtual_dev: str = VmxKey("virtualDev", default="lsilogic")
    disks: List[Disk] = VmxKey("disk", default_factory=list)


class Tools(VmxModel):
    """VMware tools settings."""

    sync_time: bool = VmxKey("syncTime", default=False)


class VirtualMachine(VmxModel):
    """VM descriptor."""

    encoding: str = VmxKey(".encoding", default="UTF-8")
    config_version: int = VmxKey("config.version", default=8)
    hardware: VirtualHardware = VmxKey("virtualHW", default_factory=VirtualHardware)
    display_name: str = VmxKey("displayName")
    annotation: str = VmxKey("annotation", omitempty=True, default="")
    guest_os: str = VmxKey("guestOS", default="other")
    memsize: int = VmxKey("memsize", default=512, ge=4)
    numvcpus: int = VmxKey("numvcpus", default=1, ge=1)
    mem_hot_add: bool = VmxKey("mem.hotadd", default=False)
    scsi: List[ScsiController] = VmxKey("scsi", default_factory=list)
    ethernet: List[Ethernet] = VmxKey("ethernet", default_factory=list)
    tools: Optional[Tools] = VmxKey("tools", default=None)
    host_path: str = Field(default="", description="Location on disk, not stored")


@pytest.fixture
def vm() -> VirtualMachine:
    return VirtualMachine(
        display_name="build-agent",
        guest_os="ubuntu-64",
        memsize=4096,
        numvcpus=4,
        scsi=[
            ScsiController(
                disks=[Disk(file_name="agent.vmdk"), Disk(file_name="data.vmdk")],
            )
        ],
        ethernet=[
            Ethernet(connection_type=ConnectionType.BRIDGED, link_state=True),
            Ethernet(address_type="static", address="00:50:56:00:00:01"),
        ],
        host_path="/vms/build-agent",
    )


class TestEndToEndWorkflow:
    """Test complete end-to-end workflows."""

    def test_encode_layout(self, vm: VirtualMachine) -> None:
        """Test the exact text produced for a full VM."""
        assert marshal(vm).decode("utf-8") == (
            '.encoding = "UTF-8"\n'
            'config.version = "8"\n'
            'virtualHW.version = "10"\n'
            'virtualHW.productCompatibility = "hosted"\n'
            'displayName = "build-agent"\n'
            'guestOS = "ubuntu-64"\n'
            'memsize = "4096"\n'
            'numvcpus = "4"\n'
            'mem.hotadd = "false"\n'
            'scsi0.present = "true"\n'
            'scsi0.virtualDev = "lsilogic"\n'
            'scsi0.disk0.present = "true"\n'
            'scsi0.disk0.fileName = "agent.vmdk"\n'
            'scsi0.disk1.present = "true"\n'
            'scsi0.disk1.fileName = "data.vmdk"\n'
            'ethernet0.startConnected = "true"\n'
            'ethernet0.present = "true"\n'
            'ethernet0.connectionType = "bridged"\n'
            'ethernet0.virtualDev = "e1000"\n'
            'ethernet0.addressType = "generated"\n'
            'ethernet0.linkStatePropagation.enable = "true"\n'
            'ethernet1.startConnected = "true"\n'
            'ethernet1.present = "true"\n'
            'ethernet1.connectionType = "nat"\n'
            'ethernet1.virtualDev = "e1000"\n'
            'ethernet1.addressType = "static"\n'
            'ethernet1.address = "00:50:56:00:00:01"\n'
        )

    def test_roundtrip(self, vm: VirtualMachine) -> None:
        """Test that everything but untagged fields survives a round-trip."""
        decoded = decode(VirtualMachine, marshal(vm))
        assert decoded.host_path == ""
        assert decoded == vm.model_copy(update={"host_path": ""})

    def test_roundtrip_is_stable(self, vm: VirtualMachine) -> None:
        data = marshal(vm)
        assert marshal(decode(VirtualMachine, data)) == data

    def test_decode_required_field_missing(self) -> None:
        """Test that required fields start at their zero value."""
        decoded = decode(VirtualMachine, b'memsize = "64"\n')
        assert decoded.display_name == ""
        assert decoded.memsize == 64
        assert decoded.scsi == []

    def test_decode_hand_written_file(self) -> None:
        """Test decoding a descriptor with extra keys and blank lines."""
        data = (
            b'.encoding = "UTF-8"\n'
            b'\n'
            b'displayName = "legacy"\r\n'
            b'uuid.bios = "56 4d 12 34"\n'
            b'tools.syncTime = "true"\n'
            b'ethernet0.connectionType = "hostonly"\n'
            b'ethernet0.generatedAddress = "00:0c:29:aa:bb:cc"\n'
            b'virtualHW.version = "7"\n'
        )
        decoded = VirtualMachine.from_vmx(data)
        assert decoded.display_name == "legacy"
        assert decoded.hardware.version == 7
        assert decoded.tools == Tools(sync_time=True)
        assert [nic.connection_type for nic in decoded.ethernet] == [ConnectionType.HOSTONLY]

    def test_unmarshal_into_existing(self, vm: VirtualMachine) -> None:
        """Test updating a populated record in place."""
        unmarshal(b'memsize = "8192"\nethernet0.present = "false"\n', vm)
        assert vm.memsize == 8192
        assert vm.display_name == "build-agent"
        assert len(vm.ethernet) == 1
        assert vm.ethernet[0].present is False

    def test_bound_violation(self) -> None:
        with pytest.raises(TypeMismatchError, match="memsize"):
            decode(VirtualMachine, b'memsize = "2"\n')

    def test_layout_matches_encoding(self, vm: VirtualMachine) -> None:
        """Test that every encoded key fits a layout path."""
        patterns = [
            re.compile(re.escape(spec.path).replace(r"\{n\}", r"[0-9]+") + "$")
            for spec in key_layout(VirtualMachine)
        ]
        for line in marshal(vm).decode().splitlines():
            key = line.split(" = ")[0]
            assert any(pattern.match(key) for pattern in patterns), key
