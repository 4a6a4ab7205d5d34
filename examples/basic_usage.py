#!/usr/bin/env python3
"""Basic usage example for vmxcodec.

This example demonstrates:
1. Defining a VM descriptor with tagged Pydantic records
2. Encoding to VMX text
3. Decoding back to a record
4. Listing the key layout
"""

from __future__ import annotations

import enum

from pydantic import Field

from vmxcodec import VmxKey, VmxModel, decode, key_layout, marshal


class ConnectionType(str, enum.Enum):
    """Network connection type of a virtual NIC."""

    BRIDGED = "bridged"
    NAT = "nat"
    HOSTONLY = "hostonly"


class VirtualHardware(VmxModel):
    """Virtual hardware compatibility settings."""

    version: str = VmxKey("version", default="")
    compat: str = VmxKey("productCompatibility", default="")


class Ethernet(VmxModel):
    """Virtual network adapter."""

    start_connected: bool = VmxKey("startConnected", default=False)
    present: bool = VmxKey("present", default=False)
    connection_type: ConnectionType = VmxKey("connectionType", default=ConnectionType.NAT)
    virtual_dev: str = VmxKey("virtualDev", default="e1000")
    address_type: str = VmxKey("addressType", default="generated")
    link_state: bool = VmxKey("linkStatePropagation.enable", omitempty=True, default=False)


class VirtualMachine(VmxModel):
    """Top-level VM descriptor."""

    encoding: str = VmxKey(".encoding", default="utf-8")
    annotation: str = VmxKey("annotation", omitempty=True, default="")
    hardware: VirtualHardware = VmxKey("virtualHW", default_factory=VirtualHardware)
    memsize: int = VmxKey("memsize", default=0, ge=0)
    numvcpus: int = VmxKey("numvcpus", default=1, ge=1)
    display_name: str = VmxKey("displayName", default="")
    guest_os: str = VmxKey("guestOS", default="other")
    ethernet: list[Ethernet] = VmxKey("ethernet", default_factory=list)
    notes: str = Field(default="", description="Not written to the descriptor")


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("vmxcodec Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Creating a VM descriptor...")
    vm = VirtualMachine(
        hardware=VirtualHardware(version="10", compat="hosted"),
        memsize=1024,
        numvcpus=2,
        display_name="test",
        guest_os="other3xlinux-64",
        ethernet=[
            Ethernet(start_connected=True, present=True,
                     connection_type=ConnectionType.BRIDGED, link_state=True),
            Ethernet(start_connected=True, present=True),
        ],
    )
    print()

    print("2. Key layout...")
    for spec in key_layout(VirtualMachine):
        print(f"   {spec.path:<40} {spec.type_name}")
    print()

    print("3. Encoding to VMX text...")
    data = marshal(vm)
    print(data.decode("utf-8"))

    print("4. Decoding from VMX text...")
    decoded = decode(VirtualMachine, data)
    print(f"   Display name: {decoded.display_name}")
    print(f"   NICs: {len(decoded.ethernet)}")
    print()

    print("5. Verifying round-trip...")
    if decoded == vm:
        print("   ✓ Round-trip successful! Records match.")
    else:
        print("   ✗ Round-trip failed! Records don't match.")
    print()


if __name__ == "__main__":
    main()
