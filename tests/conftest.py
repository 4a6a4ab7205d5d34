"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest


@pytest.fixture
def sample_vmx() -> bytes:
    """Hand-written VMX descriptor for decoding tests."""
    return (
        b'.encoding = "utf-8"\n'
        b'annotation = "Test VM"\n'
        b'virtualHW.version = "10"\n'
        b'virtualHW.productCompatibility = "hosted"\n'
        b'memsize = "1024"\n'
        b'numvcpus = "2"\n'
        b'mem.hotadd = "false"\n'
        b'displayName = "test"\n'
        b'guestOS = "other3xlinux-64"\n'
        b'msg.autoAnswer = "true"\n'
        b'ethernet0.startConnected = "true"\n'
        b'ethernet0.present = "true"\n'
        b'ethernet0.connectionType = "bridged"\n'
        b'ethernet0.virtualDev = "e1000"\n'
        b'ethernet0.wakeOnPcktRcv = "false"\n'
        b'ethernet0.addressType = "generated"\n'
        b'ethernet0.linkStatePropagation.enable = "true"\n'
        b'ethernet1.startConnected = "true"\n'
        b'ethernet1.present = "true"\n'
        b'ethernet1.connectionType = "nat"\n'
        b'ethernet1.virtualDev = "e1000"\n'
        b'ethernet1.wakeOnPcktRcv = "false"\n'
        b'ethernet1.addressType = "generated"\n'
    )
