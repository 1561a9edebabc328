# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

from unittest.mock import Mock

import pytest

from utmnet.driver.state import (
    AdapterStateReader,
    parse_adapter_records,
    parse_native_interfaces,
    parse_raw_arguments,
)

ADAPTERS_OUTPUT = """\
Arg 0: -netdev vmnet-shared,id=net0
netdev:net0
Arg 1: -device e1000,mac=02:1c:42:aa:bb:cc,netdev=net0
device:net0
Arg 2: -m 4096
Arg 3: -netdev vmnet-host,id=net2
netdev:net2
"""


@pytest.mark.unit
class TestParsers:
    def test_adapter_records(self):
        records = parse_adapter_records(ADAPTERS_OUTPUT)

        assert set(records) == {"net0", "net2"}
        assert records["net0"].complete
        assert records["net2"].netdev_present
        assert not records["net2"].device_present
        assert not records["net2"].complete
        assert records["net0"].reserved
        assert not records["net2"].reserved

    def test_raw_arguments_in_order(self):
        assert parse_raw_arguments(ADAPTERS_OUTPUT) == [
            "-netdev vmnet-shared,id=net0",
            "-device e1000,mac=02:1c:42:aa:bb:cc,netdev=net0",
            "-m 4096",
            "-netdev vmnet-host,id=net2",
        ]

    def test_arguments_keep_inner_colons(self):
        assert parse_raw_arguments("Arg 0: -chardev socket,path=C:\\x\n") == ["-chardev socket,path=C:\\x"]

    def test_arguments_keep_surrounding_whitespace(self):
        out = "Arg 0: -netdev vmnet-host,id=net5 \r\n  Arg 1: -device e1000,mac=02:00:00:00:00:05,netdev=net5\n"
        assert parse_raw_arguments(out) == [
            "-netdev vmnet-host,id=net5 ",
            "-device e1000,mac=02:00:00:00:00:05,netdev=net5",
        ]

    def test_native_interfaces(self):
        assert parse_native_interfaces("nic0,shared\nnic1,emulated\nnoise\n") == {0: "shared", 1: "emulated"}

    @pytest.mark.parametrize("text", ["", None, "garbage\n\n", "netdev:\ndevice:\n"])
    def test_empty_or_noise(self, text):
        assert parse_adapter_records(text) == {}
        assert parse_raw_arguments(text) == []
        assert parse_native_interfaces(text) == {}


@pytest.mark.unit
class TestAdapterStateReader:
    def test_reads_fresh_every_call(self):
        channel = Mock()
        channel.read_network_adapters.return_value = ADAPTERS_OUTPUT
        channel.read_network_interfaces.return_value = "nic0,shared\n"
        reader = AdapterStateReader(channel)

        reader.list_adapters("vm-1")
        reader.list_adapters("vm-1")
        args = reader.list_raw_arguments("vm-1")
        nics = reader.list_native_interfaces("vm-1")

        assert channel.read_network_adapters.call_count == 3
        channel.read_network_adapters.assert_called_with("vm-1")
        assert len(args) == 4
        assert nics == {0: "shared"}
