# SPDX-License-Identifier: LGPL-3.0-or-later
import unittest
from unittest.mock import Mock

from utmnet.network.base_adapters import BaseAdapterGuarantor
from utmnet.network.context import ReconcileContext, ReconcileReport
from utmnet.network.model import AdapterRecord, NetworkMode


class TestBaseAdapterGuarantor(unittest.TestCase):
    def setUp(self):
        self.reader = Mock()
        self.reader.list_adapters.return_value = {}
        self.reader.list_native_interfaces.return_value = {}
        self.mutator = Mock()
        self.build_args = Mock(side_effect=lambda net_id, mode: (f"netdev-{net_id}", f"device-{net_id}"))
        self.ctx = ReconcileContext(vm_id="vm-1", logger=Mock(), ui=Mock())
        self.guarantor = BaseAdapterGuarantor(self.reader, self.mutator, build_args=self.build_args)

    def test_adds_pair_in_one_call(self):
        added = self.guarantor.ensure_adapter_exists(self.ctx, 0, NetworkMode.SHARED)

        self.assertTrue(added)
        self.mutator.add_arguments.assert_called_once_with("vm-1", ["netdev-net0", "device-net0"])
        self.build_args.assert_called_once_with("net0", NetworkMode.SHARED)

    def test_complete_record_skips_interface_lookup(self):
        self.reader.list_adapters.return_value = {"net1": AdapterRecord("net1", True, True)}
        report = ReconcileReport()

        added = self.guarantor.ensure_adapter_exists(self.ctx, 1, NetworkMode.EMULATED, report)

        self.assertFalse(added)
        self.assertEqual(report.skipped, ["net1"])
        self.reader.list_native_interfaces.assert_not_called()
        self.mutator.add_arguments.assert_not_called()

    def test_native_interface_counts(self):
        self.reader.list_native_interfaces.return_value = {1: "emulated"}

        self.assertFalse(self.guarantor.ensure_adapter_exists(self.ctx, 1, NetworkMode.EMULATED))
        self.mutator.add_arguments.assert_not_called()

    def test_ensure_walks_both_base_adapters(self):
        report = self.guarantor.ensure(self.ctx)

        self.assertEqual(report.added, ["net0", "net1"])
        self.ctx.ui.detail.assert_called_once_with("Ensuring base network adapters exist...")
        self.assertEqual(self.mutator.add_arguments.call_count, 2)

    def test_custom_base_set(self):
        guarantor = BaseAdapterGuarantor(
            self.reader, self.mutator, build_args=self.build_args, base_adapters=[(0, NetworkMode.SHARED)]
        )

        report = guarantor.ensure(self.ctx)

        self.assertEqual(report.added, ["net0"])


if __name__ == "__main__":
    unittest.main()
