# SPDX-License-Identifier: LGPL-3.0-or-later
# -*- coding: utf-8 -*-
# utmnet/cli/help_texts.py
from __future__ import annotations

YAML_EXAMPLE = """\
  # vm-networks.yaml
  vm: 6D1F3C2A-7E55-4B0B-9C1E-0F3A2B4C5D6E
  cmd: apply              # apply | plan | show
  utm_version: "4.6"
  networks:
    - type: forwarded_port  # handled elsewhere, never an adapter
      guest: 22
      host: 2222
    - type: private_network # adapter 3 in UTM (net2)
      ip: 192.168.1.50
    - type: public_network  # adapter 4 in UTM (net3)
      bridge: en1
      utm__mac: auto

  utmnet --config vm-networks.yaml
  utmnet --config vm-networks.yaml --cmd plan --json
"""

FEATURE_SUMMARY = """\
  • apply: keeps net0 (shared/NAT) and net1 (emulated/SSH), then rebuilds
    every declared adapter from a clean slate on each run
  • plan:  prints the compiled adapters and their QEMU arguments, no UTM access
  • show:  prints the adapters UTM currently has, read-only
  • utm__<key> options override plain <key> options for this provider
  • unsupported network types are skipped (they still occupy their slot)
"""
