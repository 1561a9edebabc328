# SPDX-License-Identifier: LGPL-3.0-or-later
from __future__ import annotations

from unittest.mock import Mock

import pytest
import yaml

from utmnet.cli.args.parser import build_parser, parse_args_with_config
from utmnet.core.exceptions import ConfigurationError


@pytest.fixture
def logger():
    return Mock()


def _write(tmp_path, name, data):
    p = tmp_path / name
    p.write_text(yaml.safe_dump(data))
    return str(p)


@pytest.mark.unit
class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])

        assert args.cmd is None
        assert args.utm_version == "4.6"
        assert args.retries == 1
        assert args.legacy_substring_match is False
        assert args.osascript_bin == "osascript"

    def test_cli_only(self, logger):
        args, conf, out_logger = parse_args_with_config(["--vm", "vm-1", "--timeout", "20"], logger=logger)

        assert conf == {}
        assert out_logger is logger
        assert args.cmd == "apply"
        assert args.vm == "vm-1"
        assert args.command_timeout == 20.0

    def test_yaml_drives_values(self, tmp_path, logger):
        cfg = _write(
            tmp_path,
            "vm.yaml",
            {
                "vm": "vm-yaml",
                "cmd": "show",
                "utm_version": "4.5",
                "retries": 3,
                "legacy_substring_match": True,
                "networks": [{"type": "private_network"}],
            },
        )

        args, conf, _ = parse_args_with_config(["--config", cfg], logger=logger)

        assert args.vm == "vm-yaml"
        assert args.cmd == "show"
        assert args.utm_version == "4.5"
        assert args.retries == 3
        assert args.legacy_substring_match is True
        assert conf["networks"] == [{"type": "private_network"}]

    def test_cli_overrides_yaml(self, tmp_path, logger):
        cfg = _write(tmp_path, "vm.yaml", {"vm": "vm-yaml", "cmd": "show"})

        args, _, _ = parse_args_with_config(["--config", cfg, "--vm", "vm-cli", "--cmd", "PLAN"], logger=logger)

        assert args.vm == "vm-cli"
        assert args.cmd == "plan"

    def test_plan_needs_no_vm(self, logger):
        args, _, _ = parse_args_with_config(["--cmd", "plan"], logger=logger)

        assert args.vm is None

    @pytest.mark.parametrize("cmd", ["apply", "show"])
    def test_vm_required(self, cmd, logger):
        with pytest.raises(ConfigurationError):
            parse_args_with_config(["--cmd", cmd], logger=logger)

    @pytest.mark.parametrize(
        "argv",
        [
            ["--vm", "v", "--cmd", "destroy"],
            ["--vm", "v", "--utm-version", "4.0"],
            ["--vm", "v", "--retries", "0"],
            ["--vm", "v", "--timeout", "-1"],
            ["--vm", "v", "--scripts-dir", "/definitely/not/here"],
        ],
    )
    def test_invalid_values(self, argv, logger):
        with pytest.raises(ConfigurationError):
            parse_args_with_config(argv, logger=logger)

    def test_unquoted_yaml_version_rejected(self, tmp_path, logger):
        p = tmp_path / "vm.yaml"
        p.write_text("vm: vm-yaml\nutm_version: 4.10\n")

        with pytest.raises(ConfigurationError) as ei:
            parse_args_with_config(["--config", str(p)], logger=logger)

        assert "quote the version" in ei.value.msg
        assert ei.value.context["utm_version"] == 4.1

    def test_quoted_yaml_version_accepted(self, tmp_path, logger):
        p = tmp_path / "vm.yaml"
        p.write_text('vm: vm-yaml\nutm_version: "4.10"\n')

        args, _, _ = parse_args_with_config(["--config", str(p)], logger=logger)

        assert args.utm_version == "4.10"

    def test_dump_config_exits(self, tmp_path, logger, capsys):
        cfg = _write(tmp_path, "vm.yaml", {"vm": "vm-yaml"})

        with pytest.raises(SystemExit) as ei:
            parse_args_with_config(["--config", cfg, "--dump-config"], logger=logger)

        assert ei.value.code == 0
        assert yaml.safe_load(capsys.readouterr().out) == {"vm": "vm-yaml"}
