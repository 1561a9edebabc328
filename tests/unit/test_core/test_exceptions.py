# SPDX-License-Identifier: LGPL-3.0-or-later
"""Tests for the error hierarchy and CLI formatting."""
from __future__ import annotations

import subprocess

import pytest

from utmnet.core.exceptions import (
    ConfigurationError,
    ExternalCommandError,
    Fatal,
    UtmNetError,
    format_exception_for_cli,
    wrap_config,
    wrap_external,
)


@pytest.mark.unit
class TestExceptionHierarchy:
    def test_base_exception_creation(self):
        err = UtmNetError(code=1, msg="Test error")

        assert err.code == 1
        assert err.msg == "Test error"
        assert err.cause is None
        assert err.context is None
        assert str(err) == "Test error"

    def test_configuration_error_is_fatal(self):
        err = wrap_config("missing vm", vm=None)

        assert isinstance(err, ConfigurationError)
        assert isinstance(err, Fatal)
        assert err.code == 2

    def test_external_command_error_is_not_fatal(self):
        err = ExternalCommandError(code=60, msg="osascript failed")

        assert isinstance(err, UtmNetError)
        assert not isinstance(err, Fatal)

    def test_exit_code_is_clamped(self):
        assert UtmNetError(code=999, msg="x").code == 255
        assert UtmNetError(code=-3, msg="x").code == 1
        assert UtmNetError(code="nope", msg="x").code == 1

    def test_multiline_message_collapsed(self):
        err = UtmNetError(code=1, msg="first\nsecond\r\n  third")

        assert err.msg == "first second third"

    def test_with_context(self):
        err = UtmNetError(code=1, msg="Error").with_context(vm="abc", script="x.applescript")

        assert err.context == {"vm": "abc", "script": "x.applescript"}


@pytest.mark.unit
class TestWrapExternal:
    def test_message_and_context(self):
        cause = subprocess.CalledProcessError(1, ["osascript", "a.applescript"], stderr="boom")
        err = wrap_external("a.applescript", cause, cmd=["osascript", "a.applescript", "vm-1"], returncode=1)

        assert isinstance(err, ExternalCommandError)
        assert err.code == 60
        assert err.msg.startswith("a.applescript failed:")
        assert err.cause is cause
        assert err.context["script"] == "a.applescript"
        assert err.context["cmd"] == "osascript a.applescript vm-1"
        assert err.context["returncode"] == 1

    def test_without_cause(self):
        err = wrap_external("b.applescript")

        assert err.msg == "b.applescript failed: failed"
        assert "cmd" not in err.context


@pytest.mark.unit
class TestFormatting:
    def test_to_dict(self):
        err = UtmNetError(code=3, msg="bad", cause=ValueError("inner")).with_context(vm="v")
        d = err.to_dict(include_cause=True)

        assert d["type"] == "UtmNetError"
        assert d["code"] == 3
        assert d["context"] == {"vm": "v"}
        assert d["cause"] == {"type": "ValueError", "message": "inner"}

    def test_format_for_cli_verbosity(self):
        err = UtmNetError(code=1, msg="bad", cause=OSError("disk")).with_context(vm="v")

        assert format_exception_for_cli(err) == "bad"
        assert format_exception_for_cli(err, verbose=1) == "bad [vm='v']"
        assert "cause: OSError: disk" in format_exception_for_cli(err, verbose=2)

    def test_format_foreign_exception(self):
        assert format_exception_for_cli(RuntimeError("x")) == "x"
        assert format_exception_for_cli(RuntimeError("x"), verbose=2) == "RuntimeError: x"
        assert format_exception_for_cli(RuntimeError("")) == "RuntimeError"
